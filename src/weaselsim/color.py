# ANSI escape codes for colored terminal output


class fg:
    """Foreground colors. Use as print(fg.RED, "text", fg.RESET)."""
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RESET = "\033[0m"
