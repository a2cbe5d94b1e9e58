# Cooperative cancellation, polled once per generation by the Simulator

import logging
import signal

logger = logging.getLogger(__name__)


class CancellationToken:
    """A flag the generation loop checks before starting each generation."""

    def __init__(self):
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    def is_cancelled(self) -> bool:
        return self._cancelled


class InterruptToken(CancellationToken):
    """
    Cancelled by Ctrl-C (SIGINT). The current generation finishes and
    the run stops cleanly instead of raising KeyboardInterrupt.
    Use as a context manager so the previous handler is restored.
    """

    def __init__(self, signum=signal.SIGINT):
        super().__init__()
        self.signum = signum
        self._previous = None

    def _handle(self, signum, frame):
        logger.info("Received signal %s, stopping after this generation", signum)
        self.cancel()

    def __enter__(self):
        self._previous = signal.signal(self.signum, self._handle)
        return self

    def __exit__(self, exc_type, exc, tb):
        signal.signal(self.signum, self._previous)
        return False
