# Observers of the generation loop - console output and in-memory history


from abc import ABC, abstractmethod

import pandas as pd


class Reporter(ABC):
    """
    The Base Template for all Reporters.
    The Simulator hands every reported winner to each reporter whose
    interval matches the generation index.
    """

    def __init__(self, interval: int = 1, **kwargs):
        if interval < 1:
            raise ValueError(f"Reporter interval must be at least 1, got {interval}")
        self.interval = interval

    def is_reporting_time(self, generation: int) -> bool:
        """Standard check for all reporters."""
        return generation % self.interval == 0

    @abstractmethod
    def report(self, generation: int, sequence: str, score: int):
        """Must be implemented by child classes."""
        pass

    def finalize(self, result):
        """Optional hook for end-of-run tasks."""
        pass


class ConsoleReporter(Reporter):
    """
    Prints `<generation>: <sequence>` for every reported winner, and the
    run summary when the search ends.
    """

    def __init__(self, interval: int = 1, stream=None):
        super().__init__(interval)
        self.stream = stream

    def _print(self, *args):
        print(*args, file=self.stream)

    def report(self, generation: int, sequence: str, score: int):
        self._print(f"{generation}: {sequence}")

    def finalize(self, result):
        if result.cancelled:
            self._print("User escape")
        self._print(f"Finished after {result.generations} generations.")
        self._print(f"It took {result.elapsed_ticks} ticks ({result.elapsed_seconds:f} seconds).")


class HistoryReporter(Reporter):
    """
    Keeps every reported winner in memory and exposes them as a
    pandas DataFrame (generation, sequence, score).
    """

    COLUMNS = ["generation", "sequence", "score"]

    def __init__(self, interval: int = 1):
        super().__init__(interval)
        self.history = []
        self.result = None

    def report(self, generation: int, sequence: str, score: int):
        self.history.append({
            "generation": generation,
            "sequence": sequence,
            "score": score
        })

    def finalize(self, result):
        self.result = result

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self.history, columns=self.COLUMNS)
