# Sequence representation (NumPy arrays of alphabet indices)


import numpy as np

DEFAULT_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ "
DEFAULT_FILLER = "A"


class Genome:
    """
    Defines the alphabet of the sequences being evolved.
    Symbols are stored as their index in the alphabet:
    0:A, 1:B, ... 25:Z, 26:' '
    """

    def __init__(self, alphabet: str = DEFAULT_ALPHABET, filler: str = DEFAULT_FILLER):
        if len(alphabet) == 0:
            raise ValueError("Alphabet must contain at least one symbol.")
        if len(set(alphabet)) != len(alphabet):
            raise ValueError(f"Alphabet contains repeated symbols: {alphabet!r}")
        if len(filler) != 1 or filler not in alphabet:
            raise ValueError(f"Filler must be a single symbol of the alphabet, got {filler!r}")

        self.alphabet = np.array(list(alphabet))
        self.filler = filler
        self._mapping = {ch: i for i, ch in enumerate(alphabet)}

        # Upper edge of every bin of the cumulative-probability walk: 1/k, 2/k ... 1
        self.cumulative = np.arange(1, self.size + 1) / self.size

    @property
    def size(self) -> int:
        return len(self.alphabet)

    @property
    def filler_index(self) -> int:
        return self._mapping[self.filler]

    def encode(self, text: str) -> np.ndarray:
        """Converts a string into a NumPy array of alphabet indices."""
        try:
            return np.array([self._mapping[ch] for ch in text], dtype=np.uint8)
        except KeyError as e:
            raise ValueError(f"Invalid symbol {e} (allowed: {''.join(self.alphabet)!r})")

    def to_string(self, sequence_array: np.ndarray) -> str:
        """Converts a NumPy integer array back into a string."""
        return "".join(self.alphabet[sequence_array])

    def filled(self, length: int) -> np.ndarray:
        """The filler symbol repeated `length` times."""
        return np.full(length, self.filler_index, dtype=np.uint8)

    def pick_symbols(self, draws: np.ndarray) -> np.ndarray:
        """
        Cumulative-probability walk over the alphabet.
        [0, 1) is cut into `size` equal bins in alphabet order and every
        draw is mapped to the index of the bin containing it.
        :param draws: Uniform values in [0, 1).
        :return: uint8 array of alphabet indices, same shape as `draws`.
        """
        picks = np.searchsorted(self.cumulative, draws, side='right')
        # float rounding of the last edge can push a draw just past it
        return np.minimum(picks, self.size - 1).astype(np.uint8)


class SequenceHandler:
    """
    Utility to handle bulk operations on sequences.
    Using a 2D NumPy array [Population_Size, Sequence_Length].
    """

    @staticmethod
    def create_population_matrix(size: int, master_sequence: np.ndarray) -> np.ndarray:
        """Everyone starts as a clone of the master sequence."""
        return np.tile(master_sequence, (size, 1))

    @staticmethod
    def count_matches(seq1, seq2):
        """Count positions where the two sequences agree."""
        seq1 = np.asarray(seq1)
        seq2 = np.asarray(seq2)
        if seq1.shape[-1] != seq2.shape[-1]:
            raise ValueError(f"Sequence lengths differ: {seq1.shape[-1]} != {seq2.shape[-1]}")
        return np.count_nonzero(seq1 == seq2, axis=-1)
