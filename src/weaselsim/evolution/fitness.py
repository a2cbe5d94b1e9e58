# Fitness scoring and selection

from abc import ABC, abstractmethod

import numpy as np

from weaselsim.genome.sequence import SequenceHandler
from weaselsim.population.container import Population


def match_score(seq1, seq2) -> int:
    """Number of positions where the two sequences hold the same symbol."""
    return int(SequenceHandler.count_matches(seq1, seq2))


def select_winner(fitness_values: np.ndarray) -> int:
    """
    Index of the highest score. Ties go to the lowest index, and an
    all-zero population still yields index 0.
    """
    # argmax returns the first occurrence of the maximum
    return int(np.argmax(fitness_values))


class FitnessModel(ABC):
    """
    The Base Template for all fitness models.
    """
    def __init__(self, reference_sequence: np.ndarray):
        self.reference_sequence = np.array(reference_sequence, dtype=np.uint8)

    @property
    def max_score(self) -> int:
        return len(self.reference_sequence)

    @abstractmethod
    def evaluate_population(self, population: Population) -> np.ndarray:
        """
        Must return a 1D NumPy array of fitness scores
        corresponding to each candidate in the population.
        :param population: The Population to evaluate.
        :return: A NumPy array of fitness scores.
        """
        pass


class MatchFitness(FitnessModel):
    """
    Hamming similarity to the target: one point per position that
    matches exactly, no partial credit.
    """

    def score(self, candidate: np.ndarray) -> int:
        return match_score(candidate, self.reference_sequence)

    def evaluate_population(self, population: Population) -> np.ndarray:
        matrix = population.get_matrix()
        if matrix.shape[1] != self.max_score:
            raise ValueError(
                f"Candidate length {matrix.shape[1]} != target length {self.max_score}"
            )
        # matrix == reference_sequence uses NumPy broadcasting
        return np.sum(matrix == self.reference_sequence, axis=1)
