import numpy as np

from weaselsim.genome.sequence import SequenceHandler, Genome


class Population:
    """
    Manages the pool of candidate sequences using a NumPy matrix.
    Rows = Candidates
    Columns = Character Positions
    """

    def __init__(self, matrix: np.ndarray):
        if matrix.ndim != 2 or matrix.shape[0] < 1 or matrix.shape[1] < 1:
            raise ValueError(f"Population matrix must be non-empty and 2D, got shape {matrix.shape}")
        self.matrix = matrix                            # the main object
        self.size = matrix.shape[0]                     # number of candidates, fixed for the run
        self.length = matrix.shape[1]                   # every candidate has exactly this length

    @classmethod
    def create_filled(cls, size: int, genome: Genome, length: int):
        """
        Initializes a population where every candidate is the filler
        symbol repeated `length` times.
        :param size: Integer, number of candidates in the population.
        :param genome: Genome object defining the alphabet and filler.
        :param length: Length of every candidate.
        """
        if size < 1:
            raise ValueError(f"Population size must be at least 1, got {size}")
        if length < 1:
            raise ValueError(f"Sequence length must be at least 1, got {length}")

        matrix = SequenceHandler.create_population_matrix(size, genome.filled(length))
        return cls(matrix)

    def replicate(self, winner: int):
        """
        Overwrites every candidate with a copy of the winner's row.
        """
        # Copy first: the winner row is itself part of the broadcast target
        self.matrix[:] = self.matrix[winner].copy()

    def get_count(self) -> int:
        return self.size

    def get_matrix(self) -> np.ndarray:
        return self.matrix

    def get_candidate(self, index: int) -> np.ndarray:
        return self.matrix[index]
