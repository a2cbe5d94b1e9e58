# Mutation models - how to mutate the candidates

import logging
from abc import ABC, abstractmethod

import numpy as np

from weaselsim.genome.sequence import Genome

logger = logging.getLogger(__name__)


class Mutator(ABC):
    """
    Abstract Base Class for all mutation models.
    Ensures that any new mutator implements the 'apply' method.
    """

    def __init__(self, rate: float):
        if not 0.0 <= rate <= 1.0:
            raise ValueError(f"Mutation probability must be in [0, 1], got {rate}")
        self.rate = rate

    @abstractmethod
    def apply(self, population, rng: np.random.Generator):
        pass


class UniformMutator(Mutator):
    """
    Every character of every mutable candidate is redrawn with
    probability `rate`, the new symbol picked uniformly from the
    whole alphabet (so it may come out unchanged).

    Candidate 0 is never mutated: it carries the previous winner
    forward untouched.
    """

    def __init__(self, genome: Genome, **kwargs):
        super().__init__(**kwargs)
        self.genome = genome

    def apply(self, population, rng: np.random.Generator):
        matrix = population.get_matrix()
        mutable = matrix[1:]
        if mutable.size == 0:
            return

        # Decide which sites mutate
        mutation_mask = rng.random(mutable.shape) < self.rate
        num_mutations = np.count_nonzero(mutation_mask)
        if num_mutations == 0:
            return

        # One fresh draw per mutating site, walked through the alphabet bins
        new_vals = self.genome.pick_symbols(rng.random(num_mutations))
        mutable[mutation_mask] = new_vals
        logger.debug("Mutated %d sites", num_mutations)
