# Main generation loop
# while RUNNING:
#   Check for cancellation
#   Mutate the population (candidate 0 is kept as is)
#   Score every candidate and select the winner
#   Report the winner
#   Stop on an exact match, else replicate the winner into every slot


import logging
import time
from enum import Enum

from weaselsim.evolution.fitness import select_winner

logger = logging.getLogger(__name__)


class RunState(Enum):
    RUNNING = "running"
    TERMINATED = "terminated"


class StopReason(Enum):
    MATCHED = "matched"
    CANCELLED = "cancelled"
    EXHAUSTED = "exhausted"


class RunResult:
    """Summary of a finished run."""

    def __init__(self, generations, best, best_score, reason, elapsed_ticks, elapsed_seconds):
        self.generations = generations
        self.best = best
        self.best_score = best_score
        self.reason = reason
        self.elapsed_ticks = elapsed_ticks          # microseconds of wall-clock time
        self.elapsed_seconds = elapsed_seconds

    @property
    def matched(self) -> bool:
        return self.reason is StopReason.MATCHED

    @property
    def cancelled(self) -> bool:
        return self.reason is StopReason.CANCELLED

    def __repr__(self):
        return (f"RunResult(generations={self.generations}, best={self.best!r}, "
                f"best_score={self.best_score}, reason={self.reason.value})")


class Simulator:
    """The engine that runs the generations."""

    def __init__(self, population, genome, fitness_model, mutator, reporters, rng,
                 cancel_token=None, max_generations=None):
        if population.length != fitness_model.max_score:
            raise ValueError(
                f"Candidate length {population.length} != target length {fitness_model.max_score}"
            )
        self.population = population
        self.genome = genome
        self.fitness_model = fitness_model
        self.mutator = mutator
        self.reporters = reporters
        self.rng = rng
        self.cancel_token = cancel_token
        self.max_generations = max_generations or None
        self.state = RunState.RUNNING
        self.current_generation = 0

    def _to_string(self, index):
        return self.genome.to_string(self.population.get_candidate(index))

    def run(self) -> RunResult:
        """The main search loop"""
        start = time.perf_counter_ns()
        best, best_score = self._to_string(0), 0
        reason = None

        while self.state is RunState.RUNNING:
            if self.cancel_token is not None and self.cancel_token.is_cancelled():
                reason = StopReason.CANCELLED
                self.state = RunState.TERMINATED
                break

            # 1. Mutate (Variation)
            self.mutator.apply(self.population, self.rng)

            # 2. Calculate Fitness and select the winner
            fitness_values = self.fitness_model.evaluate_population(self.population)
            winner = select_winner(fitness_values)
            best_score = int(fitness_values[winner])
            best = self._to_string(winner)
            logger.debug("Generation %d: winner %d scored %d", self.current_generation, winner, best_score)

            # 3. Report
            if best_score > 0:
                self.notify(self.current_generation, best, best_score)

            if best_score == self.fitness_model.max_score:
                reason = StopReason.MATCHED
                self.state = RunState.TERMINATED
                self.current_generation += 1
                break

            # 4. Replicate the winner into every slot
            self.population.replicate(winner)
            self.current_generation += 1

            if self.max_generations is not None and self.current_generation >= self.max_generations:
                reason = StopReason.EXHAUSTED
                self.state = RunState.TERMINATED

        elapsed_ns = time.perf_counter_ns() - start
        result = RunResult(
            generations=self.current_generation,
            best=best,
            best_score=best_score,
            reason=reason,
            elapsed_ticks=elapsed_ns // 1000,
            elapsed_seconds=elapsed_ns / 1e9
        )
        logger.info("Search %s after %d generations: %r", reason.value, self.current_generation, best)

        for reporter in self.reporters:
            reporter.finalize(result)
        return result

    def notify(self, generation, sequence, score):
        """Hand the generation's winner to every reporter due this generation."""
        for reporter in self.reporters:
            if reporter.is_reporting_time(generation):
                reporter.report(generation, sequence, score)
