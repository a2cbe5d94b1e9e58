"""Tests for the generation loop."""

from __future__ import annotations

import numpy as np
import pytest

from weaselsim.cancellation import CancellationToken
from weaselsim.evolution.fitness import MatchFitness
from weaselsim.evolution.mutator import UniformMutator
from weaselsim.genome.sequence import Genome
from weaselsim.io.reporter import HistoryReporter, Reporter
from weaselsim.population.container import Population
from weaselsim.simulator import RunState, Simulator, StopReason


def make_simulator(target: str, rate: float, size: int, seed: int = 0, reporters=None, **kwargs) -> Simulator:
    genome = Genome()
    encoded = genome.encode(target)
    return Simulator(
        population=Population.create_filled(size, genome, len(encoded)),
        genome=genome,
        fitness_model=MatchFitness(encoded),
        mutator=UniformMutator(genome=genome, rate=rate),
        reporters=reporters if reporters is not None else [],
        rng=np.random.default_rng(seed),
        **kwargs,
    )


class CancelOnReport(Reporter):
    """Cancels the run from inside the first report it receives."""

    def __init__(self, token: CancellationToken) -> None:
        super().__init__()
        self.token = token
        self.reports = 0

    def report(self, generation: int, sequence: str, score: int):
        self.reports += 1
        self.token.cancel()


def test_cat_run_reaches_target() -> None:
    history = HistoryReporter()
    sim = make_simulator("CAT", 0.1, 10, seed=1, reporters=[history], max_generations=100000)

    result = sim.run()

    assert result.reason is StopReason.MATCHED
    assert result.matched
    assert result.best == "CAT"
    assert result.best_score == 3
    assert sim.state is RunState.TERMINATED
    df = history.to_dataframe()
    assert df["sequence"].iloc[-1] == "CAT"
    assert df["score"].iloc[-1] == 3
    assert df["generation"].iloc[-1] == result.generations - 1
    assert history.result is result


def test_trivial_target_matches_at_generation_zero() -> None:
    history = HistoryReporter()
    sim = make_simulator("A", 0.0, 5, reporters=[history])

    result = sim.run()

    assert result.matched
    assert result.generations == 1
    assert result.best == "A"
    assert result.best_score == 1
    assert history.history == [{"generation": 0, "sequence": "A", "score": 1}]


def test_best_score_never_decreases() -> None:
    history = HistoryReporter()
    sim = make_simulator("METHINKS IT IS LIKE A WEASEL", 0.05, 50, seed=2,
                         reporters=[history], max_generations=100000)

    result = sim.run()

    scores = history.to_dataframe()["score"].tolist()
    assert result.matched
    assert scores == sorted(scores)


def test_zero_scores_are_not_reported() -> None:
    history = HistoryReporter()
    sim = make_simulator("B", 0.0, 3, reporters=[history], max_generations=5)

    result = sim.run()

    assert result.reason is StopReason.EXHAUSTED
    assert result.generations == 5
    assert result.best == "A"
    assert result.best_score == 0
    assert history.history == []


def test_every_candidate_equals_winner_after_a_generation() -> None:
    sim = make_simulator("METHINKS IT IS LIKE A WEASEL", 0.5, 20, seed=3, max_generations=1)

    result = sim.run()

    matrix = sim.population.get_matrix()
    assert result.generations == 1
    assert np.all(matrix == matrix[0])
    assert sim.genome.to_string(matrix[0]) == result.best


def test_cancelled_before_start_runs_nothing() -> None:
    history = HistoryReporter()
    token = CancellationToken()
    token.cancel()
    sim = make_simulator("CAT", 0.1, 10, reporters=[history], cancel_token=token)

    result = sim.run()

    assert result.cancelled
    assert result.generations == 0
    assert history.history == []
    assert np.all(sim.population.get_matrix() == 0)


def test_cancellation_is_checked_at_generation_boundary() -> None:
    token = CancellationToken()
    canceller = CancelOnReport(token)
    history = HistoryReporter()
    sim = make_simulator("AB", 0.0, 3, reporters=[canceller, history], cancel_token=token)

    result = sim.run()

    # generation 0 still completes its report, generation 1 never starts
    assert result.cancelled
    assert result.generations == 1
    assert canceller.reports == 1
    assert history.history == [{"generation": 0, "sequence": "AA", "score": 1}]


def test_reporter_interval() -> None:
    every_third = HistoryReporter(interval=3)
    sim = make_simulator("AB", 0.0, 2, reporters=[every_third], max_generations=7)

    sim.run()

    assert every_third.to_dataframe()["generation"].tolist() == [0, 3, 6]


def test_elapsed_time_is_reported() -> None:
    result = make_simulator("A", 0.0, 2).run()

    assert result.elapsed_ticks >= 0
    assert result.elapsed_seconds >= 0.0
    assert result.elapsed_ticks == pytest.approx(result.elapsed_seconds * 1e6, abs=1)


def test_population_length_must_match_target() -> None:
    genome = Genome()
    with pytest.raises(ValueError):
        Simulator(
            population=Population.create_filled(3, genome, 4),
            genome=genome,
            fitness_model=MatchFitness(genome.encode("CAT")),
            mutator=UniformMutator(genome=genome, rate=0.1),
            reporters=[],
            rng=np.random.default_rng(0),
        )
