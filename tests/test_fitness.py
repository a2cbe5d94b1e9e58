"""Tests for match scoring and winner selection."""

from __future__ import annotations

import numpy as np
import pytest

from weaselsim.evolution.fitness import MatchFitness, match_score, select_winner
from weaselsim.genome.sequence import Genome
from weaselsim.population.container import Population


def test_match_score_counts_positional_matches() -> None:
    genome = Genome()

    assert match_score(genome.encode("CAT"), genome.encode("CAR")) == 2
    assert match_score(genome.encode("CAT"), genome.encode("TAC")) == 1
    assert match_score(genome.encode("CAT"), genome.encode("CAT")) == 3
    assert match_score(genome.encode("ABC"), genome.encode("XYZ")) == 0


def test_match_score_is_symmetric() -> None:
    rng = np.random.default_rng(5)
    for _ in range(20):
        a = rng.integers(0, 27, size=12, dtype=np.uint8)
        b = rng.integers(0, 27, size=12, dtype=np.uint8)
        assert match_score(a, b) == match_score(b, a)


def test_match_score_rejects_length_mismatch() -> None:
    genome = Genome()
    with pytest.raises(ValueError):
        match_score(genome.encode("CAT"), genome.encode("CATS"))


def test_evaluate_population() -> None:
    genome = Genome()
    matrix = np.array([genome.encode(s) for s in ["AAA", "CAA", "CAT", "ZZZ"]])
    fitness = MatchFitness(genome.encode("CAT"))

    scores = fitness.evaluate_population(Population(matrix))

    assert scores.tolist() == [1, 2, 3, 0]
    assert fitness.max_score == 3
    assert fitness.score(genome.encode("CAT")) == 3


def test_select_winner_prefers_lowest_index_on_ties() -> None:
    assert select_winner(np.array([1, 3, 3, 2])) == 1
    assert select_winner(np.array([2, 2])) == 0


def test_select_winner_all_zero_returns_first() -> None:
    assert select_winner(np.zeros(5, dtype=int)) == 0
