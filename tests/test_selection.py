"""
Tests for stochastic universal sampling.
"""

import random

import numpy as np
import pytest

from ga_tsp.errors import DegenerateFitness, InvalidParameter
from ga_tsp.selection import select, selection_size, sus


class TestSus:
    def test_frequencies_follow_fitness_share(self):
        rng = random.Random(42)
        fitness = np.array([1.0, 2.0, 3.0, 4.0, 0.5])
        nsel = 10
        trials = 3000
        counts = np.zeros(len(fitness))
        for _ in range(trials):
            picks = sus(fitness, nsel, rng)
            counts += np.bincount(picks, minlength=len(fitness))
        observed = counts / (nsel * trials)
        expected = fitness / fitness.sum()
        assert np.allclose(observed, expected, atol=0.01)

    def test_low_variance_counts(self):
        # Each individual is picked floor or ceil of its expected count.
        rng = random.Random(1)
        fitness = np.array([1.0, 1.0, 2.0, 4.0])
        nsel = 8
        expected = nsel * fitness / fitness.sum()
        for _ in range(200):
            counts = np.bincount(sus(fitness, nsel, rng), minlength=4)
            assert np.all(counts >= np.floor(expected))
            assert np.all(counts <= np.ceil(expected))

    def test_returns_requested_number_of_valid_indices(self):
        picks = sus(np.array([0.5, 1.0, 1.5]), 7, random.Random(0))
        assert picks.shape == (7,)
        assert picks.min() >= 0 and picks.max() <= 2

    def test_deterministic_with_seed(self):
        fitness = np.linspace(0.5, 1.5, 9)
        a = sus(fitness, 9, random.Random(5))
        b = sus(fitness, 9, random.Random(5))
        assert a.tolist() == b.tolist()

    def test_zero_fitness_total(self):
        with pytest.raises(DegenerateFitness):
            sus(np.zeros(4), 2, random.Random(0))

    def test_negative_fitness_total(self):
        with pytest.raises(DegenerateFitness):
            sus(np.array([-1.0, -2.0]), 2, random.Random(0))

    def test_nsel_must_be_positive(self):
        with pytest.raises(InvalidParameter):
            sus(np.ones(3), 0, random.Random(0))


class TestSelect:
    def test_selection_size_rounds_generation_gap(self):
        assert selection_size(100, 0.9) == 90
        assert selection_size(10, 0.25) == 3
        assert selection_size(1, 0.1) == 1
        assert selection_size(20, 1.0) == 20

    def test_selected_rows_come_from_population(self):
        rng = random.Random(3)
        population = np.array([rng.sample(range(6), 6) for _ in range(10)])
        chosen = select(population, np.ones(10), 0.9, rng)
        assert chosen.shape == (9, 6)
        rows = {tuple(r) for r in population.tolist()}
        assert all(tuple(r) in rows for r in chosen.tolist())

    def test_selected_rows_are_copies(self):
        population = np.arange(12).reshape(3, 4)
        chosen = select(population, np.ones(3), 1.0, random.Random(0))
        chosen[:] = -1
        assert population.min() == 0
