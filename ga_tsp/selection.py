import math
import random

import numpy as np

from .errors import DegenerateFitness, InvalidParameter


def selection_size(nind: int, ggap: float) -> int:
    return max(1, int(math.floor(nind * ggap + 0.5)))


def sus(fitness: np.ndarray, nsel: int, rng: random.Random) -> np.ndarray:
    """Stochastic universal sampling.

    A single random offset places ``nsel`` equally spaced pointers over the
    cumulative fitness; individual ``i`` owns the interval
    ``(cumfit[i-1], cumfit[i]]``. The picks are shuffled before returning so
    their order says nothing about rank.
    """
    if nsel < 1:
        raise InvalidParameter(f"Number of individuals to select must be >= 1, got {nsel}.")
    fit = np.asarray(fitness, dtype=np.float64)
    cumfit = np.cumsum(fit)
    total = cumfit[-1] if cumfit.size else 0.0
    if not np.isfinite(total) or total <= 0:
        raise DegenerateFitness(f"Total fitness must be positive, got {total}.")
    pointers = total / nsel * (rng.random() + np.arange(nsel))
    chosen = np.searchsorted(cumfit, pointers, side="left")
    # Guard against rounding pushing the last pointer past the final bound.
    chosen = np.minimum(chosen, fit.shape[0] - 1)
    picks = chosen.tolist()
    rng.shuffle(picks)
    return np.asarray(picks, dtype=np.int64)


def select(population: np.ndarray, fitness: np.ndarray, ggap: float, rng: random.Random) -> np.ndarray:
    nsel = selection_size(population.shape[0], ggap)
    return population[sus(fitness, nsel, rng)].copy()
