import random
from typing import Tuple

import numpy as np

from .base import tour_length


def reversal_candidate(tour: np.ndarray, i: int, j: int) -> np.ndarray:
    cand = tour.copy()
    cand[i : j + 1] = cand[i : j + 1][::-1]
    return cand


def try_reversal(dist: np.ndarray, tour: np.ndarray, rng: random.Random) -> Tuple[np.ndarray, bool]:
    i, j = sorted(rng.sample(range(tour.shape[0]), 2))
    cand = reversal_candidate(tour, i, j)
    if tour_length(dist, cand) + 1e-9 < tour_length(dist, tour):
        return cand, True
    return tour, False


def reverse(population: np.ndarray, dist: np.ndarray, rng: random.Random) -> np.ndarray:
    """One greedy segment reversal per individual.

    Two cut points are drawn uniformly and the segment between them (both
    ends included) is reversed; the move is kept only when the tour gets
    strictly shorter, so no individual ever gets longer.
    """
    out = population.copy()
    for k in range(out.shape[0]):
        out[k], _ = try_reversal(dist, out[k], rng)
    return out
