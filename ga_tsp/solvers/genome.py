import random
from typing import Tuple

import numpy as np


def init_population(nind: int, n: int, rng: random.Random) -> np.ndarray:
    """``nind`` independent uniformly random permutations of ``0..n-1``."""
    population = np.empty((nind, n), dtype=np.int64)
    for i in range(nind):
        population[i] = rng.sample(range(n), n)
    return population


def _fill_from(segment_parent: np.ndarray, order_parent: np.ndarray, a: int, b: int) -> np.ndarray:
    n = segment_parent.shape[0]
    child = np.full(n, -1, dtype=np.int64)
    child[a:b] = segment_parent[a:b]
    taken = set(child[a:b].tolist())
    rest = [c for c in order_parent.tolist() if c not in taken]
    free = [i for i in range(n) if i < a or i >= b]
    child[free] = rest
    return child


def order_crossover(
    p1: np.ndarray, p2: np.ndarray, rng: random.Random
) -> Tuple[np.ndarray, np.ndarray]:
    """Order crossover (OX).

    Each child keeps a contiguous slice of one parent in place and takes the
    remaining cities in the order they appear in the other parent.
    """
    n = p1.shape[0]
    a, b = sorted(rng.sample(range(n + 1), 2))
    return _fill_from(p1, p2, a, b), _fill_from(p2, p1, a, b)


def recombine(population: np.ndarray, pc: float, rng: random.Random) -> np.ndarray:
    out = population.copy()
    for i in range(0, out.shape[0] - 1, 2):
        if rng.random() < pc:
            out[i], out[i + 1] = order_crossover(population[i], population[i + 1], rng)
    return out


def mutate(population: np.ndarray, pm: float, rng: random.Random) -> np.ndarray:
    out = population.copy()
    n = out.shape[1]
    for row in out:
        if rng.random() < pm:
            i, j = rng.sample(range(n), 2)
            row[i], row[j] = row[j], row[i]
    return out
