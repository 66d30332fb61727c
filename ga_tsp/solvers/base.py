import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np


Tour = List[int]


def tour_length(dist: np.ndarray, tour: Sequence[int]) -> float:
    length = 0.0
    n = len(tour)
    for i in range(n):
        a = tour[i]
        b = tour[(i + 1) % n]
        length += dist[a, b]
    return float(length)


def is_permutation(tour: Sequence[int], n: int) -> bool:
    return len(tour) == n and sorted(int(c) for c in tour) == list(range(n))


def format_route(tour: Sequence[int]) -> str:
    """Render a closed tour with 1-based city numbers, e.g. ``1—>3—>2—>1``."""
    if len(tour) == 0:
        return ""
    stops = [int(c) + 1 for c in tour] + [int(tour[0]) + 1]
    return "—>".join(str(s) for s in stops)


@dataclass
class SolveResult:
    tour: Tour
    length: float
    solver_name: str
    optimum: Optional[float] = None
    trace: List[float] = field(default_factory=list)

    @property
    def gap(self) -> float:
        if self.optimum is None or math.isclose(self.optimum, 0.0):
            return float("inf")
        return (self.length - self.optimum) / self.optimum


class Solver(ABC):
    name: str = "base"

    @abstractmethod
    def solve(self) -> SolveResult:
        raise NotImplementedError
