from .base import Solver, SolveResult, Tour, format_route, is_permutation, tour_length
from .genome import init_population, mutate, order_crossover, recombine
from .heuristics import reversal_candidate, reverse, try_reversal

__all__ = [
    "Solver",
    "SolveResult",
    "Tour",
    "format_route",
    "is_permutation",
    "tour_length",
    "init_population",
    "mutate",
    "order_crossover",
    "recombine",
    "reversal_candidate",
    "reverse",
    "try_reversal",
]
