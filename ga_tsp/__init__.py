"""
Genetic algorithm for the Traveling Salesman Problem over permutation-encoded tours.
"""

__all__ = [
    "cli",
    "data",
    "errors",
    "evaluation",
    "evolutionary",
    "selection",
    "solvers",
]
