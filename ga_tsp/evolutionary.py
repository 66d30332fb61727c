import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np
import torch

from .data import check_distance_matrix, distance_matrix
from .errors import InvalidParameter
from .evaluation import path_lengths, ranking_fitness
from .selection import select
from .solvers.base import SolveResult, Solver, Tour
from .solvers.genome import init_population, mutate, recombine
from .solvers.heuristics import reverse


@dataclass
class GAConfig:
    population_size: int = 100
    max_generations: int = 200
    crossover_rate: float = 0.9
    mutation_rate: float = 0.05
    generation_gap: float = 0.9
    selective_pressure: float = 1.5
    local_search: bool = True
    random_seed: int = 123
    device: str = "cpu"

    def validate(self) -> None:
        if self.population_size < 1:
            raise InvalidParameter(f"population_size must be >= 1, got {self.population_size}.")
        if self.max_generations < 0:
            raise InvalidParameter(f"max_generations must be >= 0, got {self.max_generations}.")
        for name in ("crossover_rate", "mutation_rate"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise InvalidParameter(f"{name} must lie in [0, 1], got {value}.")
        if not 0.0 < self.generation_gap <= 1.0:
            raise InvalidParameter(f"generation_gap must lie in (0, 1], got {self.generation_gap}.")
        if not 1.0 < self.selective_pressure < 2.0:
            raise InvalidParameter(
                f"selective_pressure must lie in (1, 2), got {self.selective_pressure}."
            )


@dataclass
class GenerationState:
    generation: int
    population: np.ndarray
    objective: np.ndarray
    best_tour: Tour
    best_length: float
    trace: List[float] = field(default_factory=list)

    def done(self, max_generations: int) -> bool:
        return self.generation >= max_generations


def reinsert(
    parents: np.ndarray,
    offspring: np.ndarray,
    parent_objective: np.ndarray,
    offspring_objective: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray]:
    """Replace the weakest parents with offspring, keeping the population size.

    At least one parent (the best) always survives; offspring fill the freed
    slots best-first. When no slot can be freed (a population of one) parents
    and offspring compete directly and an offspring wins ties.
    """
    nind = parents.shape[0]
    n_keep = min(nind, max(1, nind - offspring.shape[0]))
    if n_keep == nind and offspring.shape[0] > 0:
        pool = np.concatenate([offspring, parents])
        pool_objective = np.concatenate([offspring_objective, parent_objective])
        best = np.argsort(pool_objective, kind="stable")[:nind]
        return pool[best], pool_objective[best]
    keep = np.argsort(parent_objective, kind="stable")[:n_keep]
    fill = np.argsort(offspring_objective, kind="stable")[: nind - n_keep]
    population = np.concatenate([parents[keep], offspring[fill]])
    objective = np.concatenate([parent_objective[keep], offspring_objective[fill]])
    return population, objective


class GeneticSearch(Solver):
    name = "genetic"

    def __init__(
        self,
        dist: np.ndarray,
        config: Optional[GAConfig] = None,
        rng: Optional[random.Random] = None,
        optimum: Optional[float] = None,
    ):
        self.cfg = config or GAConfig()
        self.cfg.validate()
        self.dist = check_distance_matrix(np.asarray(dist, dtype=np.float64))
        self.n = self.dist.shape[0]
        self.optimum = optimum
        self.rng = rng or random.Random(self.cfg.random_seed)
        self.device = torch.device(self.cfg.device)
        self._dist_t = torch.as_tensor(np.array(self.dist), device=self.device)

    def evaluate(self, population: np.ndarray) -> np.ndarray:
        return path_lengths(self._dist_t, population, device=self.device)

    def init_state(self) -> GenerationState:
        population = init_population(self.cfg.population_size, self.n, self.rng)
        objective = self.evaluate(population)
        best = int(np.argmin(objective))
        return GenerationState(
            generation=0,
            population=population,
            objective=objective,
            best_tour=population[best].tolist(),
            best_length=float(objective[best]),
            trace=[float(objective[best])],
        )

    def step(self, state: GenerationState) -> GenerationState:
        fitness = ranking_fitness(state.objective, self.cfg.selective_pressure)
        offspring = select(state.population, fitness, self.cfg.generation_gap, self.rng)
        offspring = recombine(offspring, self.cfg.crossover_rate, self.rng)
        offspring = mutate(offspring, self.cfg.mutation_rate, self.rng)
        if self.cfg.local_search:
            offspring = reverse(offspring, self.dist, self.rng)
        offspring_objective = self.evaluate(offspring)
        population, objective = reinsert(
            state.population, offspring, state.objective, offspring_objective
        )
        best = int(np.argmin(objective))
        best_tour, best_length = state.best_tour, state.best_length
        if objective[best] < best_length:
            best_tour, best_length = population[best].tolist(), float(objective[best])
        return GenerationState(
            generation=state.generation + 1,
            population=population,
            objective=objective,
            best_tour=best_tour,
            best_length=best_length,
            trace=state.trace + [best_length],
        )

    def run(
        self, on_generation: Optional[Callable[[GenerationState], None]] = None
    ) -> Tuple[GenerationState, SolveResult]:
        state = self.init_state()
        while not state.done(self.cfg.max_generations):
            state = self.step(state)
            if on_generation is not None:
                on_generation(state)
        return state, self.result(state)

    def result(self, state: GenerationState) -> SolveResult:
        return SolveResult(
            tour=list(state.best_tour),
            length=state.best_length,
            solver_name=self.name,
            optimum=self.optimum,
            trace=list(state.trace),
        )

    def solve(self) -> SolveResult:
        _, result = self.run()
        return result


def solve(
    coords: Sequence[Sequence[float]],
    config: Optional[GAConfig] = None,
    rng: Optional[random.Random] = None,
) -> SolveResult:
    config = config or GAConfig()
    return GeneticSearch(distance_matrix(coords), config, rng=rng).solve()
