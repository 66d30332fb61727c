import random

from ga_tsp.data import sample_instance
from ga_tsp.evolutionary import GAConfig, GeneticSearch
from ga_tsp.solvers.base import format_route


def main():
    instance = sample_instance()
    cfg = GAConfig(
        population_size=40,
        max_generations=60,
        crossover_rate=0.9,
        mutation_rate=0.05,
        generation_gap=0.9,
    )
    search = GeneticSearch(instance.dist, cfg, rng=random.Random(7))

    def report(state):
        if state.generation % 10 == 0:
            print(f"gen {state.generation}: best={state.best_length:.4f}")

    _, result = search.run(on_generation=report)
    print(format_route(result.tour))
    print(f"total distance: {result.length:.4f}")


if __name__ == "__main__":
    main()
