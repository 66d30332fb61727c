import argparse
import random
import time
from pathlib import Path
from typing import List, Optional

import torch

from ga_tsp.data import Instance, load_instance, sample_instance
from ga_tsp.evolutionary import GAConfig, GenerationState, GeneticSearch
from ga_tsp.solvers.base import SolveResult, format_route, tour_length


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def _pick_device(requested: Optional[str]) -> str:
    if requested:
        return requested
    return "cuda:0" if torch.cuda.device_count() else "cpu"


def _load(args) -> Instance:
    if args.instance:
        path = Path(args.instance)
        log(f"loading TSPLIB instance from {path}")
        return load_instance(path)
    log("using bundled 14-city sample")
    return sample_instance()


def config_from_args(args) -> GAConfig:
    return GAConfig(
        population_size=args.population,
        max_generations=args.generations,
        crossover_rate=args.pc,
        mutation_rate=args.pm,
        generation_gap=args.ggap,
        selective_pressure=args.pressure,
        local_search=not args.no_local_search,
        random_seed=args.seed,
        device=_pick_device(args.device),
    )


def _progress(every: int):
    def report(state: GenerationState) -> None:
        if every > 0 and state.generation % every == 0:
            avg = float(state.objective.mean())
            log(f"gen {state.generation}: best={state.best_length:.4f} avg={avg:.4f}")

    return report


def summarize(result: SolveResult) -> List[str]:
    lines = [
        f"route: {format_route(result.tour)}",
        f"total distance: {result.length:.4f}",
    ]
    if result.optimum is not None:
        lines.append(f"known optimum: {result.optimum:.4f} (gap {result.gap:.2%})")
    return lines


def run(args) -> SolveResult:
    t0 = time.perf_counter()
    instance = _load(args)
    cfg = config_from_args(args)
    log(
        f"instance {instance.name}: {instance.dist.shape[0]} cities, "
        f"population={cfg.population_size} generations={cfg.max_generations} device={cfg.device}"
    )
    search = GeneticSearch(instance.dist, cfg, rng=random.Random(cfg.random_seed), optimum=instance.optimum)

    state = search.init_state()
    first = state.population[0].tolist()
    log("a random member of the initial population:")
    print(format_route(first))
    print(f"total distance: {tour_length(instance.dist, first):.4f}")

    report = _progress(args.log_every)
    while not state.done(cfg.max_generations):
        state = search.step(state)
        report(state)
    result = search.result(state)
    log(f"finished {state.generation} generations in {time.perf_counter() - t0:.2f}s")
    log("best tour:")
    for line in summarize(result):
        print(line)
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Genetic algorithm TSP solver")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Solve a TSPLIB instance (or the bundled sample)")
    run_parser.add_argument("--instance", default=None, help="Path to a TSPLIB .tsp file")
    run_parser.add_argument("--population", type=int, default=100)
    run_parser.add_argument("--generations", type=int, default=200)
    run_parser.add_argument("--pc", type=float, default=0.9, help="Crossover probability")
    run_parser.add_argument("--pm", type=float, default=0.05, help="Mutation probability")
    run_parser.add_argument("--ggap", type=float, default=0.9, help="Generation gap")
    run_parser.add_argument("--pressure", type=float, default=1.5, help="Linear ranking pressure")
    run_parser.add_argument("--no-local-search", action="store_true")
    run_parser.add_argument("--seed", type=int, default=123)
    run_parser.add_argument("--device", default=None)
    run_parser.add_argument("--log-every", type=int, default=20)
    run_parser.set_defaults(func=run)
    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
