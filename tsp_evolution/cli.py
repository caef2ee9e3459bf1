import argparse
import logging
import random
import sys
from typing import List, Optional

from tsp_evolution.data import (
    MIN_CITIES,
    City,
    load_tsplib_instance,
    random_cities,
    read_city_file,
    save_city_file,
)
from tsp_evolution.distance import build_distance_matrix
from tsp_evolution.evaluation import optimality_gap
from tsp_evolution.evolutionary import EvolutionSettings, EvolutionWorker, RunSummary, StopPolicy
from tsp_evolution.operators.base import CrossoverVariant, MutationVariant
from tsp_evolution.report import format_tour, progress_distribution, render_histogram


logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="[%(asctime)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def _int_at_least(minimum: int):
    def parse(text: str) -> int:
        try:
            value = int(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}")
        if value < minimum:
            raise argparse.ArgumentTypeError(f"must be at least {minimum}, got {value}")
        return value

    return parse


def _ratio(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got {text!r}")
    if not 0.0 <= value <= 1.0:
        raise argparse.ArgumentTypeError(f"must be within [0, 1], got {value}")
    return value


def print_summary(worker: EvolutionWorker, summary: RunSummary, optimum: Optional[float] = None) -> None:
    s = worker.settings
    print("======")
    print("SUMMARY:")
    print(f"Path Representation, {s.crossover.name}, {worker.active_mutation.name.title()}")
    print(f"Population {s.population_count}, Elite Ratio {s.elite_ratio}, Mut Chance {s.mutation_chance}")
    print(
        f"Best Distance: {worker.best_distance:.4f} achieved after {worker.last_generation} generations "
        f"({summary.state.value}, {summary.elapsed:.3f}s)"
    )
    if optimum is not None:
        print(f"Known optimum: {optimum:.4f} (gap {optimality_gap(worker.best_distance, optimum):.2%})")
    print(format_tour(worker.best_solution))
    print("Progress data (rows: 1/10th of all generations, bars: share of total distance gained):")
    print(render_histogram(progress_distribution(worker.progress, worker.last_generation)))


def run(args) -> int:
    cities: Optional[List[City]] = None
    optimum = None
    try:
        if args.tsplib:
            instance = load_tsplib_instance(args.tsplib)
            cities, dist_mat, optimum = instance.cities, instance.dist_mat, instance.optimum
            logger.info("loaded TSPLIB instance %s (%d nodes)", instance.name, len(dist_mat))
        else:
            if args.cities:
                cities = read_city_file(args.cities)
            else:
                cities = random_cities(args.random, random.Random(args.seed))
            dist_mat = build_distance_matrix(cities)
    except (FileNotFoundError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    settings = EvolutionSettings(
        population_count=args.population,
        elite_ratio=args.elite_ratio,
        mutation_chance=args.mutation_chance,
        crossover=CrossoverVariant(args.crossover),
        mutation=MutationVariant(args.mutation),
        randomize_mutation=args.randomize_mutation,
        random_seed=args.seed,
    )
    worker = EvolutionWorker(dist_mat, settings)
    policy = StopPolicy(args.stop_policy)
    for _ in range(args.reruns):
        summary = worker.run_evolution(args.generations, policy)
        print_summary(worker, summary, optimum)

    if args.save_cities:
        if cities is None:
            print("error: instance has no integer city coordinates to save", file=sys.stderr)
            return 1
        save_city_file(args.save_cities, cities)
        print(f"File saved: {args.save_cities}")
    return 0


def generate(args) -> int:
    rng = random.Random(args.seed)
    save_city_file(args.output, random_cities(args.count, rng, bound=args.bound))
    print(f"Wrote {args.count} cities to {args.output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="TSP genetic algorithm CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Evolve a tour for a city set")
    source = run_parser.add_mutually_exclusive_group()
    source.add_argument("--cities", help="City file, one 'x  y' pair per line")
    source.add_argument("--random", type=_int_at_least(MIN_CITIES), default=30, help="Random city count")
    source.add_argument("--tsplib", help="TSPLIB .tsp file")
    run_parser.add_argument("--crossover", choices=[v.value for v in CrossoverVariant], default="cx")
    run_parser.add_argument(
        "--mutation", choices=[v.value for v in MutationVariant], default="inversion"
    )
    run_parser.add_argument("--randomize-mutation", action="store_true")
    run_parser.add_argument("--population", type=_int_at_least(3), default=100)
    run_parser.add_argument("--elite-ratio", type=_ratio, default=0.7)
    run_parser.add_argument("--mutation-chance", type=_ratio, default=0.2)
    run_parser.add_argument("--generations", type=_int_at_least(0), default=1000)
    run_parser.add_argument(
        "--stop-policy",
        choices=[p.value for p in StopPolicy],
        default=StopPolicy.STALL_LIMIT.value,
        help="'stall': stop after N generations without progress; 'limit': run exactly N generations",
    )
    run_parser.add_argument("--reruns", type=_int_at_least(1), default=1, help="Re-run with the same settings")
    run_parser.add_argument("--seed", type=int, default=None)
    run_parser.add_argument(
        "--save-cities",
        help="Export the city list to this path (TSPLIB instances only when all coordinates are integers)",
    )
    run_parser.add_argument("-v", "--verbose", action="store_true")
    run_parser.set_defaults(func=run)

    gen_parser = subparsers.add_parser("generate", help="Write a random city file")
    gen_parser.add_argument("output")
    gen_parser.add_argument("--count", type=_int_at_least(MIN_CITIES), default=30)
    gen_parser.add_argument("--bound", type=_int_at_least(1), default=1000)
    gen_parser.add_argument("--seed", type=int, default=None)
    gen_parser.add_argument("-v", "--verbose", action="store_true")
    gen_parser.set_defaults(func=generate)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
