import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from .operators.base import Crossover, CrossoverVariant, Mutation, MutationVariant, Tour
from .operators.crossover import crossover_operator
from .operators.mutation import mutation_operator
from .population import Individual, Population
from .progress import ProgressLog


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvolutionSettings:
    population_count: int = 100
    elite_ratio: float = 0.7
    mutation_chance: float = 0.2
    crossover: CrossoverVariant = CrossoverVariant.CX
    mutation: MutationVariant = MutationVariant.INVERSION
    randomize_mutation: bool = False
    random_seed: Optional[int] = None


class StopPolicy(str, Enum):
    GENERATION_LIMIT = "limit"
    STALL_LIMIT = "stall"


class EvolutionState(str, Enum):
    RUNNING = "running"
    STOPPED_BY_GENERATION_LIMIT = "stopped_by_generation_limit"
    STOPPED_BY_STALL = "stopped_by_stall"


@dataclass
class RunSummary:
    state: EvolutionState
    generations: int
    last_generation: int
    best_distance: float
    elapsed: float

    @property
    def ms_per_generation(self) -> float:
        if not self.generations:
            return 0.0
        return self.elapsed * 1000.0 / self.generations


class EvolutionWorker:
    def __init__(
        self,
        dist_mat: np.ndarray,
        settings: EvolutionSettings,
        rng: random.Random = None,
    ):
        self.settings = settings
        self.dist_mat = dist_mat
        self.city_count = len(dist_mat)
        self.rng = rng or random.Random(settings.random_seed)
        self.population = Population.random(settings.population_count, dist_mat, self.rng)
        self.best_solution: Tour = self.population.best.as_tour()
        self.best_distance: float = self.population.best.distance
        self.last_generation = 0
        self.progress = ProgressLog()
        self.active_mutation = settings.mutation
        self.state = EvolutionState.RUNNING
        logger.info("Best initial distance: %.4f", self.best_distance)

    def select_operators(self) -> Tuple[Crossover, Mutation]:
        mutation = self.settings.mutation
        if self.settings.randomize_mutation:
            mutation = self.rng.choice(list(MutationVariant))
            logger.info("Randomized mutation operator: %s", mutation.value)
        self.active_mutation = mutation
        return crossover_operator(self.settings.crossover), mutation_operator(mutation)

    def breed(self, elites: List[Individual], crossover: Crossover) -> List[Tour]:
        pool = list(elites)
        children: List[Tour] = []
        # An odd elite left in the pool is not bred this generation.
        while len(pool) > 1:
            first = pool.pop(self.rng.randrange(len(pool)))
            second = pool.pop(self.rng.randrange(len(pool)))
            children.extend(crossover(first.tour, second.tour, self.rng))
        return children

    def step(self, generation: int, crossover: Crossover, mutation: Mutation) -> bool:
        """Run one generation; returns True when it produced a new global best."""
        self.population.truncate(self.settings.population_count)
        elites = self.population.elites(self.settings.elite_ratio)
        offspring = self.breed(elites, crossover)
        children = []
        for tour in offspring:
            if self.rng.random() < self.settings.mutation_chance:
                tour = mutation(tour, self.rng)
            children.append(Individual.evaluate(tour, self.dist_mat))
        self.population.merge(children)

        best = self.population.best
        if best.distance < self.best_distance:
            improvement = self.best_distance - best.distance
            self.best_distance = best.distance
            self.best_solution = best.as_tour()
            self.progress.record(generation, improvement)
            logger.info(
                "Found new best solution of distance %.4f at gen %d.", self.best_distance, generation
            )
            return True
        return False

    def run_evolution(self, limit: int, policy: StopPolicy = StopPolicy.STALL_LIMIT) -> RunSummary:
        """
        Evolve until the stop policy fires.

        GENERATION_LIMIT runs exactly ``limit`` generations. STALL_LIMIT stops once
        ``limit`` consecutive generations brought no new best; any improvement
        resets that counter. Generation numbering continues from earlier calls.
        """
        policy = StopPolicy(policy)
        crossover, mutation = self.select_operators()
        start = time.perf_counter()
        self.state = EvolutionState.RUNNING
        generations = 0
        stalled = 0
        while self.state == EvolutionState.RUNNING:
            if policy == StopPolicy.GENERATION_LIMIT and generations >= limit:
                self.state = EvolutionState.STOPPED_BY_GENERATION_LIMIT
                logger.info("Stopping evolution after %d generations.", limit)
                break
            if policy == StopPolicy.STALL_LIMIT and stalled >= limit:
                self.state = EvolutionState.STOPPED_BY_STALL
                logger.info("No improvement for %d generations. Stopping evolution.", limit)
                break
            improved = self.step(self.last_generation + 1, crossover, mutation)
            self.last_generation += 1
            generations += 1
            stalled = 0 if improved else stalled + 1

        elapsed = time.perf_counter() - start
        summary = RunSummary(
            state=self.state,
            generations=generations,
            last_generation=self.last_generation,
            best_distance=self.best_distance,
            elapsed=elapsed,
        )
        logger.info(
            "Evolution has stopped. Generations: %d, Best Distance: %.4f",
            self.last_generation,
            self.best_distance,
        )
        logger.info(
            "Total evolution time: %.3f seconds (%.5f ms per generation).",
            elapsed,
            summary.ms_per_generation,
        )
        return summary
