import random
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np

from .evaluation import tour_length
from .operators.base import Tour


@dataclass(frozen=True)
class Individual:
    tour: Tuple[int, ...]
    distance: float

    @staticmethod
    def evaluate(tour: Sequence[int], dist_mat: np.ndarray) -> "Individual":
        return Individual(tour=tuple(tour), distance=tour_length(dist_mat, tour))

    def as_tour(self) -> Tour:
        return list(self.tour)


class Population:
    """Individuals kept in ascending order of distance, best first."""

    def __init__(self, individuals: Iterable[Individual] = ()):
        self.individuals: List[Individual] = list(individuals)
        self.sort()

    @staticmethod
    def random(count: int, dist_mat: np.ndarray, rng: random.Random) -> "Population":
        n = len(dist_mat)
        individuals = []
        for _ in range(count):
            tour = list(range(n))
            rng.shuffle(tour)
            individuals.append(Individual.evaluate(tour, dist_mat))
        return Population(individuals)

    def sort(self) -> None:
        self.individuals.sort(key=lambda ind: ind.distance)

    def truncate(self, size: int) -> None:
        del self.individuals[size:]

    def elites(self, ratio: float) -> List[Individual]:
        return self.individuals[: int(len(self.individuals) * ratio)]

    def merge(self, children: Iterable[Individual]) -> None:
        self.individuals.extend(children)
        self.sort()

    @property
    def best(self) -> Individual:
        return self.individuals[0]

    def __len__(self) -> int:
        return len(self.individuals)

    def __iter__(self) -> Iterator[Individual]:
        return iter(self.individuals)

    def __getitem__(self, index: int) -> Individual:
        return self.individuals[index]
