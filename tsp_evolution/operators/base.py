import random
from enum import Enum
from typing import Callable, List, Sequence, Tuple


Tour = List[int]

Crossover = Callable[[Sequence[int], Sequence[int], random.Random], Tuple[Tour, Tour]]
Mutation = Callable[[Sequence[int], random.Random], Tour]


class CrossoverVariant(str, Enum):
    PMX = "pmx"
    OX = "ox"
    CX = "cx"


class MutationVariant(str, Enum):
    INVERSION = "inversion"
    TRANSPOSITION = "transposition"


def cut_points(n: int, rng: random.Random) -> Tuple[int, int]:
    """
    Draw a segment [cut1, cut2) biased toward the first two thirds of a tour.

    cut1 is uniform in [1, floor(2n/3)) and cut2 uniform in (cut1, n), so the
    segment never starts at position 0 and never reaches the last position.
    Requires n >= 3.
    """
    cut1 = rng.randrange(1, n * 2 // 3)
    cut2 = rng.randrange(cut1 + 1, n)
    return cut1, cut2


def is_permutation(tour: Sequence[int], n: int = None) -> bool:
    if n is None:
        n = len(tour)
    return len(tour) == n and sorted(tour) == list(range(n))
