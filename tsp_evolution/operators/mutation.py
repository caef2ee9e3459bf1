import random
from typing import Sequence

from .base import Mutation, MutationVariant, Tour, cut_points


MAX_TRANSPOSITION_ATTEMPTS = 100


def inversion(tour: Sequence[int], rng: random.Random) -> Tour:
    cut1, cut2 = cut_points(len(tour), rng)
    child = list(tour)
    child[cut1:cut2] = reversed(child[cut1:cut2])
    return child


def transposition(tour: Sequence[int], rng: random.Random) -> Tour:
    child = list(tour)
    n = len(child)
    i = rng.randrange(n)
    j = rng.randrange(n)
    attempts = 0
    while j == i:
        attempts += 1
        if attempts >= MAX_TRANSPOSITION_ATTEMPTS:
            # Degenerate tour (n == 1): nothing to swap.
            return child
        j = rng.randrange(n)
    child[i], child[j] = child[j], child[i]
    return child


def mutation_operator(variant: MutationVariant) -> Mutation:
    variant = MutationVariant(variant)
    if variant == MutationVariant.TRANSPOSITION:
        return transposition
    return inversion
