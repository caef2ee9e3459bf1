from .base import (
    Crossover,
    CrossoverVariant,
    Mutation,
    MutationVariant,
    Tour,
    cut_points,
    is_permutation,
)
from .crossover import crossover_operator, cx, ox, pmx
from .mutation import inversion, mutation_operator, transposition

__all__ = [
    "Crossover",
    "CrossoverVariant",
    "Mutation",
    "MutationVariant",
    "Tour",
    "cut_points",
    "is_permutation",
    "crossover_operator",
    "pmx",
    "ox",
    "cx",
    "mutation_operator",
    "inversion",
    "transposition",
]
