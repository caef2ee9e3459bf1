import random
from typing import Dict, List, Sequence, Tuple

from .base import Crossover, CrossoverVariant, Tour, cut_points


def _resolve(value: int, mapping: Dict[int, int]) -> int:
    while value in mapping:
        value = mapping[value]
    return value


def pmx(parent1: Sequence[int], parent2: Sequence[int], rng: random.Random) -> Tuple[Tour, Tour]:
    """Partially mapped crossover: swap a segment, repair the rest via the segment mapping."""
    n = len(parent1)
    cut1, cut2 = cut_points(n, rng)
    child1: Tour = [0] * n
    child2: Tour = [0] * n
    forward: Dict[int, int] = {}
    backward: Dict[int, int] = {}
    for i in range(cut1, cut2):
        child1[i] = parent2[i]
        child2[i] = parent1[i]
        forward[parent2[i]] = parent1[i]
        backward[parent1[i]] = parent2[i]
    for i in list(range(cut1)) + list(range(cut2, n)):
        child1[i] = _resolve(parent1[i], forward)
        child2[i] = _resolve(parent2[i], backward)
    return child1, child2


def _order_fill(keeper: Sequence[int], donor: Sequence[int], cut1: int, cut2: int) -> Tour:
    n = len(keeper)
    child: Tour = [-1] * n
    child[cut1:cut2] = keeper[cut1:cut2]
    taken = set(child[cut1:cut2])
    # Donor is read from cut2 with wrap-around; free slots are filled in the same order.
    fill = [donor[(cut2 + k) % n] for k in range(n)]
    fill = [v for v in fill if v not in taken]
    for k, value in enumerate(fill):
        child[(cut2 + k) % n] = value
    return child


def ox(parent1: Sequence[int], parent2: Sequence[int], rng: random.Random) -> Tuple[Tour, Tour]:
    """Order crossover: keep own segment, fill the rest in the other parent's relative order."""
    cut1, cut2 = cut_points(len(parent1), rng)
    return _order_fill(parent1, parent2, cut1, cut2), _order_fill(parent2, parent1, cut1, cut2)


def _cycle(start: int, source: Sequence[int], target: Sequence[int]) -> List[int]:
    # Walk target values back into positions of source until the cycle closes.
    position = {value: idx for idx, value in enumerate(source)}
    n = len(source)
    cycle: List[int] = []
    value = target[start]
    while True:
        idx = position[value]
        cycle.append(idx)
        value = target[idx]
        if value == target[start] or len(cycle) >= n:
            break
    return cycle


def cx(parent1: Sequence[int], parent2: Sequence[int], rng: random.Random) -> Tuple[Tour, Tour]:
    """Cycle crossover: positions on one cycle keep a parent's values, the rest come from the other."""
    n = len(parent1)
    start = rng.randrange(n)
    cycle1 = set(_cycle(start, parent1, parent2))
    cycle2 = set(_cycle(start, parent2, parent1))
    child1 = [parent1[i] if i in cycle1 else parent2[i] for i in range(n)]
    child2 = [parent2[i] if i in cycle2 else parent1[i] for i in range(n)]
    return child1, child2


def crossover_operator(variant: CrossoverVariant) -> Crossover:
    variant = CrossoverVariant(variant)
    if variant == CrossoverVariant.OX:
        return ox
    if variant == CrossoverVariant.CX:
        return cx
    return pmx
