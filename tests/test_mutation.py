import random

import pytest

from tsp_evolution.operators import (
    MutationVariant,
    cut_points,
    inversion,
    is_permutation,
    mutation_operator,
    transposition,
)
from tsp_evolution.operators.mutation import MAX_TRANSPOSITION_ATTEMPTS


@pytest.mark.parametrize("operator", [inversion, transposition], ids=lambda op: op.__name__)
@pytest.mark.parametrize("n", [3, 4, 7, 25])
def test_mutation_keeps_permutation(operator, n):
    rng = random.Random(n)
    tour = list(range(n))
    rng.shuffle(tour)
    for _ in range(200):
        tour = operator(tour, rng)
        assert is_permutation(tour, n)


@pytest.mark.parametrize("operator", [inversion, transposition], ids=lambda op: op.__name__)
def test_input_is_not_modified(operator):
    tour = [5, 3, 1, 0, 2, 4]
    operator(tour, random.Random(4))
    assert tour == [5, 3, 1, 0, 2, 4]


def test_inversion_reverses_cut_segment():
    tour = list(range(10))
    rng = random.Random(12)
    state = rng.getstate()
    child = inversion(tour, rng)
    check = random.Random()
    check.setstate(state)
    cut1, cut2 = cut_points(10, check)
    assert child[:cut1] == tour[:cut1]
    assert child[cut1:cut2] == tour[cut1:cut2][::-1]
    assert child[cut2:] == tour[cut2:]


def test_transposition_swaps_exactly_two_positions():
    tour = list(range(8))
    child = transposition(tour, random.Random(3))
    diff = [i for i in range(8) if child[i] != tour[i]]
    assert len(diff) == 2
    i, j = diff
    assert child[i] == tour[j] and child[j] == tour[i]


def test_transposition_gives_up_on_single_city():
    class Counting(random.Random):
        calls = 0

        def randrange(self, *args, **kwargs):
            Counting.calls += 1
            return super().randrange(*args, **kwargs)

    rng = Counting(0)
    assert transposition([0], rng) == [0]
    assert Counting.calls == MAX_TRANSPOSITION_ATTEMPTS + 1


@pytest.mark.parametrize(
    "variant, expected",
    [
        (MutationVariant.INVERSION, inversion),
        (MutationVariant.TRANSPOSITION, transposition),
        ("transposition", transposition),
    ],
)
def test_mutation_dispatch(variant, expected):
    assert mutation_operator(variant) is expected
