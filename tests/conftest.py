import random

import pytest

from tsp_evolution.data import City
from tsp_evolution.distance import build_distance_matrix


@pytest.fixture
def unit_square():
    return build_distance_matrix([City(0, 0), City(1, 0), City(1, 1), City(0, 1)])


@pytest.fixture
def five_cities():
    return [City(0, 0), City(0, 10), City(10, 10), City(10, 0), City(5, 5)]


@pytest.fixture
def grid_matrix():
    rng = random.Random(11)
    cities = [City(rng.randrange(100), rng.randrange(100)) for _ in range(12)]
    return build_distance_matrix(cities)
