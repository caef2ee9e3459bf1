import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

import numpy as np
import tsplib95

from .distance import matrix_from_graph


logger = logging.getLogger(__name__)

MIN_CITIES = 3
CITY_SEPARATOR = "  "

PathLike = Union[str, Path]


@dataclass(frozen=True)
class City:
    x: int
    y: int


@dataclass
class Instance:
    name: str
    path: Path
    cities: Optional[List[City]]
    dist_mat: np.ndarray
    optimum: Optional[float]


def _parse_city(line: str) -> Optional[City]:
    parts = line.strip().split(CITY_SEPARATOR)
    if len(parts) < 2:
        return None
    try:
        return City(int(parts[0]), int(parts[1]))
    except ValueError:
        return None


def read_city_file(path: PathLike) -> List[City]:
    """
    Read one city per line as ``x  y`` (two spaces). Unparseable lines are
    skipped; a file with fewer than three cities is rejected.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"City file not found: {path}")
    cities = []
    with path.open("r") as f:
        for line in f:
            city = _parse_city(line)
            if city is not None:
                cities.append(city)
    if len(cities) < MIN_CITIES:
        raise ValueError(f"{path} has {len(cities)} cities; at least {MIN_CITIES} are required.")
    return cities


def save_city_file(path: PathLike, cities: Iterable[City]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [f"{c.x}{CITY_SEPARATOR}{c.y}" for c in cities]
    path.write_text("\n".join(lines) + "\n")


def random_cities(count: int, rng: random.Random, bound: int = 1000) -> List[City]:
    return [City(rng.randrange(bound), rng.randrange(bound)) for _ in range(count)]


def _solution_candidates(path: Path) -> Iterable[Path]:
    yield path.with_suffix(".opt.tour")
    for ext in (".opt.tour", ".opt", ".tour"):
        yield path.parent / "solutions" / f"{path.stem}{ext}"


def _load_optimum(problem, path: Path) -> Optional[float]:
    for candidate in _solution_candidates(path):
        if not candidate.exists():
            continue
        try:
            tour_file = tsplib95.parse(candidate.read_text())
            nodes = list(tour_file.tours[0])
        except Exception as exc:
            logger.warning("Ignoring unreadable tour file %s: %s", candidate, exc)
            continue
        dist = 0.0
        for i in range(len(nodes)):
            a = nodes[i]
            b = nodes[(i + 1) % len(nodes)]
            dist += problem.get_weight(a, b)
        return float(dist)
    return None


def _coords_to_cities(problem) -> Optional[List[City]]:
    coords = getattr(problem, "node_coords", None)
    if not coords:
        return None
    # Non-integral coordinates cannot be exported without changing the distances used.
    if any(float(v) != int(v) for n in coords for v in coords[n][:2]):
        return None
    return [City(int(coords[n][0]), int(coords[n][1])) for n in sorted(coords)]


def load_tsplib_instance(path: PathLike) -> Instance:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"TSPLIB file not found: {path}")
    problem = tsplib95.load(path)
    graph = problem.get_graph()
    if graph.number_of_nodes() < MIN_CITIES:
        raise ValueError(f"{path} has {graph.number_of_nodes()} nodes; at least {MIN_CITIES} are required.")
    if graph.is_directed():
        raise ValueError(f"{path} is an asymmetric instance; only symmetric TSP is supported.")
    dist_mat = matrix_from_graph(graph)
    if not np.allclose(dist_mat, dist_mat.T):
        raise ValueError(f"{path} has an asymmetric distance matrix; only symmetric TSP is supported.")
    optimum = _load_optimum(problem, path)
    name = problem.name or path.stem
    return Instance(
        name=name,
        path=path,
        cities=_coords_to_cities(problem),
        dist_mat=dist_mat,
        optimum=optimum,
    )
