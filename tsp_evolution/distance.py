from typing import Sequence

import networkx as nx
import numpy as np


def build_distance_matrix(cities: Sequence) -> np.ndarray:
    """
    Pairwise Euclidean distances between cities (anything with .x and .y).

    The result is symmetric with a zero diagonal and is returned read-only,
    since every component of a run shares the same matrix.
    """
    coords = np.array([(c.x, c.y) for c in cities], dtype=np.float64).reshape(-1, 2)
    diff = coords[:, None, :] - coords[None, :, :]
    mat = np.sqrt((diff ** 2).sum(axis=-1))
    mat.setflags(write=False)
    return mat


def matrix_from_graph(graph: nx.Graph) -> np.ndarray:
    """Dense matrix of a complete weighted graph, rows ordered by sorted node label."""
    nodes = sorted(graph.nodes())
    mat = nx.to_numpy_array(graph, nodelist=nodes, weight="weight", dtype=np.float64)
    np.fill_diagonal(mat, 0.0)
    mat.setflags(write=False)
    return mat
