import math
from typing import Optional, Sequence

import numpy as np


def tour_length(dist_mat: np.ndarray, tour: Sequence[int]) -> float:
    """Closed-tour length: consecutive legs plus the leg back to the tour's first city."""
    idx = np.asarray(tour, dtype=np.intp)
    a = idx
    b = np.roll(idx, -1)
    return float(dist_mat[a, b].sum())


def optimality_gap(length: float, optimum: Optional[float]) -> float:
    if optimum is None or math.isclose(optimum, 0.0):
        return float("inf")
    return (length - optimum) / optimum
