"""
Genetic-algorithm search for short closed TSP tours over 2-D city sets.
"""

__all__ = [
    "data",
    "distance",
    "evaluation",
    "evolutionary",
    "population",
    "progress",
    "report",
]
