import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .progress import ProgressRecord


BAR = "█"


@dataclass
class Bucket:
    bottom: int
    top: int
    total: float = 0.0


def progress_distribution(
    records: Iterable[ProgressRecord], last_generation: int, buckets: int = 10
) -> List[Bucket]:
    """
    Group improvement mass into ``buckets`` equal slices of generations
    1..last_generation. Each record lands in exactly one slice.
    """
    span = max(last_generation, 1)
    # Bounds are ceil(i * span / buckets) + 1 .. ceil((i + 1) * span / buckets), matching idx below.
    groups = [
        Bucket(bottom=-(-i * span // buckets) + 1, top=-(-(i + 1) * span // buckets))
        for i in range(buckets)
    ]
    for rec in records:
        idx = min(buckets - 1, max(0, (rec.generation - 1) * buckets // span))
        groups[idx].total += rec.improvement
    return groups


def render_histogram(groups: Sequence[Bucket]) -> str:
    total = sum(g.total for g in groups)
    lines = []
    for i, group in enumerate(groups):
        pct = round(group.total / total * 100, 2) if total > 0 else 0.0
        bars = BAR * int(math.ceil(pct / 2))
        lines.append(f"{i + 1}/{len(groups)}th\t{bars} {pct}% ({round(group.total)})")
    return "\n".join(lines)


def format_tour(tour: Sequence[int]) -> str:
    return ", ".join(str(city) for city in tour)
