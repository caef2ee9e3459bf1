from typing import Iterator, List, NamedTuple, Tuple


class ProgressRecord(NamedTuple):
    generation: int
    improvement: float


class ProgressLog:
    """Append-only history of new-best events; never cleared between runs."""

    def __init__(self):
        self._records: List[ProgressRecord] = []

    def record(self, generation: int, improvement: float) -> ProgressRecord:
        rec = ProgressRecord(generation, improvement)
        self._records.append(rec)
        return rec

    @property
    def records(self) -> Tuple[ProgressRecord, ...]:
        return tuple(self._records)

    def total(self) -> float:
        return sum(r.improvement for r in self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ProgressRecord]:
        return iter(tuple(self._records))
