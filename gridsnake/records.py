"""
records.py — In-memory survival records, best first.
"""

import time
from dataclasses import dataclass
from datetime import date
from typing import Callable

from .config import MAX_RECORDS


@dataclass(frozen=True)
class SurvivalRecord:
    time: int
    stage: int
    score: int
    date: str
    timestamp: float


class RecordBook:
    """Append-and-trim list of survival records sorted by time, descending."""

    def __init__(self, max_records: int = MAX_RECORDS,
                 clock: Callable[[], float] = time.time):
        self.max_records = max_records
        self._clock = clock
        self._records: list[SurvivalRecord] = []

    @property
    def records(self) -> tuple[SurvivalRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def add_record(self, time: int, stage: int, score: int) -> SurvivalRecord:
        stamp = self._clock()
        record = SurvivalRecord(
            time=time,
            stage=stage,
            score=score,
            date=date.fromtimestamp(stamp).isoformat(),
            timestamp=stamp,
        )
        self._records.append(record)
        # stable sort: on equal times the earlier record ranks first
        self._records.sort(key=lambda r: r.time, reverse=True)
        del self._records[self.max_records:]
        return record
