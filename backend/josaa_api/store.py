from typing import Iterable, List, Optional, Tuple

from josaa_api.models import DatasetStats, SeatRecord

class SeatStore:
    """
    Immutable in-memory snapshot of the seat dataset.
    READ-ONLY POLICY: built once by the loader, never mutated afterwards, so
    any number of requests may read it concurrently without locking.
    """

    __slots__ = ("_records", "_stats", "_source")

    def __init__(self, records: Iterable[SeatRecord], stats: Optional[DatasetStats] = None, source: Optional[str] = None):
        self._records: Tuple[SeatRecord, ...] = tuple(records)
        self._stats = stats or self._compute_stats(self._records)
        self._source = source

    @staticmethod
    def _compute_stats(records: Tuple[SeatRecord, ...]) -> DatasetStats:
        return DatasetStats(
            total_records=len(records),
            unique_institutes=len({r.institute for r in records}),
            unique_programs=len({r.program for r in records}),
            unique_quotas=len({r.quota_code for r in records}),
            unique_genders=len({r.gender_policy for r in records}),
            unique_states=len({r.state for r in records if r.state}),
        )

    @property
    def source(self) -> Optional[str]:
        return self._source

    @property
    def stats(self) -> DatasetStats:
        return self._stats

    def all(self) -> Tuple[SeatRecord, ...]:
        return self._records

    def count(self) -> int:
        return len(self._records)

    def page(self, page: int, limit: int) -> Tuple[SeatRecord, ...]:
        start = (page - 1) * limit
        return self._records[start:start + limit]

    def find_by_id(self, record_id: str) -> List[SeatRecord]:
        return [r for r in self._records if r.record_id == record_id]

    def institutes(self) -> List[str]:
        return sorted({r.institute for r in self._records})

    def programs(self) -> List[str]:
        return sorted({r.program for r in self._records})

    def __len__(self) -> int:
        return len(self._records)
