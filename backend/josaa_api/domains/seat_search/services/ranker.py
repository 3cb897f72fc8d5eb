from typing import Any, Iterable, List, Sequence, Tuple

from josaa_api.models import SeatRecord
from josaa_api.exceptions import InvalidResultCap


def _ordering_key(record: SeatRecord) -> Tuple[Any, ...]:
    # Primary: closing rank, then opening rank.
    # Remaining attributes only break exact ties so the output does not
    # depend on input order.
    return (
        record.closing_rank,
        record.opening_rank,
        record.institute,
        record.program,
        record.quota_code,
        record.state_id if record.state_id is not None else -1,
        record.seat_category,
        record.gender_policy.value,
        record.record_id or "",
        tuple(sorted((str(k), str(v)) for k, v in record.raw.items())),
    )


def rank(records: Iterable[SeatRecord]) -> List[SeatRecord]:
    """Most selective seats (smallest closing rank) first."""
    return sorted(records, key=_ordering_key)


def truncate(ranked: Sequence[SeatRecord], cap: int) -> List[SeatRecord]:
    if cap < 0:
        raise InvalidResultCap(cap)
    return list(ranked[:min(cap, len(ranked))])
