import os
from types import MappingProxyType
from typing import Callable, List, Optional

import pytest

from josaa_api.models import GenderPolicy, InstituteType, Quota, SeatRecord
from josaa_api.store import SeatStore

CSV_HEADER = "Id,Institute,Academic-Program-Name,Quota,SeatType,Gender,OpeningRank,ClosingRank,Type,StateId,State"


def _build_seat(
    closing: int,
    opening: int = 1,
    institute: str = "NIT Example",
    program: str = "Computer Science and Engineering",
    advanced: bool = False,
    quota_code: str = "AI",
    state_id: Optional[int] = None,
    category: str = "OPEN",
    female_only: bool = False,
    record_id: Optional[str] = None,
    state: Optional[str] = None,
) -> SeatRecord:
    type_code = "IIT" if advanced else "NIT"
    gender = GenderPolicy.FEMALE_ONLY if female_only else GenderPolicy.GENDER_NEUTRAL
    raw = {
        "Id": record_id or "",
        "Institute": institute,
        "Academic-Program-Name": program,
        "Quota": quota_code,
        "SeatType": category,
        "Gender": gender.value,
        "OpeningRank": str(opening),
        "ClosingRank": str(closing),
        "Type": type_code,
        "StateId": "" if state_id is None else str(state_id),
        "State": state or "",
    }
    return SeatRecord(
        institute=institute,
        program=program,
        institute_type=InstituteType.ADVANCED if advanced else InstituteType.STANDARD,
        quota=Quota.ALL_INDIA if quota_code == "AI" else Quota.HOME_STATE,
        seat_category=category,
        gender_policy=gender,
        opening_rank=opening,
        closing_rank=closing,
        institute_type_code=type_code,
        quota_code=quota_code,
        state_id=state_id,
        state=state,
        record_id=record_id,
        raw=MappingProxyType(raw),
    )


@pytest.fixture
def make_seat() -> Callable[..., SeatRecord]:
    """Factory for SeatRecords. Defaults: standard-tier, all-India, OPEN, gender-neutral."""
    return _build_seat


@pytest.fixture
def sample_records() -> List[SeatRecord]:
    """
    Dataset behind the end-to-end scenarios.
    Main-tier thresholds for rank 50_000 at 2.5% tolerance:
      male   -> 48_750
      female -> 47_500
    """
    return [
        # --- Main tier, eligible for a male OPEN candidate from state 7 ---
        _build_seat(closing=60_000, opening=40_000, institute="NIT Alpha", record_id="m-60000"),
        _build_seat(closing=52_000, opening=100, institute="NIT Beta", record_id="m-52000-o100"),
        _build_seat(closing=49_000, opening=30_000, institute="NIT Gamma", record_id="m-49000"),
        _build_seat(closing=52_000, opening=50, institute="NIT Delta", record_id="m-52000-o50"),
        _build_seat(closing=48_750, opening=20_000, institute="NIT Epsilon", record_id="m-48750"),
        _build_seat(closing=55_000, opening=45_000, institute="State College Seven",
                    quota_code="HS", state_id=7, record_id="hs-7"),

        # --- Main tier, excluded for the male candidate ---
        _build_seat(closing=48_749, opening=10_000, institute="NIT Zeta", record_id="m-48749"),
        _build_seat(closing=48_000, opening=9_000, institute="NIT Eta", record_id="m-48000"),
        _build_seat(closing=55_000, opening=45_000, institute="State College Eight",
                    quota_code="HS", state_id=8, record_id="hs-8"),
        _build_seat(closing=50_000, opening=41_000, institute="NIT Theta",
                    female_only=True, record_id="f-50000"),
        _build_seat(closing=70_000, opening=60_000, institute="NIT Iota",
                    category="OBC-NCL", record_id="obc-70000"),

        # --- Advanced tier ---
        _build_seat(closing=7_000, opening=3_000, institute="IIT North", advanced=True, record_id="a-7000"),
        _build_seat(closing=9_000, opening=4_000, institute="IIT South", advanced=True, record_id="a-9000"),
        _build_seat(closing=8_000, opening=2_000, institute="IIT East", advanced=True,
                    quota_code="HS", state_id=7, record_id="a-hs"),
        _build_seat(closing=70_000, opening=1, institute="IIT West", advanced=True, record_id="a-70000"),
    ]


@pytest.fixture
def sample_store(sample_records) -> SeatStore:
    return SeatStore(sample_records, source="memory")


@pytest.fixture
def write_csv(tmp_path) -> Callable[..., str]:
    """Writes CSV lines (header prepended unless given) and returns the path."""
    def _write(lines: List[str], header: Optional[str] = CSV_HEADER, name: str = "seats.csv") -> str:
        path = os.path.join(str(tmp_path), name)
        content = [header] + list(lines) if header is not None else list(lines)
        with open(path, "w", encoding="utf-8") as f:
            f.write("\n".join(content) + "\n")
        return path
    return _write
