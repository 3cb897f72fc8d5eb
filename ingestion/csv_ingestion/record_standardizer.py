import re
from types import MappingProxyType
from typing import Any, Dict, Optional, Tuple

from josaa_api.models import (
    ADVANCED_INSTITUTE_CODE, ALL_INDIA_QUOTA_CODE,
    GenderPolicy, InstituteType, Quota, SeatRecord,
)
from josaa_api.domains.seat_search.services.category_resolver import CategoryResolver
from ingestion.common.interface.strategy_interface import StandardizedRow, ValidationResult

class SeatRowStandardizer:
    """
    Converts raw CSV rows into typed SeatRecords.
    Numeric fields are parsed here, once, so queries never touch strings.
    """

    # --- SOURCE COLUMNS ---
    COL_ID = "Id"
    COL_INSTITUTE = "Institute"
    COL_PROGRAM = "Academic-Program-Name"
    COL_QUOTA = "Quota"
    COL_SEAT_TYPE = "SeatType"
    COL_GENDER = "Gender"
    COL_OPENING = "OpeningRank"
    COL_CLOSING = "ClosingRank"
    COL_TYPE = "Type"
    COL_STATE_ID = "StateId"
    COL_STATE = "State"

    REQUIRED_COLUMNS = (
        COL_INSTITUTE, COL_PROGRAM, COL_QUOTA, COL_SEAT_TYPE,
        COL_GENDER, COL_OPENING, COL_CLOSING, COL_TYPE,
    )

    # Leading integer only: "1234P" (preparatory rank) -> 1234
    RANK_PATTERN = re.compile(r'^\s*(\d+)')
    STATE_ID_PATTERN = re.compile(r'^\s*-?\d+\s*$')

    @classmethod
    def parse_rank(cls, raw: Any) -> Optional[int]:
        if raw is None: return None
        match = cls.RANK_PATTERN.match(str(raw))
        if not match: return None
        value = int(match.group(1))
        return value if value > 0 else None

    @classmethod
    def parse_state_id(cls, raw: Any) -> Tuple[bool, Optional[int]]:
        """Returns (ok, value). Blank is ok and means 'no state'."""
        text = str(raw or "").strip()
        if not text:
            return True, None
        if not cls.STATE_ID_PATTERN.match(text):
            return False, None
        return True, int(text)

    @staticmethod
    def parse_gender(raw: str) -> Optional[GenderPolicy]:
        text = raw.strip().lower()
        if text.startswith("female"):
            return GenderPolicy.FEMALE_ONLY
        if text == GenderPolicy.GENDER_NEUTRAL.value.lower():
            return GenderPolicy.GENDER_NEUTRAL
        return None

    @classmethod
    def standardize(cls, row: Dict[str, Any], line_number: int) -> StandardizedRow:
        def text(col: str) -> str:
            return str(row.get(col) or "").strip()

        def reject(reason: str) -> StandardizedRow:
            return StandardizedRow(line_number, ValidationResult.REJECT, None, f"line {line_number}: {reason}")

        # 1. Identity
        institute = text(cls.COL_INSTITUTE)
        program = text(cls.COL_PROGRAM)
        if not institute or not program:
            return reject("missing institute or program name")

        # 2. Taxonomy
        type_code = text(cls.COL_TYPE)
        if not type_code:
            return reject("missing institute type")
        institute_type = InstituteType.ADVANCED if type_code == ADVANCED_INSTITUTE_CODE else InstituteType.STANDARD

        quota_code = text(cls.COL_QUOTA)
        if not quota_code:
            return reject("missing quota")
        quota = Quota.ALL_INDIA if quota_code == ALL_INDIA_QUOTA_CODE else Quota.HOME_STATE

        seat_category = text(cls.COL_SEAT_TYPE)
        if not CategoryResolver.is_known_category(seat_category):
            return reject(f"unknown seat category {seat_category!r}")

        gender_policy = cls.parse_gender(text(cls.COL_GENDER))
        if gender_policy is None:
            return reject(f"unknown gender policy {text(cls.COL_GENDER)!r}")

        ok, state_id = cls.parse_state_id(row.get(cls.COL_STATE_ID))
        if not ok:
            return reject(f"non-numeric state id {text(cls.COL_STATE_ID)!r}")

        # 3. The Core Fact
        opening = cls.parse_rank(row.get(cls.COL_OPENING))
        closing = cls.parse_rank(row.get(cls.COL_CLOSING))
        if opening is None or closing is None:
            return reject(
                f"ranks must be positive integers (opening={text(cls.COL_OPENING)!r}, closing={text(cls.COL_CLOSING)!r})"
            )

        record = SeatRecord(
            institute=institute,
            program=program,
            institute_type=institute_type,
            quota=quota,
            seat_category=seat_category,
            gender_policy=gender_policy,
            opening_rank=opening,
            closing_rank=closing,
            institute_type_code=type_code,
            quota_code=quota_code,
            state_id=state_id,
            state=text(cls.COL_STATE) or None,
            record_id=text(cls.COL_ID) or None,
            raw=MappingProxyType(dict(row)),
        )

        # 4. Quality: inverted ranks are tolerated, not trusted
        if opening > closing:
            return StandardizedRow(
                line_number, ValidationResult.FLAG, record,
                f"line {line_number}: opening rank {opening} > closing rank {closing}",
            )
        return StandardizedRow(line_number, ValidationResult.ACCEPT, record)
