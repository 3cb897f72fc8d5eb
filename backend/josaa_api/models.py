from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

# --- PILLAR 1: SEAT TAXONOMY ---

class InstituteType(str, Enum):
    ADVANCED = "ADVANCED"   # Joint-entrance (advanced exam) institutes
    STANDARD = "STANDARD"   # Everything admitted on the main exam

class Quota(str, Enum):
    ALL_INDIA = "ALL_INDIA"
    HOME_STATE = "HOME_STATE"

class GenderPolicy(str, Enum):
    GENDER_NEUTRAL = "Gender-Neutral"
    FEMALE_ONLY = "Female-only (including Supernumerary)"

class Tier(str, Enum):
    ADVANCED = "adv"
    MAIN = "mains"

# Source codes as they appear in the tabular dataset
ADVANCED_INSTITUTE_CODE = "IIT"
ALL_INDIA_QUOTA_CODE = "AI"

# --- PILLAR 2: THE SEAT FACT ---

@dataclass(frozen=True)
class SeatRecord:
    """
    One historical seat boundary.
    Numeric fields are parsed once at load time; `raw` keeps the source row
    so responses can be serialized field-for-field.
    """
    institute: str
    program: str
    institute_type: InstituteType
    quota: Quota
    seat_category: str
    gender_policy: GenderPolicy
    opening_rank: int
    closing_rank: int

    # Context & display
    institute_type_code: str = ""
    quota_code: str = ""
    state_id: Optional[int] = None
    state: Optional[str] = None
    record_id: Optional[str] = None

    raw: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}), compare=False, repr=False)

    def as_row(self) -> Dict[str, Any]:
        return dict(self.raw)

# --- PILLAR 3: QUERY & RESULT ---

@dataclass(frozen=True)
class SearchQuery:
    main_rank: int
    reservation_code: str = "O"
    is_female: bool = False
    home_state_id: int = 0
    advanced_rank: Optional[int] = None
    tolerance_pct: float = 2.5
    result_cap: int = 20

    @property
    def has_advanced_rank(self) -> bool:
        # Zero means "not supplied" at the HTTP boundary
        return bool(self.advanced_rank)

@dataclass(frozen=True)
class SearchResult:
    advanced: Tuple[SeatRecord, ...] = ()
    main: Tuple[SeatRecord, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.advanced and not self.main

@dataclass(frozen=True)
class DatasetStats:
    total_records: int = 0
    unique_institutes: int = 0
    unique_programs: int = 0
    unique_quotas: int = 0
    unique_genders: int = 0
    unique_states: int = 0
