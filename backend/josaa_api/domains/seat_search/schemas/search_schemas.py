from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Literal, Optional

from josaa_api.models import SearchResult

# --- RESPONSE SCHEMAS ---

class SearchResponse(BaseModel):
    adv: List[Dict[str, Any]]
    mains: List[Dict[str, Any]]

    @classmethod
    def from_result(cls, result: SearchResult) -> "SearchResponse":
        return cls(
            adv=[r.as_row() for r in result.advanced],
            mains=[r.as_row() for r in result.main],
        )

class StatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    total_records: int
    unique_institutes: int
    unique_programs: int
    unique_quotas: int
    unique_genders: int
    unique_states: int

class CountResponse(BaseModel):
    count: int

class RecordsPage(BaseModel):
    total: int
    page: int
    limit: int
    data: List[Dict[str, Any]]

class HealthResponse(BaseModel):
    status: Literal["healthy", "unhealthy"]
    dataset: Literal["loaded", "failed", "pending"]
    records: Optional[int] = None
    detail: Optional[str] = None
    environment: str
