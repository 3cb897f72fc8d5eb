from typing import List

from fastapi import APIRouter, Depends, Query

from josaa_api.dataset import get_store
from josaa_api.store import SeatStore
from josaa_api.domains.seat_search.schemas.search_schemas import CountResponse, RecordsPage, StatsResponse

router = APIRouter(prefix="/api", tags=["Dataset Catalog"])

@router.get("/stats", response_model=StatsResponse)
def get_stats(store: SeatStore = Depends(get_store)):
    return StatsResponse.model_validate(store.stats)

@router.get("/records/count", response_model=CountResponse)
def count_records(store: SeatStore = Depends(get_store)):
    return {"count": store.count()}

@router.get("/records", response_model=RecordsPage)
def list_records(
    limit: int = Query(100, ge=1),
    page: int = Query(1, ge=1),
    store: SeatStore = Depends(get_store),
):
    return {
        "total": store.count(),
        "page": page,
        "limit": limit,
        "data": [r.as_row() for r in store.page(page, limit)],
    }

@router.get("/institutes", response_model=List[str])
def list_institutes(store: SeatStore = Depends(get_store)):
    return store.institutes()

@router.get("/programs", response_model=List[str])
def list_programs(store: SeatStore = Depends(get_store)):
    return store.programs()
