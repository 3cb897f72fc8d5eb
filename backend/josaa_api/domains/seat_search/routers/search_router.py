import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from josaa_api.config import settings
from josaa_api.dataset import get_store
from josaa_api.exceptions import InvalidQuery, NoResults
from josaa_api.models import SearchQuery
from josaa_api.store import SeatStore
from josaa_api.domains.seat_search.schemas.search_schemas import SearchResponse
from josaa_api.domains.seat_search.services.search_service import SeatSearchService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Seat Search"])

search_service = SeatSearchService()

@router.get("/search", response_model=SearchResponse)
def search_seats(
    main: int = Query(..., description="Main-exam rank"),
    resver: str = Query("O", description="Reservation code (O, E, ON, SC, ST, OP, ONP, EP, SCP, STP)"),
    gend: Literal["M", "F"] = Query("M"),
    stid: int = Query(0, description="Home-state id"),
    adv: int = Query(0, description="Advanced-exam rank; 0 skips the advanced tier"),
    tolaran: float = Query(settings.DEFAULT_TOLERANCE, description="Tolerance percentage"),
    reqlen: int = Query(settings.DEFAULT_RESULT_CAP, ge=0, description="Max results per tier"),
    store: SeatStore = Depends(get_store),
):
    query = SearchQuery(
        main_rank=main,
        reservation_code=resver,
        is_female=gend == "F",
        home_state_id=stid,
        advanced_rank=adv or None,
        tolerance_pct=tolaran,
        result_cap=reqlen,
    )
    try:
        result = search_service.search(store, query)
    except InvalidQuery as e:
        logger.warning(f"Rejected search: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except NoResults as e:
        raise HTTPException(status_code=404, detail=str(e))
    return SearchResponse.from_result(result)

@router.get("/check")
def check_record(id: Optional[str] = None, store: SeatStore = Depends(get_store)):
    if not id:
        raise HTTPException(status_code=400, detail="Please provide an ID to check.")
    matches = store.find_by_id(id)
    if not matches:
        raise HTTPException(status_code=404, detail="Record not found.")
    return [r.as_row() for r in matches]
