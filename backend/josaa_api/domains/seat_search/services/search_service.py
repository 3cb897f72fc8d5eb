import logging

from josaa_api.models import SearchQuery, SearchResult, Tier
from josaa_api.store import SeatStore
from josaa_api.exceptions import InvalidResultCap, NoResults
from josaa_api.domains.seat_search.services.category_resolver import CategoryResolver
from josaa_api.domains.seat_search.services.rank_tolerance import validate_tolerance
from josaa_api.domains.seat_search.services.eligibility_filter import filter_records
from josaa_api.domains.seat_search.services.ranker import rank, truncate

logger = logging.getLogger("SeatSearchService")

class SeatSearchService:
    """
    Rank-eligibility search.
    Runs the eligibility filter once per tier against the same immutable
    snapshot, then ranks and truncates each tier independently.
    """

    def search(self, store: SeatStore, query: SearchQuery) -> SearchResult:
        # 1. Reject malformed queries before touching the data
        CategoryResolver.resolve(query.reservation_code)
        validate_tolerance(query.tolerance_pct)
        if query.result_cap < 0:
            raise InvalidResultCap(query.result_cap)

        # 2. Filter -> Rank -> Truncate, per tier
        advanced = truncate(rank(filter_records(store, query, Tier.ADVANCED)), query.result_cap)
        main = truncate(rank(filter_records(store, query, Tier.MAIN)), query.result_cap)

        result = SearchResult(advanced=tuple(advanced), main=tuple(main))
        logger.info(
            f"Search resver={query.reservation_code} female={query.is_female} "
            f"stid={query.home_state_id} -> adv={len(result.advanced)} mains={len(result.main)}"
        )

        # 3. Empty-but-valid is its own outcome
        if result.is_empty:
            raise NoResults()
        return result
