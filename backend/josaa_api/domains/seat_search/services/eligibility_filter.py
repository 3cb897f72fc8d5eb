import logging
from typing import List, Optional

from josaa_api.models import InstituteType, Quota, SearchQuery, SeatRecord, Tier
from josaa_api.store import SeatStore
from josaa_api.domains.seat_search.services.category_resolver import CategoryResolver
from josaa_api.domains.seat_search.services.rank_tolerance import adjust

logger = logging.getLogger("EligibilityFilter")

# --- 1. PREDICATES ---

def matches_tier(record: SeatRecord, tier: Tier, home_state_id: int) -> bool:
    if tier == Tier.ADVANCED:
        return record.institute_type == InstituteType.ADVANCED and record.quota == Quota.ALL_INDIA

    if record.institute_type != InstituteType.STANDARD:
        return False
    return record.quota == Quota.ALL_INDIA or (
        record.state_id is not None and record.state_id == home_state_id
    )


def matches_category(record: SeatRecord, seat_category: str) -> bool:
    return record.seat_category == seat_category


def matches_gender(record: SeatRecord, is_female: bool) -> bool:
    return CategoryResolver.gender_matches(record.gender_policy, is_female)


def meets_rank_threshold(record: SeatRecord, threshold: int) -> bool:
    # Larger rank number = weaker performance; a seat is reachable when its
    # historical closing rank is at or beyond the candidate's adjusted rank.
    return record.closing_rank >= threshold

# --- 2. THRESHOLDS ---

def rank_threshold(query: SearchQuery, tier: Tier) -> Optional[int]:
    """Tolerance-adjusted rank for a tier, or None when the tier has no rank."""
    if tier == Tier.ADVANCED:
        if not query.has_advanced_rank:
            return None
        return adjust(query.advanced_rank, query.tolerance_pct, query.is_female)
    return adjust(query.main_rank, query.tolerance_pct, query.is_female)

# --- 3. THE FILTER ---

def filter_records(store: SeatStore, query: SearchQuery, tier: Tier) -> List[SeatRecord]:
    """
    Returns the unordered subset of the store the candidate is eligible for
    in one tier. Raises UnknownCode / InvalidTolerance on malformed queries.
    """
    seat_category = CategoryResolver.resolve(query.reservation_code)
    threshold = rank_threshold(query, tier)
    if threshold is None:
        logger.debug(f"Tier {tier.value}: no rank supplied, skipping")
        return []

    matched = [
        record for record in store.all()
        if matches_tier(record, tier, query.home_state_id)
        and matches_category(record, seat_category)
        and matches_gender(record, query.is_female)
        and meets_rank_threshold(record, threshold)
    ]
    logger.debug(
        f"Tier {tier.value}: category={seat_category} threshold={threshold} matched={len(matched)}"
    )
    return matched
