import math

from josaa_api.exceptions import InvalidTolerance

# Female candidates get a doubled tolerance band
FEMALE_MULTIPLIER = 2
DEFAULT_MULTIPLIER = 1


def validate_tolerance(tolerance_pct: float) -> float:
    if tolerance_pct is None or not math.isfinite(tolerance_pct) or tolerance_pct < 0:
        raise InvalidTolerance(tolerance_pct)
    return tolerance_pct


def adjust(raw_rank: int, tolerance_pct: float, is_female: bool) -> int:
    """
    Loosens a raw rank by the tolerance percentage.
    floor(rank * (100 - multiplier * tolerance) / 100)

    Tolerances of 100% or more produce zero/negative thresholds. That is
    allowed: every closing rank then clears the threshold.
    """
    validate_tolerance(tolerance_pct)
    multiplier = FEMALE_MULTIPLIER if is_female else DEFAULT_MULTIPLIER
    return math.floor(raw_rank * (100 - multiplier * tolerance_pct) / 100)
