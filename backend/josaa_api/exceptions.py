from typing import List, Optional


class SeatSearchError(Exception):
    """Root of every error raised by the seat search core."""


class LoadError(SeatSearchError):
    """
    The dataset could not be read or parsed.
    Fatal at startup: the API refuses to serve data until the source is fixed.
    """

    def __init__(self, message: str, source: Optional[str] = None, row_errors: Optional[List[str]] = None):
        super().__init__(message)
        self.source = source
        self.row_errors = row_errors or []


class InvalidQuery(SeatSearchError):
    """A query parameter is outside the accepted domain."""


class UnknownCode(InvalidQuery):
    def __init__(self, code: str):
        super().__init__(f"Unknown reservation code: {code!r}")
        self.code = code


class InvalidTolerance(InvalidQuery):
    def __init__(self, tolerance_pct: float):
        super().__init__(f"Tolerance must be a finite, non-negative percentage (got {tolerance_pct!r})")
        self.tolerance_pct = tolerance_pct


class InvalidResultCap(InvalidQuery):
    def __init__(self, cap: int):
        super().__init__(f"Result cap must be non-negative (got {cap!r})")
        self.cap = cap


class NoResults(SeatSearchError):
    """Well-formed query that matched nothing in either tier."""

    def __init__(self, message: str = "No results found for the given criteria."):
        super().__init__(message)
