from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional
from dataclasses import dataclass

from josaa_api.models import SeatRecord
from josaa_api.store import SeatStore

class ValidationResult(Enum):
    """
    Row-level validation outcomes.
    Replaces simple booleans so tolerated anomalies can be counted separately.
    """
    ACCEPT = "accept"   # Row is clean
    FLAG = "flag"       # Row is kept but carries a data-quality warning
    REJECT = "reject"   # Row is structurally broken; the whole load fails

@dataclass
class StandardizedRow:
    """
    Outcome of standardizing one source row.
    `record` is None only when the row was rejected.
    """
    line_number: int
    outcome: ValidationResult
    record: Optional[SeatRecord] = None
    reason: Optional[str] = None

class DatasetLoaderStrategy(ABC):
    """
    The Loader Contract (Strategy Pattern).
    LIFECYCLE RULES:
    1. Errors surface as LoadError, never as a partially built store.
    2. The returned store is immutable.
    """

    @abstractmethod
    def get_source_slug(self) -> str:
        """Returns unique identifier (e.g., 'csv')"""
        pass

    @abstractmethod
    def load(self, source: str) -> SeatStore:
        pass
