from typing import Dict, FrozenSet

from josaa_api.models import GenderPolicy
from josaa_api.exceptions import UnknownCode

class CategoryResolver:
    """
    Maps a candidate's reservation code to the single seat category it
    competes under.
    FLAT POLICY: one code -> exactly one label. An EWS candidate does NOT
    additionally match OPEN seats.
    """

    RESERVATIONS: Dict[str, str] = {
        "O": "OPEN",
        "E": "EWS",
        "ON": "OBC-NCL",
        "SC": "SC",
        "ST": "ST",
        "OP": "OPEN (PwD)",
        "ONP": "OBC-NCL (PwD)",
        "EP": "EWS (PwD)",
        "SCP": "SC (PwD)",
        "STP": "ST (PwD)",
    }

    SEAT_CATEGORIES: FrozenSet[str] = frozenset(RESERVATIONS.values())

    @classmethod
    def resolve(cls, code: str) -> str:
        label = cls.RESERVATIONS.get(code)
        if label is None:
            raise UnknownCode(code)
        return label

    @classmethod
    def is_known_category(cls, label: str) -> bool:
        return label in cls.SEAT_CATEGORIES

    @staticmethod
    def gender_matches(policy: GenderPolicy, is_female: bool) -> bool:
        """Female candidates may take any seat; everyone else only gender-neutral ones."""
        return is_female or policy == GenderPolicy.GENDER_NEUTRAL
