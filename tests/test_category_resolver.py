import pytest

from josaa_api.exceptions import UnknownCode
from josaa_api.models import GenderPolicy
from josaa_api.domains.seat_search.services.category_resolver import CategoryResolver

EXPECTED = {
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


@pytest.mark.parametrize("code,label", sorted(EXPECTED.items()))
def test_resolve_each_code_to_exactly_one_label(code, label):
    assert CategoryResolver.resolve(code) == label


def test_table_is_one_to_one():
    assert len(CategoryResolver.RESERVATIONS) == 10
    assert len(CategoryResolver.SEAT_CATEGORIES) == 10


def test_resolution_is_stable():
    assert all(CategoryResolver.resolve("E") == "EWS" for _ in range(5))


@pytest.mark.parametrize("code", ["XX", "", "o", "OPEN", "GEN", " O"])
def test_unknown_code_raises(code):
    with pytest.raises(UnknownCode) as excinfo:
        CategoryResolver.resolve(code)
    assert excinfo.value.code == code


def test_ews_does_not_cascade_to_open():
    # Flat policy: a reservation code never widens to another category
    assert CategoryResolver.resolve("E") != "OPEN"
    assert CategoryResolver.resolve("EP") == "EWS (PwD)"


class TestGenderPredicate:

    def test_female_matches_both_policies(self):
        assert CategoryResolver.gender_matches(GenderPolicy.GENDER_NEUTRAL, is_female=True)
        assert CategoryResolver.gender_matches(GenderPolicy.FEMALE_ONLY, is_female=True)

    def test_male_matches_neutral_only(self):
        assert CategoryResolver.gender_matches(GenderPolicy.GENDER_NEUTRAL, is_female=False)
        assert not CategoryResolver.gender_matches(GenderPolicy.FEMALE_ONLY, is_female=False)
