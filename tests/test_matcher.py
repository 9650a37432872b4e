import pytest

from constants import UNKNOWN_LOCATION
from processor.location import is_location_relevant


@pytest.mark.parametrize("location", ["נהריה", "חיפה", "Kfar Saba", "תל אביב-יפו", "מצפה רמון"])
def test_location_is_relevant_to_itself(location):
    assert is_location_relevant(location, location)


@pytest.mark.parametrize("user", ["חיפה", "אילת", "Haifa", UNKNOWN_LOCATION])
def test_unknown_detected_location_is_never_relevant(user):
    assert not is_location_relevant(UNKNOWN_LOCATION, user)
    assert not is_location_relevant("", user)
    assert not is_location_relevant(None, user)


def test_unknown_user_location_does_not_match_by_containment():
    assert not is_location_relevant("נהריה", UNKNOWN_LOCATION)


@pytest.mark.parametrize("detected", ["Israel", "ישראל", "כל הארץ", "גוש דן", "הדרום", "central Israel"])
def test_national_tokens_are_relevant_everywhere(detected):
    assert is_location_relevant(detected, "Haifa")
    assert is_location_relevant(detected, "אילת")


def test_satellite_town_is_relevant_to_anchor_city():
    assert is_location_relevant("news near Ramat Gan", "Tel Aviv-Yafo")
    assert is_location_relevant("רמת גן", "תל אביב-יפו")
    assert is_location_relevant("בת ים", "ת\"א")


def test_proximity_is_not_symmetric():
    assert not is_location_relevant("תל אביב-יפו", "רמת גן")


def test_tel_aviv_aliases_match_each_other():
    assert is_location_relevant("ת\"א", "תל-אביב")


def test_english_and_hebrew_names_match():
    assert is_location_relevant("נהריה", "Nahariya")


def test_containment_in_either_direction():
    assert is_location_relevant("מזרח ירושלים", "ירושלים")
    assert is_location_relevant("חיפה", "מפרץ חיפה")


def test_unrelated_cities_do_not_match():
    assert not is_location_relevant("נהריה", "אילת")
    assert not is_location_relevant("Nahariya", "Eilat")


def test_matching_is_deterministic():
    results = {is_location_relevant("news near Ramat Gan", "Tel Aviv-Yafo") for _ in range(20)}
    assert results == {True}
