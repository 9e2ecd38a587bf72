"""
Unit tests for the Department Attributor.
"""

import pandas as pd
import pytest

from src.analytics.departments import DepartmentAttributor, attribute, normalize_keyword_map


def departments_of(mentions):
    return {m.department for m in mentions}


def test_same_department_deduplicated():
    """check-in and check-out both map to Front Desk: one mention, not two."""
    mentions = attribute("r1", "Check-in was slow but check-out was quick. Front desk helped.")

    front_desk = [m for m in mentions if m.department == "Front Desk"]
    assert len(front_desk) == 1
    assert front_desk[0].keyword == "check-in"  # first keyword in map order wins


def test_front_desk_and_housekeeping_scenario():
    text = "The front desk staff were great and the room was spotless"
    assert departments_of(attribute("r1", text)) == {"Front Desk", "Housekeeping"}


def test_case_insensitive_literal_match():
    mentions = attribute("r1", "FRONT DESK and ROOM SERVICE")
    assert departments_of(mentions) == {"Front Desk", "Food & Beverage"}


def test_substring_not_whole_word():
    """Plain substring search: 'barely' contains the keyword 'bar'."""
    mentions = attribute("r1", "We barely slept")
    assert departments_of(mentions) == {"Food & Beverage"}


def test_no_regex_interpretation():
    mentions = attribute("r1", "wifi", [("Amenities", "wi.i")])
    assert mentions == []


@pytest.mark.parametrize("text", ["", None, float("nan"), "Nothing relevant here"])
def test_no_mentions(text):
    assert attribute("r1", text) == []


def test_dict_keyword_map():
    keyword_map = {"Parking": ["garage", "valet"], "Front Desk": ["lobby"]}
    mentions = attribute("r9", "Valet lost the keys in the garage", keyword_map)

    assert len(mentions) == 1
    assert mentions[0].review_id == "r9"
    assert mentions[0].department == "Parking"
    assert mentions[0].keyword == "garage"


def test_normalize_keyword_map_rejects_empty_keyword():
    with pytest.raises(ValueError):
        normalize_keyword_map([("Spa", "  ")])


def test_normalize_keyword_map_lowercases():
    assert normalize_keyword_map({"Spa": ["Sauna "]}) == [("Spa", "sauna")]


@pytest.fixture
def review_table():
    return pd.DataFrame([
        {"review_id": "r1", "review_text": "front desk great", "rating_overall": 10, "sentiment_score": 2},
        {"review_id": "r2", "review_text": "reception rude and check-in slow", "rating_overall": 4, "sentiment_score": -2},
        {"review_id": "r3", "review_text": "pool and spa", "rating_overall": 8, "sentiment_score": 1},
        {"review_id": "r4", "review_text": "", "rating_overall": 6, "sentiment_score": 0},
    ])


def test_mentions_table(review_table):
    attributor = DepartmentAttributor()
    mentions = attributor.mentions(review_table)

    assert list(mentions.columns) == ["review_id", "department", "keyword"]
    assert not mentions.duplicated(subset=["review_id", "department"]).any()
    assert len(mentions) == 3


def test_satisfaction_rollup(review_table):
    satisfaction = DepartmentAttributor().satisfaction(review_table)

    assert list(satisfaction["department"]) == ["Amenities", "Front Desk"]

    front_desk = satisfaction.set_index("department").loc["Front Desk"]
    assert front_desk["mentions"] == 2
    assert front_desk["avg_rating"] == 7.0
    assert front_desk["avg_sentiment"] == 0.0
    assert front_desk["pct_positive"] == 50.0

    amenities = satisfaction.set_index("department").loc["Amenities"]
    assert amenities["mentions"] == 1
    assert amenities["pct_positive"] == 100.0


def test_satisfaction_counts_review_once_per_department():
    """A review matching several Front Desk keywords counts once in the mean."""
    table = pd.DataFrame([
        {"review_id": "r1", "review_text": "check-in, check-out, reception", "rating_overall": 2, "sentiment_score": -3},
        {"review_id": "r2", "review_text": "front desk", "rating_overall": 10, "sentiment_score": 3},
    ])

    row = DepartmentAttributor().satisfaction(table).iloc[0]
    assert row["mentions"] == 2
    assert row["avg_rating"] == 6.0


def test_satisfaction_requires_sentiment(review_table):
    from src.models.errors import ReviewValidationError

    with pytest.raises(ReviewValidationError, match="sentiment_score"):
        DepartmentAttributor().satisfaction(review_table.drop(columns=["sentiment_score"]))


def test_satisfaction_with_missing_text():
    """Empty text read back from CSV arrives as NaN and means no mentions."""
    table = pd.DataFrame([
        {"review_id": "r1", "review_text": float("nan"), "rating_overall": 5, "sentiment_score": 0},
        {"review_id": "r2", "review_text": "housekeeping", "rating_overall": 9, "sentiment_score": 2},
    ])

    attributor = DepartmentAttributor()
    assert list(attributor.mentions(table)["review_id"]) == ["r2"]
    assert list(attributor.satisfaction(table)["department"]) == ["Housekeeping"]


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
