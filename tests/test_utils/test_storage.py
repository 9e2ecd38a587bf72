"""
Unit tests for the StorageManager.
"""

import json
import os
import tempfile

import numpy as np
import pandas as pd
import pytest

from src.models.errors import ReviewValidationError
from src.utils.storage import StorageManager


def cleaned_rows():
    return [
        {
            "review_id": "R0001", "rating_overall": 9, "rating_cleanliness": 9, "rating_service": 8,
            "rating_location": 10, "rating_value": 8, "rating_food": 7,
            "review_text": "Front desk was great", "trip_type": "Business", "room_type": "King Room",
            "booking_channel": "Expedia", "loyalty_tier": "Gold", "stay_month": 3,
            "stay_month_name": "March", "stay_quarter": "Q1", "response_time_hours": 4.5,
            "response_category": "Fast (0-6h)",
        },
        {
            "review_id": "R0002", "rating_overall": 4, "rating_cleanliness": 3, "rating_service": 4,
            "rating_location": 7, "rating_value": 3, "rating_food": 4,
            "review_text": np.nan, "trip_type": "Family", "room_type": "Junior Suite",
            "booking_channel": "Phone", "loyalty_tier": "None", "stay_month": 7,
            "stay_month_name": "July", "stay_quarter": "Q3", "response_time_hours": np.nan,
            "response_category": "No Response",
        },
    ]


def write_csv(tmpdir, rows, name="reviews_cleaned.csv"):
    path = os.path.join(tmpdir, name)
    pd.DataFrame(rows).to_csv(path, index=False)
    return path


def test_load_reviews():
    with tempfile.TemporaryDirectory() as tmpdir:
        storage = StorageManager(os.path.join(tmpdir, "output"))
        reviews = storage.load_reviews(write_csv(tmpdir, cleaned_rows()))

        assert [r.review_id for r in reviews] == ["R0001", "R0002"]
        assert reviews[0].rating_overall == 9
        assert reviews[0].response_time_hours == 4.5
        assert reviews[1].review_text == ""
        assert reviews[1].response_time_hours is None
        assert reviews[1].response_category == "No Response"
        assert reviews[1].loyalty_tier == "None"


def test_load_reviews_without_optional_columns():
    rows = cleaned_rows()
    for row in rows:
        for column in ("booking_channel", "loyalty_tier", "response_time_hours", "response_category"):
            del row[column]

    with tempfile.TemporaryDirectory() as tmpdir:
        reviews = StorageManager(tmpdir).load_reviews(write_csv(tmpdir, rows))

    assert reviews[0].booking_channel == ""
    assert reviews[0].response_time_hours is None
    assert reviews[0].response_category is None


def test_load_reviews_missing_required_column():
    rows = cleaned_rows()
    for row in rows:
        del row["rating_food"]

    with tempfile.TemporaryDirectory() as tmpdir:
        storage = StorageManager(tmpdir)
        with pytest.raises(ReviewValidationError, match="rating_food"):
            storage.load_reviews(write_csv(tmpdir, rows))


def test_load_reviews_rejects_out_of_range_rating():
    rows = cleaned_rows()
    rows[0]["rating_overall"] = 12

    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(ReviewValidationError, match="R0001"):
            StorageManager(tmpdir).load_reviews(write_csv(tmpdir, rows))


def test_load_reviews_rejects_missing_sub_rating():
    rows = cleaned_rows()
    rows[1]["rating_value"] = np.nan

    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(ReviewValidationError, match="Missing rating_value"):
            StorageManager(tmpdir).load_reviews(write_csv(tmpdir, rows))


def test_load_reviews_rejects_duplicates():
    rows = cleaned_rows()
    rows[1]["review_id"] = "R0001"

    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(ReviewValidationError, match="Duplicate"):
            StorageManager(tmpdir).load_reviews(write_csv(tmpdir, rows))


def test_load_reviews_missing_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(FileNotFoundError):
            StorageManager(tmpdir).load_reviews(os.path.join(tmpdir, "nope.csv"))


def test_save_and_load_table():
    with tempfile.TemporaryDirectory() as tmpdir:
        storage = StorageManager(tmpdir)
        df = pd.DataFrame({"department": ["Spa"], "mentions": [3]})

        path = storage.save_table(df, "dept_satisfaction")
        loaded = storage.load_table("dept_satisfaction")

        assert path == os.path.join(tmpdir, "dept_satisfaction.csv")
        assert loaded.equals(df)
        assert storage.load_table("missing") is None


def test_save_metadata():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = StorageManager(tmpdir).save_metadata({"reviews": 2})

        with open(path) as f:
            assert json.load(f) == {"reviews": 2}


def test_reloaded_review_table_with_empty_text_attributes():
    """A saved enriched table with empty text can be attributed after reload."""
    from src.analytics.departments import DepartmentAttributor

    with tempfile.TemporaryDirectory() as tmpdir:
        storage = StorageManager(tmpdir)
        table = pd.DataFrame([
            {"review_id": "r1", "review_text": "", "rating_overall": 6, "sentiment_score": 0},
            {"review_id": "r2", "review_text": "rude reception", "rating_overall": 3, "sentiment_score": -1},
        ])

        storage.save_table(table, "reviews_with_sentiment")
        reloaded = storage.load_table("reviews_with_sentiment")

        assert reloaded["review_text"].isna().iloc[0]
        satisfaction = DepartmentAttributor().satisfaction(reloaded)
        assert list(satisfaction["department"]) == ["Front Desk"]
        assert satisfaction.iloc[0]["mentions"] == 1


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
