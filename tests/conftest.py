"""
Shared fixtures: in-memory lexicon, stop words and a review factory.

Nothing here touches the NLTK corpora, so the suite runs offline.
"""

import pytest

from src.analytics.tokenizer import Tokenizer
from src.lexicon.sentiment_lexicon import SentimentLexicon
from src.models.review import Review

STOP_WORDS = {
    "the", "a", "an", "and", "but", "was", "were", "is", "it", "to", "of",
    "in", "at", "our", "we", "very", "so", "with",
}

LEXICON = {
    "great": "positive",
    "spotless": "positive",
    "friendly": "positive",
    "quick": "positive",
    "comfortable": "positive",
    "rude": "negative",
    "dirty": "negative",
    "noisy": "negative",
    "slow": "negative",
}


@pytest.fixture
def stop_words():
    return set(STOP_WORDS)


@pytest.fixture
def tokenizer():
    return Tokenizer(STOP_WORDS)


@pytest.fixture
def lexicon():
    return SentimentLexicon.from_pairs(LEXICON)


@pytest.fixture
def make_review():
    """Factory for valid reviews; override any field by keyword."""
    def _make(review_id="r1", rating=8, text="", **overrides):
        fields = {
            "review_id": review_id,
            "rating_overall": rating,
            "rating_cleanliness": 8,
            "rating_service": 8,
            "rating_location": 8,
            "rating_value": 8,
            "rating_food": 8,
            "review_text": text,
            "trip_type": "Business",
            "room_type": "King Room",
            "booking_channel": "Direct Website",
            "loyalty_tier": "Gold",
            "stay_month": 1,
            "stay_month_name": "January",
            "stay_quarter": "Q1",
            "response_time_hours": None,
        }
        fields.update(overrides)
        return Review(**fields)

    return _make
