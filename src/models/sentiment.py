"""
Sentiment and department mention data models.

Derived records computed from a Review during a pipeline run.
"""

from dataclasses import dataclass
from typing import Optional

import config.settings as settings

POSITIVE = "positive"
NEGATIVE = "negative"
POLARITIES = (POSITIVE, NEGATIVE)


def label_for_score(score: int) -> str:
    """
    Map a sentiment score to its label.

    Scores of exactly +1 and -1 are Neutral: a label needs |score| > 1.
    """
    if score >= settings.POSITIVE_LABEL_MIN_SCORE:
        return "Positive"
    if score <= settings.NEGATIVE_LABEL_MAX_SCORE:
        return "Negative"
    return "Neutral"


@dataclass(frozen=True)
class ReviewSentiment:
    """
    Lexicon word counts for a single review.
    """
    review_id: Optional[str] = None
    positive_words: int = 0
    negative_words: int = 0

    def __post_init__(self):
        if self.positive_words < 0 or self.negative_words < 0:
            raise ValueError(
                f"Invalid word counts for review {self.review_id}: "
                f"positive={self.positive_words}, negative={self.negative_words}"
            )

    @property
    def sentiment_score(self) -> int:
        return self.positive_words - self.negative_words

    @property
    def sentiment_label(self) -> str:
        return label_for_score(self.sentiment_score)

    def to_dict(self) -> dict:
        return {
            "positive_words": self.positive_words,
            "negative_words": self.negative_words,
            "sentiment_score": self.sentiment_score,
            "sentiment_label": self.sentiment_label,
        }


@dataclass(frozen=True)
class DepartmentMention:
    """
    A review flagged as referencing a hotel department.
    At most one per (review_id, department).
    """
    review_id: str
    department: str
    keyword: str  # First keyword of the department found in the text
