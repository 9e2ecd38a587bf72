"""
Review data model.

Represents one cleaned hotel guest review as handed over by the ETL stage.
"""

import numbers
from dataclasses import dataclass, asdict
from typing import Optional

from src.models.errors import ReviewValidationError

RATING_FIELDS = (
    "rating_overall",
    "rating_cleanliness",
    "rating_service",
    "rating_location",
    "rating_value",
    "rating_food",
)


@dataclass(frozen=True)
class Review:
    """
    Cleaned guest review.
    The core only derives new fields from it, never mutates it.
    """
    review_id: str  # Unique identifier for the review
    rating_overall: int  # 1-10
    rating_cleanliness: int
    rating_service: int
    rating_location: int
    rating_value: int
    rating_food: int
    review_text: str = ""  # Free text, possibly empty
    trip_type: str = ""
    room_type: str = ""
    booking_channel: str = ""
    loyalty_tier: str = ""
    stay_month: int = 1  # 1-12
    stay_month_name: str = ""
    stay_quarter: str = ""  # "Q1".."Q4"
    response_time_hours: Optional[float] = None  # None when the hotel never replied
    response_category: Optional[str] = None  # Derived from response_time_hours when absent

    def __post_init__(self):
        for name in RATING_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral) or not (1 <= value <= 10):
                raise ReviewValidationError(
                    f"Invalid {name} for review {self.review_id}: {value!r}. Must be an integer 1-10"
                )

        if not (1 <= self.stay_month <= 12):
            raise ReviewValidationError(
                f"Invalid stay_month for review {self.review_id}: {self.stay_month}. Must be 1-12"
            )

        if self.response_time_hours is not None and self.response_time_hours < 0:
            raise ReviewValidationError(
                f"Invalid response_time_hours for review {self.review_id}: "
                f"{self.response_time_hours}. Must be non-negative"
            )

        if self.review_text is None:
            # Frozen dataclass: normalize through object.__setattr__
            object.__setattr__(self, "review_text", "")

    def to_dict(self) -> dict:
        """Convert to a flat dict (one output table row)."""
        return asdict(self)


# Design Rationale and Trade-offs:
#
# 1. Why a frozen dataclass?
#    - Analytics derive new tables and never edit a review
#    - Trade-off: None normalization needs object.__setattr__
#
# 2. Why accept any Integral rating?
#    - Values read from pandas are numpy integers
#    - Booleans are still rejected
#    - Trade-off: None
