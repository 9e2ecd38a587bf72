"""
Group accumulators shared by the rollup tables.

First pass: add each review to its group's running counts and sums.
Second pass: finalize means, percentages and NPS per group.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Hashable, Iterable, Optional

import pandas as pd

from src.models.errors import EmptyGroupError, ReviewValidationError

PROMOTER = "Promoter"
PASSIVE = "Passive"
DETRACTOR = "Detractor"


def require_columns(df: pd.DataFrame, columns: Iterable[str], table: str = "review table") -> None:
    """Fail fast when an input table lacks columns a rollup reads."""
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ReviewValidationError(f"{table} is missing required columns: {missing}")


def net_promoter_score(promoters: int, detractors: int, total: int, group=None) -> float:
    """
    NPS = (promoters - detractors) / total * 100, rounded to one decimal.

    Raises:
        EmptyGroupError: If total is zero
    """
    if total <= 0:
        raise EmptyGroupError(group)
    return round((promoters - detractors) / total * 100, 1)


def percentage(part: int, total: int, group=None) -> float:
    """Share of a group in percent, rounded to one decimal."""
    if total <= 0:
        raise EmptyGroupError(group)
    return round(part / total * 100, 1)


@dataclass
class GroupStats:
    """
    Running counts and sums for one group of reviews.
    """
    key: Hashable = None
    count: int = 0
    rating_sum: float = 0.0
    sentiment_sum: float = 0.0
    sentiment_count: int = 0
    positive_sentiment: int = 0
    promoters: int = 0
    passives: int = 0
    detractors: int = 0

    def add(
        self,
        rating: float,
        nps_category: Optional[str] = None,
        sentiment_score: Optional[float] = None
    ) -> None:
        self.count += 1
        self.rating_sum += rating

        if sentiment_score is not None:
            self.sentiment_count += 1
            self.sentiment_sum += sentiment_score
            if sentiment_score > 0:
                self.positive_sentiment += 1

        if nps_category == PROMOTER:
            self.promoters += 1
        elif nps_category == PASSIVE:
            self.passives += 1
        elif nps_category == DETRACTOR:
            self.detractors += 1

    def avg_rating(self) -> float:
        if self.count == 0:
            raise EmptyGroupError(self.key)
        return round(self.rating_sum / self.count, 2)

    def avg_sentiment(self) -> float:
        if self.sentiment_count == 0:
            raise EmptyGroupError(self.key)
        return round(self.sentiment_sum / self.sentiment_count, 2)

    def pct_positive(self) -> float:
        return percentage(self.positive_sentiment, self.sentiment_count, self.key)

    def pct_promoter(self) -> float:
        return percentage(self.promoters, self.count, self.key)

    def pct_detractor(self) -> float:
        return percentage(self.detractors, self.count, self.key)

    def nps(self) -> float:
        return net_promoter_score(self.promoters, self.detractors, self.count, self.key)


def accumulate(
    rows: Iterable,
    key: Callable,
    rating: Callable,
    nps_category: Optional[Callable] = None,
    sentiment_score: Optional[Callable] = None
) -> Dict[Hashable, GroupStats]:
    """
    Build one GroupStats per distinct key, in first-encountered order.

    Args:
        rows: Review rows (any objects the accessors understand)
        key: Row -> grouping key
        rating: Row -> overall rating
        nps_category: Optional row -> NPS category
        sentiment_score: Optional row -> sentiment score

    Returns:
        Dict of grouping key -> GroupStats
    """
    groups: Dict[Hashable, GroupStats] = {}

    for row in rows:
        group_key = key(row)
        stats = groups.get(group_key)
        if stats is None:
            stats = groups[group_key] = GroupStats(key=group_key)

        stats.add(
            rating(row),
            nps_category(row) if nps_category else None,
            sentiment_score(row) if sentiment_score else None
        )

    return groups


# Design Rationale and Trade-offs:
#
# 1. Why accumulate, then finalize?
#    - One pass over the rows builds counts and sums per group
#    - Means and percentages are derived from finished groups only
#    - Trade-off: Small dataclass instead of a pandas groupby
#
# 2. Why round at finalize time?
#    - Stored sums stay exact; only output values are rounded
#    - Trade-off: Python round() is half-to-even
