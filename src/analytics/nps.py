"""
NPS Segmenter.

Classifies reviews into Promoter/Passive/Detractor and rolls NPS up over
several independent grouping dimensions.
"""

import logging
import math
from typing import Iterable, List, Optional

import pandas as pd

from src.analytics.rollup import (
    DETRACTOR,
    PASSIVE,
    PROMOTER,
    accumulate,
    net_promoter_score,
    require_columns,
)
from src.models.errors import EmptyGroupError, ReviewValidationError
import config.settings as settings

logger = logging.getLogger(__name__)

NPS_CATEGORIES = (PROMOTER, PASSIVE, DETRACTOR)


def classify(rating: int) -> str:
    """
    Map an overall rating (1-10) to its NPS category.

    Promoter >= 9, Passive 7-8, Detractor <= 6.
    """
    if not (settings.MIN_RATING <= rating <= settings.MAX_RATING):
        raise ReviewValidationError(
            f"Invalid overall rating: {rating}. Must be {settings.MIN_RATING}-{settings.MAX_RATING}"
        )
    if rating >= settings.PROMOTER_MIN_RATING:
        return PROMOTER
    if rating >= settings.PASSIVE_MIN_RATING:
        return PASSIVE
    return DETRACTOR


def compute_nps(categories: Iterable[str]) -> float:
    """
    NPS of a group of NPS categories.

    Raises:
        EmptyGroupError: If the group is empty
    """
    categories = list(categories)
    return net_promoter_score(
        promoters=sum(1 for c in categories if c == PROMOTER),
        detractors=sum(1 for c in categories if c == DETRACTOR),
        total=len(categories)
    )


def response_bucket(hours: Optional[float]) -> str:
    """
    Map a management response time to its speed bucket.

    Missing times (None/NaN) go to the "No Response" bucket.
    """
    if hours is None or (isinstance(hours, float) and math.isnan(hours)):
        return settings.NO_RESPONSE_LABEL
    if hours < 0:
        raise ReviewValidationError(f"Invalid response time: {hours}. Must be non-negative")

    for upper_bound, label in settings.RESPONSE_BUCKETS:
        if hours <= upper_bound:
            return label
    return settings.RESPONSE_SLOW_LABEL


def _response_order() -> List[str]:
    return [label for _, label in settings.RESPONSE_BUCKETS] + [
        settings.RESPONSE_SLOW_LABEL,
        settings.NO_RESPONSE_LABEL,
    ]


class NPSSegmenter:
    """
    NPS rollups over the enriched review table.

    Each rollup is computed directly from the review rows, never from
    another rollup's output.
    """

    def overall(self, reviews: pd.DataFrame) -> pd.DataFrame:
        """
        Whole-dataset NPS as a single-row table.

        Columns: total, promoters, passives, detractors, nps
        """
        require_columns(reviews, ["rating_overall", "nps_category"])

        groups = accumulate(
            reviews.itertuples(index=False),
            key=lambda r: "all",
            rating=lambda r: r.rating_overall,
            nps_category=lambda r: r.nps_category
        )
        stats = groups.get("all")
        if stats is None:
            raise EmptyGroupError("all reviews")
        nps = stats.nps()

        logger.info(f"Overall NPS: {nps} across {stats.count} reviews")

        return pd.DataFrame([{
            "total": stats.count,
            "promoters": stats.promoters,
            "passives": stats.passives,
            "detractors": stats.detractors,
            "nps": nps
        }])

    def by_month(self, reviews: pd.DataFrame) -> pd.DataFrame:
        """
        NPS per stay month, sorted by month number.

        Columns: stay_month, stay_month_name, total, promoters, passives, detractors, nps
        """
        require_columns(reviews, ["stay_month", "stay_month_name", "rating_overall", "nps_category"])

        groups = accumulate(
            reviews.itertuples(index=False),
            key=lambda r: (int(r.stay_month), r.stay_month_name),
            rating=lambda r: r.rating_overall,
            nps_category=lambda r: r.nps_category
        )

        rows = [
            {
                "stay_month": month,
                "stay_month_name": month_name,
                "total": stats.count,
                "promoters": stats.promoters,
                "passives": stats.passives,
                "detractors": stats.detractors,
                "nps": stats.nps()
            }
            for (month, month_name), stats in sorted(groups.items(), key=lambda item: item[0][0])
        ]

        logger.info(f"Computed monthly NPS for {len(rows)} months")
        return pd.DataFrame(
            rows,
            columns=["stay_month", "stay_month_name", "total", "promoters", "passives", "detractors", "nps"]
        )

    def by_trip_type(self, reviews: pd.DataFrame) -> pd.DataFrame:
        """
        NPS and mean overall rating per trip type, sorted by NPS (descending).

        Columns: trip_type, reviews, nps, avg_rating
        """
        require_columns(reviews, ["trip_type", "rating_overall", "nps_category"])

        groups = accumulate(
            reviews.itertuples(index=False),
            key=lambda r: r.trip_type,
            rating=lambda r: r.rating_overall,
            nps_category=lambda r: r.nps_category
        )

        rows = [
            {
                "trip_type": trip_type,
                "reviews": stats.count,
                "nps": stats.nps(),
                "avg_rating": stats.avg_rating()
            }
            for trip_type, stats in sorted(groups.items())
        ]
        # Stable sort keeps trip types with equal NPS in alphabetical order
        rows.sort(key=lambda row: row["nps"], reverse=True)

        logger.info(f"Computed NPS for {len(rows)} trip types")
        return pd.DataFrame(rows, columns=["trip_type", "reviews", "nps", "avg_rating"])

    def response_impact(self, reviews: pd.DataFrame) -> pd.DataFrame:
        """
        Satisfaction by management response speed.

        Requires sentiment_score to be joined onto the reviews first.

        Columns: response_category, reviews, avg_rating, avg_sentiment, pct_promoter
        """
        require_columns(
            reviews,
            ["response_category", "rating_overall", "nps_category", "sentiment_score"]
        )

        groups = accumulate(
            reviews.itertuples(index=False),
            key=lambda r: r.response_category,
            rating=lambda r: r.rating_overall,
            nps_category=lambda r: r.nps_category,
            sentiment_score=lambda r: r.sentiment_score
        )

        order = _response_order()
        ranked = sorted(
            groups.items(),
            key=lambda item: (order.index(item[0]) if item[0] in order else len(order), str(item[0]))
        )

        rows = [
            {
                "response_category": category,
                "reviews": stats.count,
                "avg_rating": stats.avg_rating(),
                "avg_sentiment": stats.avg_sentiment(),
                "pct_promoter": stats.pct_promoter()
            }
            for category, stats in ranked
        ]

        logger.info(f"Computed response impact for {len(rows)} response buckets")
        return pd.DataFrame(
            rows,
            columns=["response_category", "reviews", "avg_rating", "avg_sentiment", "pct_promoter"]
        )

    def segment_summary(self, reviews: pd.DataFrame, key: str) -> pd.DataFrame:
        """
        Rating and NPS summary for any categorical attribute (booking channel, loyalty tier).

        Columns: <key>, reviews, avg_rating, pct_promoter, pct_detractor, nps_score
        """
        require_columns(reviews, [key, "rating_overall", "nps_category"])

        groups = accumulate(
            reviews.itertuples(index=False),
            key=lambda r: getattr(r, key),
            rating=lambda r: r.rating_overall,
            nps_category=lambda r: r.nps_category
        )

        rows = []
        for value, stats in sorted(groups.items(), key=lambda item: str(item[0])):
            pct_promoter = stats.pct_promoter()
            pct_detractor = stats.pct_detractor()
            rows.append({
                key: value,
                "reviews": stats.count,
                "avg_rating": stats.avg_rating(),
                "pct_promoter": pct_promoter,
                "pct_detractor": pct_detractor,
                "nps_score": round(pct_promoter - pct_detractor, 1)
            })

        logger.info(f"Computed {key} summary for {len(rows)} segments")
        return pd.DataFrame(
            rows,
            columns=[key, "reviews", "avg_rating", "pct_promoter", "pct_detractor", "nps_score"]
        )


# Design Rationale and Trade-offs:
#
# 1. Why raise EmptyGroupError instead of returning NaN?
#    - A NaN NPS in a CSV reads like a data problem downstream
#    - Groups come from the data, so an empty one is a caller bug
#    - Trade-off: Callers building custom groups must check counts first
#
# 2. Why a fixed order for response buckets?
#    - Fast to slow reads naturally in a chart
#    - Trade-off: New bucket labels sort after the known ones
#
# 3. Why one accumulator pass per rollup?
#    - Each rollup is independent and cheap at hotel scale
#    - Trade-off: The table is scanned once per dimension
