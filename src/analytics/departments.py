"""
Department Attributor.

Flags which hotel departments a review talks about via keyword mentions and
rolls satisfaction up per department.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd

from src.analytics.rollup import accumulate, require_columns
from src.models.sentiment import DepartmentMention
import config.settings as settings

logger = logging.getLogger(__name__)

KeywordMap = Union[Mapping[str, Sequence[str]], Iterable[Tuple[str, str]]]


def normalize_keyword_map(keyword_map: KeywordMap) -> List[Tuple[str, str]]:
    """
    Flatten a keyword map into ordered (department, lowercase keyword) pairs.

    Accepts either a dict of department -> keywords or an iterable of
    (department, keyword) pairs.
    """
    if isinstance(keyword_map, Mapping):
        pairs = [(dept, kw) for dept, keywords in keyword_map.items() for kw in keywords]
    else:
        pairs = list(keyword_map)

    normalized = []
    for department, keyword in pairs:
        keyword = keyword.strip().lower()
        if not keyword:
            raise ValueError(f"Empty keyword for department '{department}'")
        normalized.append((department, keyword))
    return normalized


def attribute(
    review_id: str,
    text: Optional[str],
    keyword_map: KeywordMap = settings.DEPARTMENT_KEYWORDS
) -> List[DepartmentMention]:
    """
    Find the departments a review mentions.

    Literal, case-insensitive substring search (not regex, not whole-word).
    Keeps one mention per department: the first keyword that matched.

    Args:
        review_id: Review identifier
        text: Raw review text
        keyword_map: Department keyword configuration

    Returns:
        Department mentions in keyword-map order
    """
    if not isinstance(text, str) or not text:
        return []

    lowered = text.lower()
    mentions: Dict[str, DepartmentMention] = {}

    for department, keyword in normalize_keyword_map(keyword_map):
        if department in mentions:
            continue
        if keyword in lowered:
            mentions[department] = DepartmentMention(review_id, department, keyword)

    return list(mentions.values())


class DepartmentAttributor:
    """
    Attributes reviews to departments and summarizes satisfaction per department.
    """

    def __init__(self, keyword_map: KeywordMap = settings.DEPARTMENT_KEYWORDS):
        """
        Initialize department attributor.

        Args:
            keyword_map: Department keyword configuration
        """
        self.keyword_map = normalize_keyword_map(keyword_map)
        self.departments = list(dict.fromkeys(dept for dept, _ in self.keyword_map))

        logger.info(
            f"Initialized DepartmentAttributor with {len(self.departments)} departments, "
            f"{len(self.keyword_map)} keywords"
        )

    def mentions(self, reviews: pd.DataFrame) -> pd.DataFrame:
        """
        One row per (review_id, department) mention.

        Columns: review_id, department, keyword
        """
        require_columns(reviews, ["review_id", "review_text"])

        rows = []
        for review in reviews.itertuples(index=False):
            for mention in attribute(review.review_id, review.review_text, self.keyword_map):
                rows.append({
                    "review_id": mention.review_id,
                    "department": mention.department,
                    "keyword": mention.keyword
                })

        logger.info(f"Found {len(rows)} department mentions across {len(reviews)} reviews")
        return pd.DataFrame(rows, columns=["review_id", "department", "keyword"])

    def satisfaction(
        self,
        reviews: pd.DataFrame,
        mentions: Optional[pd.DataFrame] = None
    ) -> pd.DataFrame:
        """
        Department satisfaction rollup, sorted by average rating (descending).

        Requires sentiment_score to be joined onto the reviews first.

        Args:
            reviews: Enriched review table
            mentions: Precomputed mentions (computed here when omitted)

        Returns:
            DataFrame with columns department, mentions, avg_rating,
            avg_sentiment, pct_positive
        """
        require_columns(reviews, ["review_id", "review_text", "rating_overall", "sentiment_score"])

        if mentions is None:
            mentions = self.mentions(reviews)

        joined = mentions.merge(
            reviews[["review_id", "rating_overall", "sentiment_score"]],
            on="review_id",
            how="inner"
        )

        groups = accumulate(
            joined.itertuples(index=False),
            key=lambda r: r.department,
            rating=lambda r: r.rating_overall,
            sentiment_score=lambda r: r.sentiment_score
        )

        rows = [
            {
                "department": department,
                "mentions": stats.count,
                "avg_rating": stats.avg_rating(),
                "avg_sentiment": stats.avg_sentiment(),
                "pct_positive": stats.pct_positive()
            }
            for department, stats in sorted(groups.items())
        ]
        rows.sort(key=lambda row: row["avg_rating"], reverse=True)

        logger.info(f"Computed satisfaction for {len(rows)} departments")
        return pd.DataFrame(
            rows,
            columns=["department", "mentions", "avg_rating", "avg_sentiment", "pct_positive"]
        )


# Design Rationale and Trade-offs:
#
# 1. Why substring matching instead of whole words?
#    - "clean" also matches "cleaned" and "cleanliness"
#    - Trade-off: Occasional false positives ("bar" in "barely", "spa" in "spacious")
#
# 2. Why one mention per department per review?
#    - A review that names three Front Desk keywords counts once in the means
#    - Trade-off: Mention intensity is lost
#
# 3. Why drop departments with no mentions?
#    - An average over zero reviews is undefined
#    - Trade-off: Consumers must not assume every department is present
