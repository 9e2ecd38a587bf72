"""
Pivot Engine.

Reshapes rating tables between wide (one column per category value) and
long (one row per category) layouts.
"""

import logging
from typing import Dict, List, Optional, Sequence, Union

import pandas as pd

from src.analytics.rollup import require_columns
import config.settings as settings

logger = logging.getLogger(__name__)


def pivot_wider(
    long_df: pd.DataFrame,
    index: str,
    names_from: str,
    values_from: str,
    fill_value: Union[int, float] = 0
) -> pd.DataFrame:
    """
    Spread a long (index, name, value) table into one column per name.

    The column set is every distinct `names_from` value in the whole input;
    combinations never observed get `fill_value`.

    Args:
        long_df: Table with one row per (index, name) pair
        index: Column identifying output rows
        names_from: Column whose values become output columns
        values_from: Column holding cell values
        fill_value: Value for unobserved combinations

    Returns:
        Wide DataFrame with `index` as first column

    Raises:
        ValueError: If an (index, name) pair appears more than once
    """
    require_columns(long_df, [index, names_from, values_from], table="long table")

    if long_df.duplicated(subset=[index, names_from]).any():
        raise ValueError(f"Duplicate ({index}, {names_from}) pairs in long table")

    columns = sorted(long_df[names_from].unique())
    rows = list(dict.fromkeys(long_df[index]))

    wide = (
        long_df.pivot(index=index, columns=names_from, values=values_from)
        .reindex(index=rows, columns=columns)
        .fillna(fill_value)
    )
    wide.index.name = index
    wide.columns.name = None
    wide = wide.reset_index()

    logger.debug(f"Pivoted {len(long_df)} rows wider to {len(wide)} x {len(columns)}")
    return wide


def pivot_longer(
    wide_df: pd.DataFrame,
    id_cols: Sequence[str],
    prefix: str = "",
    value_cols: Optional[Sequence[str]] = None,
    names_to: str = "name",
    values_to: str = "value",
    labels: Optional[Dict[str, str]] = None,
    label_col: str = "label"
) -> pd.DataFrame:
    """
    Gather value columns into (id..., name, value[, label]) rows.

    Args:
        wide_df: Wide table
        id_cols: Columns copied onto every output row
        prefix: Value columns are those starting with it; stripped from names
        value_cols: Explicit value columns (overrides prefix selection)
        names_to: Output column for the category name
        values_to: Output column for the cell value
        labels: Optional category name -> human-readable label lookup
        label_col: Output column for the label

    Returns:
        Long DataFrame with len(wide_df) * len(value_cols) rows, row-major
        (all categories of the first input row, then the next row)

    Raises:
        ValueError: If no value columns are selected or a label is missing
    """
    id_cols = list(id_cols)
    require_columns(wide_df, id_cols, table="wide table")

    if value_cols is None:
        value_cols = [
            c for c in wide_df.columns
            if isinstance(c, str) and c.startswith(prefix) and c not in id_cols
        ]
    else:
        value_cols = list(value_cols)
        require_columns(wide_df, value_cols, table="wide table")

    if not value_cols:
        raise ValueError(f"No value columns to pivot (prefix='{prefix}')")

    names = {col: col[len(prefix):] if prefix and col.startswith(prefix) else col for col in value_cols}

    if labels is not None:
        unlabeled = [name for name in names.values() if name not in labels]
        if unlabeled:
            raise ValueError(f"No label for categories: {unlabeled}")

    rows: List[dict] = []
    for record in wide_df[id_cols + value_cols].to_dict(orient="records"):
        for col in value_cols:
            row = {c: record[c] for c in id_cols}
            row[names_to] = names[col]
            row[values_to] = record[col]
            if labels is not None:
                row[label_col] = labels[names[col]]
            rows.append(row)

    columns = id_cols + [names_to, values_to] + ([label_col] if labels is not None else [])
    long_df = pd.DataFrame(rows, columns=columns)

    logger.debug(f"Pivoted {len(wide_df)} rows x {len(value_cols)} columns longer to {len(long_df)} rows")
    return long_df


def rating_by_room_quarter(reviews: pd.DataFrame) -> pd.DataFrame:
    """
    Average overall rating per room type (rows) and stay quarter (columns).

    Room type/quarter pairs with no reviews are filled with 0.
    """
    require_columns(reviews, ["room_type", "stay_quarter", "rating_overall"])

    averages = (
        reviews.groupby(["room_type", "stay_quarter"], as_index=False)["rating_overall"]
        .mean()
        .rename(columns={"rating_overall": "avg_rating"})
    )
    averages["avg_rating"] = averages["avg_rating"].round(2)

    wide = pivot_wider(averages, index="room_type", names_from="stay_quarter", values_from="avg_rating")
    logger.info(f"Built room type x quarter table: {len(wide)} room types")
    return wide


def ratings_long(reviews: pd.DataFrame) -> pd.DataFrame:
    """
    Sub-ratings in long form, one row per (review, rating category).

    Columns: review_id, stay_month, rating_category, score, rating_label
    """
    long_df = pivot_longer(
        reviews,
        id_cols=["review_id", "stay_month"],
        prefix=settings.RATING_PREFIX,
        value_cols=settings.SUB_RATING_COLUMNS,
        names_to="rating_category",
        values_to="score",
        labels=settings.RATING_LABELS,
        label_col="rating_label"
    )

    logger.info(
        f"Pivoted to long format: {len(long_df)} rows "
        f"({len(settings.SUB_RATING_COLUMNS)} rating categories x {len(reviews)} reviews)"
    )
    return long_df


def category_trend(long_df: pd.DataFrame) -> pd.DataFrame:
    """
    Mean sub-rating score per stay month and rating label.

    Columns: stay_month, rating_label, avg_score
    """
    require_columns(long_df, ["stay_month", "rating_label", "score"], table="long rating table")

    trend = (
        long_df.groupby(["stay_month", "rating_label"], as_index=False)["score"]
        .mean()
        .rename(columns={"score": "avg_score"})
    )
    trend["avg_score"] = trend["avg_score"].round(2)
    return trend


def rating_correlations(reviews: pd.DataFrame) -> pd.DataFrame:
    """
    Pairwise Pearson correlation of the overall and sub-ratings, in long form.

    Columns: var1, var2, correlation
    """
    rating_cols = ["rating_overall"] + list(settings.SUB_RATING_COLUMNS)
    require_columns(reviews, rating_cols)

    labels = {"overall": "Overall", **settings.RATING_LABELS}
    renamed = {col: labels[col[len(settings.RATING_PREFIX):]] for col in rating_cols}

    matrix = reviews[rating_cols].astype(float).corr().round(2)
    matrix = matrix.rename(index=renamed, columns=renamed)

    pairs = [
        {"var1": var1, "var2": var2, "correlation": matrix.loc[var1, var2]}
        for var1 in matrix.index
        for var2 in matrix.columns
    ]
    return pd.DataFrame(pairs, columns=["var1", "var2", "correlation"])


# Design Rationale and Trade-offs:
#
# 1. Why fill missing cells with 0 in pivot_wider?
#    - The dashboard expects a numeric grid
#    - Trade-off: 0 means "no reviews", not a rating of zero
#
# 2. Why raise on duplicate (index, name) pairs?
#    - Silently picking one value would hide an upstream aggregation bug
#    - Trade-off: Callers must aggregate before pivoting
#
# 3. Why a label lookup in pivot_longer?
#    - Charts show "Food & Beverage", not "food"
#    - Trade-off: Every category must have a label or the pivot fails
