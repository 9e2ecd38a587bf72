"""
Storage utility.

File I/O helpers for the cleaned review table and the analytics outputs.
"""

import json
import math
import os
import logging
from typing import Dict, List, Optional

import pandas as pd

from src.models.errors import ReviewValidationError
from src.models.review import Review, RATING_FIELDS

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("review_id",) + RATING_FIELDS + (
    "review_text",
    "trip_type",
    "room_type",
    "stay_month",
    "stay_month_name",
    "stay_quarter",
)

OPTIONAL_TEXT_COLUMNS = ("booking_channel", "loyalty_tier", "response_category")


def _is_missing(value) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _as_int(value, field: str, review_id) -> int:
    """Coerce a CSV cell to int; whole floats (from NaN-bearing columns) are allowed."""
    if _is_missing(value):
        raise ReviewValidationError(f"Missing {field} for review {review_id}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ReviewValidationError(f"Invalid {field} for review {review_id}: {value}")
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ReviewValidationError(f"Invalid {field} for review {review_id}: {value!r}")


class StorageManager:
    """
    Manages file I/O for the pipeline.

    Handles:
    - Cleaned reviews (CSV produced by the ETL stage)
    - Output tables (output/<name>.csv)
    - Run metadata (output/run_metadata.json)
    """

    def __init__(self, output_root: str):
        """
        Initialize storage manager.

        Args:
            output_root: Directory for output tables
        """
        self.output_root = str(output_root)

        # Create directories if they don't exist
        os.makedirs(self.output_root, exist_ok=True)

        logger.info(f"Initialized StorageManager with output_root={self.output_root}")

    def load_reviews(self, path: str) -> List[Review]:
        """
        Load the cleaned review table.

        Args:
            path: Path to cleaned reviews CSV

        Returns:
            List of Review objects in file order

        Raises:
            FileNotFoundError: If the file doesn't exist
            ReviewValidationError: If columns are missing or a row breaks the contract
        """
        if not os.path.exists(path):
            raise FileNotFoundError(f"Cleaned reviews not found: {path}")

        # Only empty cells are missing: "None" is a valid loyalty tier
        df = pd.read_csv(path, dtype={"review_id": str}, keep_default_na=False, na_values=[""])
        logger.info(f"Loaded {len(df)} rows from {path}")

        return self.reviews_from_frame(df)

    def reviews_from_frame(self, df: pd.DataFrame) -> List[Review]:
        """
        Convert a cleaned review DataFrame into Review objects.

        Raises:
            ReviewValidationError: On missing columns, duplicate ids or invalid values
        """
        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise ReviewValidationError(f"Cleaned reviews are missing required columns: {missing}")

        duplicated = df["review_id"][df["review_id"].duplicated()].tolist()
        if duplicated:
            raise ReviewValidationError(f"Duplicate review_id values: {duplicated[:5]}")

        reviews = []
        for record in df.to_dict(orient="records"):
            review_id = str(record["review_id"])
            text = record.get("review_text")

            response_time = record.get("response_time_hours")
            optional_text = {}
            for column in OPTIONAL_TEXT_COLUMNS:
                value = record.get(column)
                optional_text[column] = None if _is_missing(value) else str(value)

            reviews.append(Review(
                review_id=review_id,
                rating_overall=_as_int(record["rating_overall"], "rating_overall", review_id),
                rating_cleanliness=_as_int(record["rating_cleanliness"], "rating_cleanliness", review_id),
                rating_service=_as_int(record["rating_service"], "rating_service", review_id),
                rating_location=_as_int(record["rating_location"], "rating_location", review_id),
                rating_value=_as_int(record["rating_value"], "rating_value", review_id),
                rating_food=_as_int(record["rating_food"], "rating_food", review_id),
                review_text="" if _is_missing(text) else str(text),
                trip_type=str(record["trip_type"]),
                room_type=str(record["room_type"]),
                booking_channel=optional_text["booking_channel"] or "",
                loyalty_tier=optional_text["loyalty_tier"] or "",
                stay_month=_as_int(record["stay_month"], "stay_month", review_id),
                stay_month_name=str(record["stay_month_name"]),
                stay_quarter=str(record["stay_quarter"]),
                response_time_hours=None if _is_missing(response_time) else float(response_time),
                response_category=optional_text["response_category"]
            ))

        logger.info(f"Validated {len(reviews)} reviews")
        return reviews

    def save_table(self, df: pd.DataFrame, name: str) -> str:
        """
        Save an output table as CSV.

        Args:
            df: Table to save
            name: File stem (e.g., "nps_monthly")

        Returns:
            Path of the written file
        """
        filepath = os.path.join(self.output_root, f"{name}.csv")

        try:
            df.to_csv(filepath, index=False)
            logger.info(f"Saved {len(df)} rows to {filepath}")
        except Exception as e:
            logger.error(f"Failed to save table {name}: {e}")
            raise

        return filepath

    def save_metadata(self, metadata: Dict, name: str = "run_metadata") -> str:
        """
        Save run metadata as JSON.

        Returns:
            Path of the written file
        """
        filepath = os.path.join(self.output_root, f"{name}.json")

        try:
            with open(filepath, 'w') as f:
                json.dump(metadata, f, indent=2)
            logger.info(f"Saved metadata to {filepath}")
        except Exception as e:
            logger.error(f"Failed to save metadata: {e}")
            raise

        return filepath

    def load_table(self, name: str) -> Optional[pd.DataFrame]:
        """
        Load a previously saved output table.

        Returns:
            DataFrame, or None if the table doesn't exist
        """
        filepath = os.path.join(self.output_root, f"{name}.csv")

        if not os.path.exists(filepath):
            logger.debug(f"No table found at {filepath}")
            return None

        return pd.read_csv(filepath)


# Design Rationale and Trade-offs:
#
# 1. Why CSV for output tables?
#    - The reporting step and spreadsheets read it directly
#    - Trade-off: Types are lost (empty text reads back as NaN)
#
# 2. Why only treat empty cells as missing?
#    - "None" is a real loyalty tier
#    - Trade-off: Literal "NA" strings are kept as text
#
# 3. Why validate every row on load?
#    - Bad ratings fail here with the review id, not deep in a rollup
#    - Trade-off: Slower load, negligible at hotel scale
