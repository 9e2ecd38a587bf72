"""
Configuration settings for StayInsight.

Centralized configuration for all analytics components and pipeline parameters.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = PROJECT_ROOT / "data"
OUTPUT_ROOT = PROJECT_ROOT / "output"
CLEANED_REVIEWS_PATH = DATA_ROOT / "processed" / "reviews_cleaned.csv"

# Sentiment lexicon
# Two-column CSV (word,sentiment). Empty means the NLTK opinion lexicon.
LEXICON_PATH = os.getenv("STAYINSIGHT_LEXICON", "")
NLTK_STOPWORDS_LANGUAGE = "english"

# Sentiment labels (dead zone [-1, 1] is Neutral)
POSITIVE_LABEL_MIN_SCORE = 2
NEGATIVE_LABEL_MAX_SCORE = -2
TOP_N_WORDS = 15

# NPS thresholds (10-point scale)
PROMOTER_MIN_RATING = 9
PASSIVE_MIN_RATING = 7
MIN_RATING = 1
MAX_RATING = 10

# Response speed buckets: (upper bound in hours, label)
RESPONSE_BUCKETS = [
    (6, "Fast (0-6h)"),
    (24, "Same Day (6-24h)"),
    (48, "Next Day (24-48h)"),
]
RESPONSE_SLOW_LABEL = "Slow (48h+)"
NO_RESPONSE_LABEL = "No Response"

# Department keyword map (order matters: first match wins per department)
DEPARTMENT_KEYWORDS = [
    ("Front Desk", "check-in"),
    ("Front Desk", "front desk"),
    ("Front Desk", "reception"),
    ("Front Desk", "receptionist"),
    ("Front Desk", "check-out"),
    ("Housekeeping", "clean"),
    ("Housekeeping", "housekeeping"),
    ("Housekeeping", "towels"),
    ("Housekeeping", "bathroom"),
    ("Housekeeping", "spotless"),
    ("Food & Beverage", "breakfast"),
    ("Food & Beverage", "restaurant"),
    ("Food & Beverage", "food"),
    ("Food & Beverage", "bar"),
    ("Food & Beverage", "dining"),
    ("Food & Beverage", "room service"),
    ("Amenities", "pool"),
    ("Amenities", "gym"),
    ("Amenities", "spa"),
    ("Amenities", "wifi"),
    ("Amenities", "business center"),
    ("Location", "location"),
    ("Location", "metro"),
    ("Location", "walking distance"),
    ("Location", "nearby"),
]

# Sub-ratings reshaped into the long table
RATING_PREFIX = "rating_"
SUB_RATING_COLUMNS = [
    "rating_cleanliness",
    "rating_service",
    "rating_location",
    "rating_value",
    "rating_food",
]
RATING_LABELS = {
    "cleanliness": "Cleanliness",
    "service": "Service",
    "location": "Location",
    "value": "Value",
    "food": "Food & Beverage",
}

# Segment summaries written alongside the core rollups
SEGMENT_SUMMARIES = {
    "channel_summary": "booking_channel",
    "loyalty_summary": "loyalty_tier",
}

# Logging
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "stayinsight.log"


# Design Rationale and Trade-offs:
#
# 1. Why an ordered list of (department, keyword) pairs?
#    - Order decides which keyword is recorded for a department
#    - The same keyword can be reused under another department
#    - Trade-off: Lookups by department need a scan, but the list is short
#
# 2. Why fixed label and NPS thresholds?
#    - NPS cut-offs (9+ promoter, 6- detractor) are an industry convention
#    - Sentiment labels need a margin of 2 so one stray word is not a verdict
#    - Trade-off: Not tuned per hotel
#
# 3. Why an environment variable for the lexicon path?
#    - Same code runs against the NLTK lexicon or a curated CSV
#    - Trade-off: One more thing to document
