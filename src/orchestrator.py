"""
Pipeline Orchestrator.

Runs every analytics component over the cleaned review set and collects
their output tables.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pandas as pd

from src.analytics.departments import DepartmentAttributor, KeywordMap
from src.analytics.nps import NPSSegmenter
from src.analytics.pivot import category_trend, rating_by_room_quarter, rating_correlations, ratings_long
from src.analytics.sentiment import SentimentScorer, build_review_table
from src.analytics.tokenizer import Tokenizer
from src.lexicon.sentiment_lexicon import SentimentLexicon
from src.models.review import Review
from src.models.sentiment import NEGATIVE, POSITIVE
from src.utils.storage import StorageManager
import config.settings as settings

logger = logging.getLogger(__name__)


@dataclass
class AnalyticsResult:
    """
    Output tables of one pipeline run, keyed by table name.
    """
    tables: Dict[str, pd.DataFrame] = field(default_factory=dict)
    metadata: Dict = field(default_factory=dict)

    def __getitem__(self, name: str) -> pd.DataFrame:
        return self.tables[name]


class AnalyticsPipeline:
    """
    Orchestrates the analytics fan-out.

    Order:
    1. Sentiment scoring → 2. Join onto review table
    → 3. Department attribution, NPS rollups, pivots (independent of each other)
    """

    def __init__(
        self,
        lexicon: SentimentLexicon,
        tokenizer: Optional[Tokenizer] = None,
        keyword_map: KeywordMap = settings.DEPARTMENT_KEYWORDS,
        top_n: int = settings.TOP_N_WORDS
    ):
        """
        Initialize analytics pipeline.

        Args:
            lexicon: Sentiment lexicon (loaded once, read-only)
            tokenizer: Tokenizer for review text (defaults to NLTK stop words)
            keyword_map: Department keyword configuration
            top_n: Number of words in the top word tables
        """
        logger.info("Initializing pipeline components...")

        self.lexicon = lexicon
        self.top_n = top_n
        self.scorer = SentimentScorer(lexicon, tokenizer)
        self.attributor = DepartmentAttributor(keyword_map)
        self.segmenter = NPSSegmenter()

        logger.info("Pipeline initialized successfully")

    def run(self, reviews: List[Review]) -> AnalyticsResult:
        """
        Run all analytics over a cleaned review set.

        Args:
            reviews: Cleaned, de-duplicated reviews

        Returns:
            AnalyticsResult with every output table
        """
        start_time = datetime.now()
        logger.info(f"Starting analytics for {len(reviews)} reviews")

        # STAGE 1: Sentiment (must precede department and response rollups)
        sentiments = self.scorer.score(reviews)
        review_table = build_review_table(reviews, sentiments)

        tables = {
            "reviews_with_sentiment": review_table,
            "top_positive_words": self.scorer.top_words(POSITIVE, self.top_n),
            "top_negative_words": self.scorer.top_words(NEGATIVE, self.top_n),
            "sentiment_distribution": self.scorer.sentiment_distribution(sentiments),
        }

        # STAGE 2: Department attribution
        mentions = self.attributor.mentions(review_table)
        tables["dept_satisfaction"] = self.attributor.satisfaction(review_table, mentions)

        # STAGE 3: NPS rollups
        tables["nps_overall"] = self.segmenter.overall(review_table)
        tables["nps_monthly"] = self.segmenter.by_month(review_table)
        tables["nps_by_trip_type"] = self.segmenter.by_trip_type(review_table)
        tables["response_impact"] = self.segmenter.response_impact(review_table)
        for name, column in settings.SEGMENT_SUMMARIES.items():
            tables[name] = self.segmenter.segment_summary(review_table, column)

        # STAGE 4: Pivots
        tables["rating_room_quarter"] = rating_by_room_quarter(review_table)
        tables["ratings_long"] = ratings_long(review_table)
        tables["category_trend"] = category_trend(tables["ratings_long"])
        tables["rating_correlations"] = rating_correlations(review_table)

        processing_time = (datetime.now() - start_time).total_seconds()
        metadata = {
            "reviews": len(reviews),
            "lexicon_words": len(self.lexicon),
            "department_mentions": len(mentions),
            "overall_nps": float(tables["nps_overall"]["nps"].iloc[0]),
            "tables": sorted(tables),
            "processing_time_seconds": processing_time,
            "generated_at": datetime.now(timezone.utc).isoformat()
        }

        logger.info(f"Analytics complete: {len(tables)} tables in {processing_time:.2f}s")
        return AnalyticsResult(tables=tables, metadata=metadata)

    def run_files(self, input_path: str, storage: StorageManager) -> Dict[str, str]:
        """
        Load cleaned reviews from disk, run analytics, save every table.

        Returns:
            Dict of table name -> written file path
        """
        reviews = storage.load_reviews(input_path)
        result = self.run(reviews)

        paths = {name: storage.save_table(df, name) for name, df in result.tables.items()}
        result.metadata["input_path"] = str(input_path)
        paths["run_metadata"] = storage.save_metadata(result.metadata)

        return paths


# Design Rationale and Trade-offs:
#
# 1. Why score sentiment before everything else?
#    - Department and response rollups average sentiment_score
#    - One scoring pass feeds every downstream table
#    - Trade-off: Stages 2-4 can't start until scoring finishes
#
# 2. Why return tables instead of writing them in run()?
#    - Tests inspect tables without touching disk
#    - run_files() is the only place that does I/O
#    - Trade-off: All tables held in memory, fine for a hotel's review volume
#
# 3. Why stop on the first failing stage?
#    - A partial set of tables would disagree with each other
#    - Trade-off: One bad table blocks the rest
