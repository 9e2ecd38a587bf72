"""
Sentiment Scorer.

Scores each review by joining its tokens against the sentiment lexicon and
keeps corpus-wide word frequencies per polarity.
"""

import logging
from collections import Counter
from dataclasses import fields
from typing import Dict, Iterable, List, Optional

import pandas as pd

from src.analytics.nps import classify, response_bucket
from src.analytics.rollup import percentage
from src.analytics.tokenizer import Tokenizer
from src.lexicon.sentiment_lexicon import SentimentLexicon
from src.models.review import Review
from src.models.sentiment import NEGATIVE, POLARITIES, POSITIVE, ReviewSentiment
import config.settings as settings

logger = logging.getLogger(__name__)

SENTIMENT_LABELS = ("Positive", "Neutral", "Negative")


def score_review(
    tokens: Iterable[str],
    lexicon: SentimentLexicon,
    review_id: Optional[str] = None
) -> ReviewSentiment:
    """
    Count lexicon-matched tokens per polarity.

    Tokens missing from the lexicon are ignored. The result depends only on
    the token multiset, not on token order.

    Args:
        tokens: Normalized word tokens of one review
        lexicon: Word -> polarity lookup
        review_id: Optional identifier carried onto the result

    Returns:
        ReviewSentiment (all-zero/Neutral when nothing matches)
    """
    positive = 0
    negative = 0

    for token in tokens:
        polarity = lexicon.polarity(token)
        if polarity == POSITIVE:
            positive += 1
        elif polarity == NEGATIVE:
            negative += 1

    return ReviewSentiment(review_id=review_id, positive_words=positive, negative_words=negative)


class SentimentScorer:
    """
    Scores a batch of reviews and tracks lexicon word frequencies.

    Word counters are filled in scan order (reviews, then tokens), so ties
    in top_words() resolve to the word encountered first.
    """

    def __init__(self, lexicon: SentimentLexicon, tokenizer: Optional[Tokenizer] = None):
        """
        Initialize sentiment scorer.

        Args:
            lexicon: Word -> polarity lookup (read-only)
            tokenizer: Tokenizer to split review text (defaults to NLTK stop words)
        """
        self.lexicon = lexicon
        self.tokenizer = tokenizer or Tokenizer()
        self.word_counts: Dict[str, Counter] = {p: Counter() for p in POLARITIES}
        self._scored = False

        logger.info(f"Initialized SentimentScorer with {len(lexicon)} lexicon words")

    def score(self, reviews: Iterable[Review]) -> Dict[str, ReviewSentiment]:
        """
        Score every review.

        Args:
            reviews: Cleaned reviews

        Returns:
            Dict of review_id -> ReviewSentiment
        """
        self.word_counts = {p: Counter() for p in POLARITIES}
        sentiments: Dict[str, ReviewSentiment] = {}
        total_tokens = 0
        matched_tokens = 0

        for review in reviews:
            tokens = list(self.tokenizer.tokenize(review.review_text))
            total_tokens += len(tokens)

            for token in tokens:
                polarity = self.lexicon.polarity(token)
                if polarity is not None:
                    self.word_counts[polarity][token] += 1
                    matched_tokens += 1

            sentiments[review.review_id] = score_review(tokens, self.lexicon, review.review_id)

        self._scored = True

        logger.info(f"Total words after removing stop words: {total_tokens}")
        logger.info(f"Words matched to lexicon: {matched_tokens}")
        logger.info(f"Scored {len(sentiments)} reviews")

        return sentiments

    def top_words(self, polarity: str, n: int = settings.TOP_N_WORDS) -> pd.DataFrame:
        """
        Most frequent lexicon words of one polarity across all scored reviews.

        Args:
            polarity: "positive" or "negative"
            n: Number of words to return

        Returns:
            DataFrame with columns word, n (descending by n)

        Raises:
            ValueError: If polarity is unknown or n is negative
            RuntimeError: If score() has not run yet
        """
        if polarity not in POLARITIES:
            raise ValueError(f"Invalid polarity: {polarity}. Must be 'positive' or 'negative'")
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")
        if not self._scored:
            raise RuntimeError("score() must run before top_words()")

        counts = self.word_counts[polarity]
        # sorted() is stable: equal counts keep first-encountered order
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:n]

        return pd.DataFrame(ranked, columns=["word", "n"])

    @staticmethod
    def sentiment_distribution(sentiments: Dict[str, ReviewSentiment]) -> pd.DataFrame:
        """
        Review count and share per sentiment label.

        Columns: sentiment_label, n, pct
        """
        counts = Counter(s.sentiment_label for s in sentiments.values())
        total = len(sentiments)

        rows = [
            {
                "sentiment_label": label,
                "n": counts[label],
                "pct": percentage(counts[label], total, "sentiment distribution")
            }
            for label in SENTIMENT_LABELS
            if counts[label]
        ]
        return pd.DataFrame(rows, columns=["sentiment_label", "n", "pct"])


def build_review_table(
    reviews: List[Review],
    sentiments: Dict[str, ReviewSentiment]
) -> pd.DataFrame:
    """
    Join sentiment onto the reviews as additional columns.

    Reviews without a scored sentiment get all-zero/Neutral values. Also
    derives nps_category and fills response_category from the response
    time when the input left it empty.

    Returns:
        Enriched review table, one row per review
    """
    rows = []
    for review in reviews:
        row = review.to_dict()
        sentiment = sentiments.get(review.review_id) or ReviewSentiment(review_id=review.review_id)
        row.update(sentiment.to_dict())
        row["nps_category"] = classify(review.rating_overall)
        if not row.get("response_category"):
            row["response_category"] = response_bucket(review.response_time_hours)
        rows.append(row)

    columns = [f.name for f in fields(Review)] + [
        "positive_words", "negative_words", "sentiment_score", "sentiment_label", "nps_category"
    ]
    df = pd.DataFrame(rows, columns=columns)
    logger.info(f"Built enriched review table with {len(df)} rows")
    return df


# Design Rationale and Trade-offs:
#
# 1. Why count words instead of weighting them?
#    - The Bing lexicon is binary (positive/negative)
#    - Scores are easy to explain to hotel staff
#    - Trade-off: Negation ("not clean") is not handled
#
# 2. Why keep word counters on the scorer?
#    - top_words() reads the same pass that scored the reviews
#    - Trade-off: The scorer is stateful and must score() first
#
# 3. Why a stable sort for ties?
#    - Same input gives the same top-N list on every run
#    - Trade-off: Tie order depends on review order
