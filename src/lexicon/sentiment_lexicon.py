"""
Sentiment Lexicon - static word to polarity lookup.

Loaded once before scoring begins and treated as read-only for the run.
"""

import logging
import os
from collections.abc import Mapping
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Optional, Tuple

import pandas as pd

from src.models.sentiment import POLARITIES, POSITIVE, NEGATIVE

logger = logging.getLogger(__name__)


class SentimentLexicon(Mapping):
    """
    Immutable mapping from lowercased word to polarity ("positive"/"negative").

    Build it with one of the loaders:
    - from_pairs(): in-memory (word, polarity) pairs
    - from_csv(): two-column CSV file (word, sentiment)
    - from_nltk(): Bing Liu opinion lexicon from the NLTK corpora
    """

    def __init__(self, entries: Iterable[Tuple[str, str]]):
        """
        Initialize lexicon from (word, polarity) pairs.

        Args:
            entries: Iterable of (word, polarity) tuples

        Raises:
            ValueError: If a polarity is not "positive" or "negative"
        """
        words: Dict[str, str] = {}
        conflicts = 0

        for word, polarity in entries:
            key = str(word).strip().lower()
            polarity = str(polarity).strip().lower()

            if not key:
                continue
            if polarity not in POLARITIES:
                raise ValueError(
                    f"Invalid polarity for '{word}': {polarity}. Must be 'positive' or 'negative'"
                )

            existing = words.get(key)
            if existing is None:
                words[key] = polarity
            elif existing != polarity:
                # Keep the first polarity seen for the word
                conflicts += 1
                logger.debug(f"Lexicon word '{key}' listed as both polarities, keeping {existing}")

        self._words = MappingProxyType(words)

        if conflicts:
            logger.warning(f"{conflicts} lexicon words had conflicting polarities")
        logger.info(
            f"Initialized SentimentLexicon with {len(self._words)} words "
            f"({self.count(POSITIVE)} positive, {self.count(NEGATIVE)} negative)"
        )

    @classmethod
    def from_pairs(cls, pairs) -> "SentimentLexicon":
        """Create lexicon from a dict or an iterable of (word, polarity) pairs."""
        if isinstance(pairs, Mapping):
            pairs = pairs.items()
        return cls(pairs)

    @classmethod
    def from_csv(cls, path: str) -> "SentimentLexicon":
        """
        Load lexicon from a CSV file with columns `word` and `sentiment`.

        Args:
            path: Path to lexicon CSV

        Returns:
            SentimentLexicon

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If required columns are missing
        """
        if not os.path.exists(path):
            raise FileNotFoundError(f"Lexicon file not found: {path}")

        df = pd.read_csv(path, dtype=str, keep_default_na=False)

        missing = {"word", "sentiment"} - set(df.columns)
        if missing:
            raise ValueError(f"Lexicon file {path} is missing columns: {sorted(missing)}")

        logger.info(f"Loaded {len(df)} lexicon rows from {path}")
        return cls(zip(df["word"], df["sentiment"]))

    @classmethod
    def from_nltk(cls) -> "SentimentLexicon":
        """
        Load the Bing Liu opinion lexicon bundled with NLTK.

        Downloads the corpus on first use if it is not installed.
        """
        import nltk
        from nltk.corpus import opinion_lexicon

        try:
            positive = opinion_lexicon.positive()
            negative = opinion_lexicon.negative()
        except LookupError:
            logger.info("NLTK opinion_lexicon not found, downloading")
            nltk.download("opinion_lexicon", quiet=True)
            positive = opinion_lexicon.positive()
            negative = opinion_lexicon.negative()

        entries = [(w, POSITIVE) for w in positive] + [(w, NEGATIVE) for w in negative]
        return cls(entries)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "SentimentLexicon":
        """Load from CSV when a path is given, otherwise from NLTK."""
        if path:
            return cls.from_csv(path)
        return cls.from_nltk()

    def polarity(self, word: str) -> Optional[str]:
        """
        Look up a word's polarity (case-insensitive).

        Returns:
            "positive", "negative", or None if the word is not in the lexicon
        """
        return self._words.get(word.lower())

    def count(self, polarity: str) -> int:
        """Number of words with the given polarity."""
        return sum(1 for p in self._words.values() if p == polarity)

    def __getitem__(self, word: str) -> str:
        return self._words[word.lower()]

    def __contains__(self, word) -> bool:
        return isinstance(word, str) and word.lower() in self._words

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __len__(self) -> int:
        return len(self._words)


# Design Rationale and Trade-offs:
#
# 1. Why a read-only mapping?
#    - Loaded once per run and shared by every scoring call
#    - Trade-off: Adding words means rebuilding the lexicon
#
# 2. Why keep the first polarity on conflict?
#    - A word counted as both would cancel itself out
#    - Conflicts are logged so the CSV can be fixed
#    - Trade-off: Result depends on file order
#
# 3. Why NLTK's opinion lexicon as the default?
#    - It is the Bing lexicon, fetched by nltk.download on first use
#    - Trade-off: General-purpose, not hotel-specific
