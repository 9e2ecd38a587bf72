"""
Tokenizer.

Splits review text into lowercase word tokens with stop words removed.
"""

import logging
import re
from typing import FrozenSet, Iterable, Iterator, Optional

import config.settings as settings

logger = logging.getLogger(__name__)

# Letters/digits in any script, with apostrophes allowed only inside a word
# ("didn't"). Hyphens, underscores, punctuation and whitespace all delimit.
WORD_PATTERN = re.compile(r"[^\W_]+(?:'[^\W_]+)*")


def load_stop_words(language: str = settings.NLTK_STOPWORDS_LANGUAGE) -> FrozenSet[str]:
    """
    Load the NLTK stop-word list for a language.

    Downloads the corpus on first use if it is not installed.
    """
    import nltk
    from nltk.corpus import stopwords

    try:
        words = stopwords.words(language)
    except LookupError:
        logger.info("NLTK stopwords not found, downloading")
        nltk.download("stopwords", quiet=True)
        words = stopwords.words(language)

    logger.info(f"Loaded {len(words)} '{language}' stop words")
    return frozenset(w.lower() for w in words)


class Tokenizer:
    """
    Word tokenizer with set-membership stop-word filtering.

    No stemming or lemmatization. Each call to tokenize() returns a new
    generator, so the token sequence for a text can be re-read at will.
    """

    def __init__(self, stop_words: Optional[Iterable[str]] = None):
        """
        Initialize tokenizer.

        Args:
            stop_words: Words to drop. Defaults to the NLTK English list.
        """
        if stop_words is None:
            stop_words = load_stop_words()
        self.stop_words = frozenset(w.lower() for w in stop_words)

    def tokenize(self, text: Optional[str]) -> Iterator[str]:
        """
        Yield normalized, non-stop-word tokens of a review text.

        Args:
            text: Review body; None, NaN or empty yields nothing

        Yields:
            Lowercase word tokens in text order
        """
        if not isinstance(text, str) or not text:
            return

        normalized = text.lower().replace("’", "'")
        for match in WORD_PATTERN.finditer(normalized):
            token = match.group(0)
            if token not in self.stop_words:
                yield token

    def __call__(self, text: Optional[str]) -> Iterator[str]:
        return self.tokenize(text)


def tokenize(text: Optional[str], stop_words: Iterable[str] = ()) -> Iterator[str]:
    """Tokenize a single text with an explicit stop-word set."""
    return Tokenizer(stop_words).tokenize(text)


# Design Rationale and Trade-offs:
#
# 1. Why a regex instead of nltk.word_tokenize?
#    - No punkt download for a plain word split
#    - Apostrophe handling is explicit ("didn't" stays whole)
#    - Trade-off: No special cases for abbreviations like "a.m."
#
# 2. Why a generator?
#    - Tokens are consumed once per review by the scorer
#    - Trade-off: Callers that need a list must wrap it
#
# 3. Why no stemming?
#    - Lexicon entries are surface forms ("cleaned", "cleaning")
#    - Trade-off: Inflections missing from the lexicon are not matched
