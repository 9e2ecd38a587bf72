"""
Tests for the CLI entry point.
"""

import os
import tempfile
from unittest.mock import patch

import pandas as pd
import pytest

import config.settings as settings
from main import build_parser, main


def test_parser_defaults():
    args = build_parser().parse_args([])

    assert args.input == str(settings.CLEANED_REVIEWS_PATH)
    assert args.top_n == settings.TOP_N_WORDS
    assert args.log_level == settings.LOG_LEVEL


def test_main_runs_end_to_end(make_review):
    with tempfile.TemporaryDirectory() as tmpdir:
        input_path = os.path.join(tmpdir, "reviews.csv")
        lexicon_path = os.path.join(tmpdir, "lexicon.csv")
        output_dir = os.path.join(tmpdir, "output")

        reviews = [
            make_review("r1", rating=10, text="Great pool"),
            make_review("r2", rating=3, text="Dirty towels"),
        ]
        pd.DataFrame([r.to_dict() for r in reviews]).to_csv(input_path, index=False)
        pd.DataFrame({"word": ["great", "dirty"], "sentiment": ["positive", "negative"]}).to_csv(
            lexicon_path, index=False
        )

        with patch("main.setup_logging"), \
                patch("src.analytics.tokenizer.load_stop_words", return_value=frozenset({"the"})):
            with pytest.raises(SystemExit) as exit_info:
                main(["--input", input_path, "--output-dir", output_dir, "--lexicon", lexicon_path])

        assert exit_info.value.code == 0
        assert os.path.exists(os.path.join(output_dir, "nps_overall.csv"))


def test_main_fails_on_missing_input():
    with tempfile.TemporaryDirectory() as tmpdir:
        with patch("main.setup_logging"), \
                patch("src.lexicon.sentiment_lexicon.SentimentLexicon.from_nltk"), \
                patch("src.analytics.tokenizer.load_stop_words", return_value=frozenset()):
            with pytest.raises(SystemExit) as exit_info:
                main(["--input", os.path.join(tmpdir, "missing.csv"), "--output-dir", tmpdir, "--lexicon", ""])

    assert exit_info.value.code == 1
