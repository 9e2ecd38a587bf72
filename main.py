"""
StayInsight - Hotel Guest Review Analytics

CLI entry point for running the sentiment, NPS and department analytics.
"""

import argparse
import logging
import sys

from src.analytics.tokenizer import Tokenizer
from src.lexicon.sentiment_lexicon import SentimentLexicon
from src.orchestrator import AnalyticsPipeline
from src.utils.storage import StorageManager
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="StayInsight - Hotel Guest Sentiment & NPS Analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Analyze the default cleaned review export
  python main.py

  # Custom input and output locations
  python main.py --input data/processed/reviews_cleaned.csv \\
                 --output-dir output

  # Use a lexicon CSV (columns: word,sentiment) instead of the NLTK corpus
  python main.py --lexicon data/lexicon/bing.csv --top-n 20
        """
    )

    parser.add_argument(
        "--input",
        default=str(settings.CLEANED_REVIEWS_PATH),
        help=f"Cleaned reviews CSV (default: {settings.CLEANED_REVIEWS_PATH})"
    )

    parser.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Directory for output tables (default: {settings.OUTPUT_ROOT})"
    )

    parser.add_argument(
        "--lexicon",
        default=settings.LEXICON_PATH,
        help="Lexicon CSV with word,sentiment columns (default: NLTK opinion lexicon)"
    )

    parser.add_argument(
        "--top-n",
        type=int,
        default=settings.TOP_N_WORDS,
        help=f"Number of top positive/negative words (default: {settings.TOP_N_WORDS})"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    if args.top_n < 1:
        logger.error(f"--top-n must be at least 1, got {args.top_n}")
        sys.exit(1)

    print("=" * 60)
    print("StayInsight - Sentiment & NPS Analysis")
    print("=" * 60)
    print(f"Input: {args.input}")
    print(f"Output: {args.output_dir}")
    print(f"Lexicon: {args.lexicon or 'NLTK opinion lexicon'}")
    print("=" * 60)
    print()

    try:
        logger.info("Loading sentiment lexicon...")
        lexicon = SentimentLexicon.load(args.lexicon)

        pipeline = AnalyticsPipeline(
            lexicon=lexicon,
            tokenizer=Tokenizer(),
            top_n=args.top_n
        )
        storage = StorageManager(args.output_dir)

        paths = pipeline.run_files(args.input, storage)

        print()
        print("=" * 60)
        print("Analysis completed successfully!")
        print("=" * 60)
        for name, path in paths.items():
            print(f"{name}: {path}")
        print("=" * 60)

        logger.info("StayInsight completed successfully")
        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning("Analysis interrupted by user")
        print("\nAnalysis interrupted")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Analysis failed: {e}", exc_info=True)
        print(f"\nAnalysis failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)


if __name__ == "__main__":
    main()


# Design Rationale and Trade-offs:
#
# 1. Why argparse?
#    - Standard library, same flags style as the rest of the tooling
#    - Five options, no subcommands
#    - Trade-off: No shell completion, but none needed
#
# 2. Why load the lexicon before building the pipeline?
#    - A missing or malformed lexicon fails before any review is read
#    - The lexicon stays read-only for the whole run
#    - Trade-off: NLTK download on first run delays startup
#
# 3. Why exit codes (0 for success, 1 for failure)?
#    - Schedulers and shell scripts check the exit status
#    - Trade-off: None
