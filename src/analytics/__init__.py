"""
Analytics components for StayInsight.

Each module reads the same cleaned review set and produces its own tables:
- Tokenizer
- Sentiment Scorer
- Department Attributor
- NPS Segmenter
- Pivot Engine
"""
