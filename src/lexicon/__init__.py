"""
Sentiment Lexicon Module.

Static word to polarity lookup shared by every scoring pass.
"""
