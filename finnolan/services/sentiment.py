"""Keyword-based sentiment labelling of generated summaries.

This is a deliberately coarse heuristic: a case-insensitive substring check
against small positive/negative word lists, positive checked first. It carries
no confidence score and is not a trained classifier.
"""
from dataclasses import dataclass
from typing import Tuple

from finnolan.domain.entities import Sentiment


@dataclass(frozen=True)
class SentimentLexicon:
    positive: Tuple[str, ...]
    negative: Tuple[str, ...]


# Per-article news snippets
NEWS_LEXICON = SentimentLexicon(
    positive=("growth", "gains", "positive", "strong"),
    negative=("decline", "losses", "negative", "concern"),
)

# Full-article summaries
ARTICLE_LEXICON = SentimentLexicon(
    positive=("positive", "growth", "gains"),
    negative=("negative", "decline", "losses"),
)


def classify(text: str, lexicon: SentimentLexicon = NEWS_LEXICON) -> Sentiment:
    """Label text positive, negative or neutral by keyword presence."""
    lowered = (text or "").lower()
    if any(word in lowered for word in lexicon.positive):
        return Sentiment.POSITIVE
    if any(word in lowered for word in lexicon.negative):
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL
