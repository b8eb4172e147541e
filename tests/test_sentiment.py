"""Tests for keyword sentiment classification."""
from finnolan.domain.entities import Sentiment
from finnolan.services.sentiment import ARTICLE_LEXICON, NEWS_LEXICON, classify


def test_negative_keywords_only():
    assert classify("Shares saw a decline after quarterly losses") == Sentiment.NEGATIVE


def test_no_keywords_is_neutral():
    assert classify("The board meets on Tuesday") == Sentiment.NEUTRAL


def test_empty_text_is_neutral():
    assert classify("") == Sentiment.NEUTRAL
    assert classify(None) == Sentiment.NEUTRAL


def test_positive_checked_before_negative():
    assert classify("Growth returned despite earlier losses") == Sentiment.POSITIVE


def test_case_insensitive():
    assert classify("STRONG quarter for exporters") == Sentiment.POSITIVE
    assert classify("Investors voice CONCERN") == Sentiment.NEGATIVE


def test_article_lexicon_is_narrower():
    """'concern' and 'strong' only count for news snippets."""
    assert classify("Investors voice concern", NEWS_LEXICON) == Sentiment.NEGATIVE
    assert classify("Investors voice concern", ARTICLE_LEXICON) == Sentiment.NEUTRAL
    assert classify("A strong open", ARTICLE_LEXICON) == Sentiment.NEUTRAL
    assert classify("Overall sentiment: negative", ARTICLE_LEXICON) == Sentiment.NEGATIVE
