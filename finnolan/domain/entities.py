"""Domain entities - core business objects."""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys for the dashboard client."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class AssetClass(str, Enum):
    EQUITY = "equity"
    INDEX = "index"
    CRYPTO = "crypto"


class SymbolInfo(BaseModel):
    """A logical symbol mapped to the quote provider's symbol."""
    model_config = ConfigDict(frozen=True)

    symbol: str
    provider_symbol: str
    name: str
    asset_class: AssetClass = AssetClass.EQUITY


class Quote(CamelModel):
    """Current quote for a symbol, derived from price and previous close."""
    model_config = ConfigDict(frozen=True)

    symbol: str
    display_name: str
    price: float
    previous_close: float
    change: float
    change_percent: float
    volume: int = 0
    high52w: Optional[float] = None
    low52w: Optional[float] = None

    @classmethod
    def from_prices(
        cls,
        symbol: str,
        display_name: str,
        price: float,
        previous_close: float,
        volume: int = 0,
        high52w: Optional[float] = None,
        low52w: Optional[float] = None,
    ) -> "Quote":
        """Build a quote; change fields are always computed from previous close."""
        change = price - previous_close
        change_percent = change / previous_close * 100 if previous_close else 0.0
        return cls(
            symbol=symbol,
            display_name=display_name,
            price=price,
            previous_close=previous_close,
            change=change,
            change_percent=change_percent,
            volume=volume,
            high52w=high52w,
            low52w=low52w,
        )


class Article(CamelModel):
    """News article with an AI-generated snippet. Immutable once built."""
    model_config = ConfigDict(frozen=True)

    headline: str
    snippet: str
    source: str
    link: str
    published_at: Optional[datetime] = None
    sentiment: Sentiment = Sentiment.NEUTRAL
    full_text: str = ""


class NewsItem(BaseModel):
    """Raw article as returned by the news search provider."""
    title: str
    description: Optional[str] = None
    content: Optional[str] = None
    url: str
    source_name: str = ""
    published_at: Optional[datetime] = None


class NewsDigest(CamelModel):
    articles: List[Article]
    summary: str


class ArticleSummary(CamelModel):
    summary: str
    sentiment: Sentiment
    url: str


class Action(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Recommendation(CamelModel):
    """Structured buy/sell/hold recommendation."""
    recommendation: Action
    confidence: float = Field(ge=0, le=100)
    reasons: List[str] = Field(default_factory=list)
    risk_level: RiskLevel = RiskLevel.MEDIUM
    target_price: float
    summary: str = ""

    @field_validator("recommendation", "risk_level", mode="before")
    @classmethod
    def _upper(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value


class StockAnalysis(CamelModel):
    """Quote fields plus the recommendation for one symbol."""
    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    volume: str
    high52w: Optional[float] = None
    low52w: Optional[float] = None
    suggestion: Recommendation


class AlertType(str, Enum):
    ABOVE = "above"
    BELOW = "below"
    NONE = "none"


class WatchlistEntry(CamelModel):
    """A tracked symbol with an optional target-price condition."""
    id: str
    symbol: str
    name: str = ""
    target_price: Optional[float] = None
    alert_type: AlertType = AlertType.NONE
    last_alert_sent_at: Optional[datetime] = None


class AlertStatus(str, Enum):
    SENT = "sent"
    COOLDOWN = "cooldown"
    NOT_TRIGGERED = "not_triggered"
    QUOTE_UNAVAILABLE = "quote_unavailable"
    FAILED = "failed"


class AlertCheckResult(CamelModel):
    """Outcome of evaluating one watchlist entry."""
    watchlist_id: str
    symbol: str
    current_price: Optional[float] = None
    status: AlertStatus
    error: Optional[str] = None


class PriceAlert(BaseModel):
    """Snapshot handed to the notifier for one triggered entry."""
    watchlist_id: str
    symbol: str
    name: str
    current_price: float
    target_price: float
    alert_type: AlertType
    recipient: str
