"""API request/response schemas (DTOs)."""
from typing import Dict, List, Optional

from pydantic import BaseModel

from finnolan.domain.entities import (
    AlertCheckResult,
    AlertType,
    CamelModel,
    Quote,
    WatchlistEntry,
)


# Request models. Required fields are validated by the services so that
# missing input yields the handler's own error message.
class NewsRequest(BaseModel):
    query: Optional[str] = None
    language: Optional[str] = "en"


class SummarizeRequest(BaseModel):
    url: Optional[str] = None


class SuggestionRequest(BaseModel):
    symbol: Optional[str] = None


class SpeechRequest(BaseModel):
    text: Optional[str] = None
    language: Optional[str] = "en"


class QuotesRequest(BaseModel):
    symbols: List[str] = []


class AlertRequest(CamelModel):
    """Snapshot of a triggered watchlist entry."""
    watchlist_id: str
    stock_symbol: str
    stock_name: str = ""
    current_price: float
    target_price: float
    alert_type: AlertType
    user_email: str


class AlertCheckRequest(CamelModel):
    user_email: Optional[str] = None
    entries: List[WatchlistEntry] = []


class ChatMessage(BaseModel):
    role: str
    content: str = ""


class ChatRequest(BaseModel):
    messages: List[ChatMessage] = []


# Response models
class IndexSnapshot(CamelModel):
    name: str
    value: float
    change: float
    change_percent: float
    timestamp: str


class StockSnapshot(CamelModel):
    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    volume: str


class MarketDataResponse(CamelModel):
    indices: List[IndexSnapshot]
    top_stocks: List[StockSnapshot]
    unavailable: List[str] = []


class QuotesResponse(CamelModel):
    quotes: List[Quote]
    unavailable: List[str] = []


class SpeechResponse(CamelModel):
    audio_content: str


class AlertResponse(CamelModel):
    success: bool = True
    email_response: dict


class AlertCheckResponse(CamelModel):
    results: List[AlertCheckResult]


class ChatResponse(BaseModel):
    reply: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: str
    providers: Dict[str, bool]


class ErrorResponse(BaseModel):
    error: str


# Documented on every /api/v1 router; the app's exception handlers produce this body.
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    500: {"model": ErrorResponse, "description": "Provider or server failure"},
}
