"""AI stock recommendation with a deterministic fallback."""
import json
import logging
import re
from typing import List, Optional

from pydantic import ValidationError

from finnolan.domain import symbols
from finnolan.domain.entities import (
    Action,
    Quote,
    Recommendation,
    RiskLevel,
    StockAnalysis,
)
from finnolan.domain.exceptions import (
    FinnolanError,
    InputValidationError,
    ProviderError,
    QuoteUnavailableError,
    SymbolNotFoundError,
)
from finnolan.domain.interfaces import TextGenerator
from finnolan.domain.results import Parsed, ParseResult, Unparseable
from finnolan.services.quote_service import QuoteService, format_volume

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a stock market analyst. Analyze the given stock and provide a clear recommendation.
Always respond with valid JSON in this exact format:
{
  "recommendation": "BUY" | "SELL" | "HOLD",
  "confidence": number between 1-100,
  "reasons": ["reason1", "reason2", "reason3"],
  "riskLevel": "LOW" | "MEDIUM" | "HIGH",
  "targetPrice": number,
  "summary": "brief 1-2 sentence summary"
}
Base your analysis on general market knowledge and the figures provided."""

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

FALLBACK_TARGET_MULTIPLIER = 1.05

AI_UNAVAILABLE_REASONS = [
    "AI analysis temporarily unavailable",
    "Please do your own research",
    "Consult a financial advisor",
]
AI_UNAVAILABLE_SUMMARY = "Unable to generate AI analysis. Please consult other sources."
PARSE_ERROR_REASONS = ["Analysis parsing error", "Please do your own research"]
PARSE_ERROR_SUMMARY = "Unable to parse AI analysis. Please consult other sources."


def parse_recommendation(text: str) -> ParseResult:
    """Extract the first brace-delimited JSON object from generated text."""
    match = _JSON_OBJECT.search(text or "")
    if not match:
        return Unparseable(text or "", "No JSON found in response")
    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        return Unparseable(text, f"Invalid JSON: {e.msg}")
    if not isinstance(payload, dict):
        return Unparseable(text, "JSON payload is not an object")
    try:
        return Parsed(Recommendation.model_validate(payload))
    except ValidationError as e:
        return Unparseable(text, f"Recommendation shape mismatch: {e.error_count()} errors")


def fallback_recommendation(
    price: float, reasons: List[str], summary: str
) -> Recommendation:
    """Neutral HOLD used whenever the generated recommendation is unusable."""
    return Recommendation(
        recommendation=Action.HOLD,
        confidence=50,
        reasons=list(reasons),
        risk_level=RiskLevel.MEDIUM,
        target_price=price * FALLBACK_TARGET_MULTIPLIER,
        summary=summary,
    )


def _signed(value: float) -> str:
    return f"+{value:.2f}" if value >= 0 else f"{value:.2f}"


class RecommendationService:
    def __init__(
        self, quotes: QuoteService, generator: TextGenerator, model: Optional[str] = None
    ):
        self._quotes = quotes
        self._generator = generator
        self._model = model

    async def analyze(self, symbol: str) -> StockAnalysis:
        symbol = symbols.normalize(symbol)
        if not symbol:
            raise InputValidationError("Stock symbol is required")

        quote = await self._resolve_quote(symbol)
        logger.info(f"Fetching suggestions for {quote.symbol}...")
        suggestion = await self._suggest(quote)
        logger.info(f"Suggestion generated for {quote.symbol}: {suggestion.recommendation.value}")

        return StockAnalysis(
            symbol=quote.symbol,
            name=quote.display_name,
            price=quote.price,
            change=quote.change,
            change_percent=quote.change_percent,
            volume=format_volume(quote.volume),
            high52w=quote.high52w,
            low52w=quote.low52w,
            suggestion=suggestion,
        )

    async def _resolve_quote(self, symbol: str) -> Quote:
        info = symbols.resolve(symbol)
        mapped = info is not None
        if not mapped:
            info = symbols.fallback(symbol)

        quote: Optional[Quote] = None
        try:
            quote = await self._quotes.fetch_one(info)
        except ProviderError as e:
            logger.warning(f"Quote lookup failed for {symbol} ({info.provider_symbol}): {e}")
        if quote is not None and quote.price > 0:
            return quote

        if mapped:
            raise QuoteUnavailableError(f"Failed to fetch quote for {symbol}")
        examples = ", ".join(symbols.EXAMPLE_SYMBOLS)
        raise SymbolNotFoundError(f"Stock not found. Try: {examples}, etc.")

    async def _suggest(self, quote: Quote) -> Recommendation:
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": self._describe(quote)},
        ]
        try:
            content = await self._generator.complete(messages, model=self._model)
        except FinnolanError as e:
            logger.error(f"AI API error for {quote.symbol}: {e}")
            return fallback_recommendation(quote.price, AI_UNAVAILABLE_REASONS, AI_UNAVAILABLE_SUMMARY)

        result = parse_recommendation(content)
        if isinstance(result, Parsed):
            return result.value
        logger.error(f"Error parsing AI response for {quote.symbol}: {result.reason}")
        return fallback_recommendation(quote.price, PARSE_ERROR_REASONS, PARSE_ERROR_SUMMARY)

    @staticmethod
    def _describe(quote: Quote) -> str:
        lines = [
            "Analyze this stock:",
            f"Symbol: {quote.symbol}",
            f"Company: {quote.display_name}",
            f"Current Price: {quote.price:.2f}",
            f"Daily Change: {_signed(quote.change)} ({_signed(quote.change_percent)}%)",
            f"Volume: {format_volume(quote.volume)}",
        ]
        if quote.high52w and quote.low52w:
            lines.append(f"52-Week Range: {quote.low52w:.2f} - {quote.high52w:.2f}")
        lines.append("")
        lines.append("Provide your recommendation in JSON format.")
        return "\n".join(lines)
