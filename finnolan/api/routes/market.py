"""Market quote endpoints."""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
import logging

from finnolan.api.dependencies import get_quote_service
from finnolan.api.schemas import (
    ERROR_RESPONSES,
    IndexSnapshot,
    MarketDataResponse,
    QuotesRequest,
    QuotesResponse,
    StockSnapshot,
)
from finnolan.domain.exceptions import FinnolanError
from finnolan.services.quote_service import QuoteService, format_volume

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["market"], responses=ERROR_RESPONSES)


@router.api_route("/market-data", methods=["GET", "POST"], response_model=MarketDataResponse)
async def get_market_data(
    service: QuoteService = Depends(get_quote_service),
) -> MarketDataResponse:
    """Dashboard indices and top stocks."""
    try:
        indices, stocks = await service.market_overview()
        timestamp = datetime.now(timezone.utc).isoformat()
        return MarketDataResponse(
            indices=[
                IndexSnapshot(
                    name=q.display_name,
                    value=q.price,
                    change=q.change,
                    change_percent=q.change_percent,
                    timestamp=timestamp,
                )
                for q in indices.quotes
            ],
            top_stocks=[
                StockSnapshot(
                    symbol=q.symbol,
                    name=q.display_name,
                    price=q.price,
                    change=q.change,
                    change_percent=q.change_percent,
                    volume=format_volume(q.volume),
                )
                for q in stocks.quotes
            ],
            unavailable=indices.unavailable + stocks.unavailable,
        )
    except FinnolanError:
        raise
    except Exception as e:
        logger.error(f"Error fetching market data: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/quotes", response_model=QuotesResponse)
async def get_quotes(
    body: QuotesRequest,
    service: QuoteService = Depends(get_quote_service),
) -> QuotesResponse:
    """Quotes for arbitrary symbols, with per-symbol availability."""
    try:
        batch = await service.quotes(body.symbols)
        return QuotesResponse(quotes=batch.quotes, unavailable=batch.unavailable)
    except FinnolanError:
        raise
    except Exception as e:
        logger.error(f"Error fetching quotes for {body.symbols}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
