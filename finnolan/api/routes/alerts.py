"""Watchlist alert endpoints."""
from fastapi import APIRouter, Depends, HTTPException
import logging

from finnolan.api.dependencies import get_alert_notifier, get_watchlist_alert_service
from finnolan.api.schemas import (
    ERROR_RESPONSES,
    AlertCheckRequest,
    AlertCheckResponse,
    AlertRequest,
    AlertResponse,
)
from finnolan.domain.entities import PriceAlert
from finnolan.domain.exceptions import FinnolanError
from finnolan.services.alert_service import AlertNotifier, WatchlistAlertService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["alerts"], responses=ERROR_RESPONSES)


@router.post("/alerts", response_model=AlertResponse)
async def send_watchlist_alert(
    body: AlertRequest,
    notifier: AlertNotifier = Depends(get_alert_notifier),
) -> AlertResponse:
    """Send a price-alert email for one entry. No cooldown is applied here."""
    try:
        email_response = await notifier.notify(
            PriceAlert(
                watchlist_id=body.watchlist_id,
                symbol=body.stock_symbol,
                name=body.stock_name,
                current_price=body.current_price,
                target_price=body.target_price,
                alert_type=body.alert_type,
                recipient=body.user_email,
            )
        )
        return AlertResponse(success=True, email_response=email_response)
    except FinnolanError:
        raise
    except Exception as e:
        logger.error(f"Error sending alert for {body.stock_symbol}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/watchlist/alerts/check", response_model=AlertCheckResponse)
async def check_watchlist_alerts(
    body: AlertCheckRequest,
    service: WatchlistAlertService = Depends(get_watchlist_alert_service),
) -> AlertCheckResponse:
    """Evaluate entries against live prices and notify those outside the cooldown."""
    try:
        results = await service.check(body.entries, body.user_email)
        return AlertCheckResponse(results=results)
    except FinnolanError:
        raise
    except Exception as e:
        logger.error(f"Error checking watchlist alerts: {e}")
        raise HTTPException(status_code=500, detail=str(e))
