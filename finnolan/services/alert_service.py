"""Price alert business logic: rule evaluation, cooldown and email notification."""
from datetime import datetime, timedelta, timezone
from html import escape
from typing import Callable, List, Optional, Tuple
import logging

from finnolan.domain import symbols
from finnolan.domain.entities import (
    AlertCheckResult,
    AlertStatus,
    AlertType,
    PriceAlert,
    WatchlistEntry,
)
from finnolan.domain.exceptions import DatastoreError, FinnolanError, InputValidationError
from finnolan.domain.interfaces import EmailSender, WatchlistRepository
from finnolan.domain.results import Ok
from finnolan.services.quote_service import QuoteService

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWN = timedelta(hours=1)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def check_alert_condition(entry: WatchlistEntry, current_price: float) -> bool:
    """Check if the current price meets the entry's target condition."""
    if entry.target_price is None or not current_price:
        return False
    if entry.alert_type == AlertType.ABOVE:
        return current_price >= entry.target_price
    if entry.alert_type == AlertType.BELOW:
        return current_price <= entry.target_price
    return False


def cooldown_active(
    entry: WatchlistEntry, now: datetime, cooldown: timedelta = DEFAULT_COOLDOWN
) -> bool:
    """True while less than ``cooldown`` has passed since the last alert."""
    last_sent = entry.last_alert_sent_at
    if last_sent is None:
        return False
    if last_sent.tzinfo is None:
        last_sent = last_sent.replace(tzinfo=timezone.utc)
    return now - last_sent < cooldown


def render_alert_email(alert: PriceAlert, year: int) -> Tuple[str, str]:
    """Subject and HTML body for a triggered alert."""
    rising = alert.alert_type == AlertType.ABOVE
    direction = "risen above" if rising else "dropped below"
    emoji = "📈" if rising else "📉"
    banner_bg, banner_fg = ("#d4edda", "#155724") if rising else ("#f8d7da", "#721c24")
    name = escape(alert.name or alert.symbol)
    symbol = escape(alert.symbol)

    subject = f"{emoji} {alert.symbol} Price Alert - Target Reached!"
    html = f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
  <div style="background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); border-radius: 16px; padding: 30px; text-align: center; margin-bottom: 30px;">
    <h1 style="color: white; margin: 0; font-size: 28px;">{emoji} Price Alert Triggered!</h1>
  </div>
  <div style="background: #f8f9fa; border-radius: 12px; padding: 24px; margin-bottom: 24px;">
    <h2 style="margin-top: 0; color: #1a1a2e;">{name}</h2>
    <p style="font-size: 14px; color: #666; margin-bottom: 16px;">{symbol}</p>
    <p style="font-size: 12px; color: #888; margin-bottom: 4px;">Current Price</p>
    <p style="font-size: 24px; font-weight: bold; color: #1a1a2e; margin: 0;">₹{alert.current_price:.2f}</p>
    <p style="font-size: 12px; color: #888; margin-bottom: 4px;">Target Price</p>
    <p style="font-size: 24px; font-weight: bold; color: #667eea; margin: 0;">₹{alert.target_price:.2f}</p>
    <p style="background: {banner_bg}; color: {banner_fg}; padding: 12px 16px; border-radius: 8px; margin: 16px 0 0; text-align: center;">
      The price has {direction} your target of ₹{alert.target_price:.2f}
    </p>
  </div>
  <p style="color: #666; font-size: 14px; text-align: center;">This alert was sent from your FINNOLAN watchlist.</p>
  <hr style="border: none; border-top: 1px solid #eee; margin: 24px 0;">
  <p style="color: #999; font-size: 12px; text-align: center;">© {year} FINNOLAN - Your AI Financial Assistant</p>
</body>
</html>
"""
    return subject, html


class AlertNotifier:
    """Sends alert emails and records the send time.

    Unconditional once invoked: cooldown checks belong to the caller.
    """

    def __init__(
        self,
        email_sender: EmailSender,
        repository: WatchlistRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._email_sender = email_sender
        self._repository = repository
        self._clock = clock

    async def notify(self, alert: PriceAlert) -> dict:
        if alert.alert_type not in (AlertType.ABOVE, AlertType.BELOW):
            raise InputValidationError("alertType must be 'above' or 'below'")

        logger.info(f"Sending alert email for {alert.symbol}")
        subject, html = render_alert_email(alert, self._clock().year)
        email_response = await self._email_sender.send([alert.recipient], subject, html)
        logger.info(f"Email sent successfully for {alert.symbol}: {email_response.get('id')}")

        try:
            await self._repository.mark_alert_sent(alert.watchlist_id, self._clock())
        except DatastoreError as e:
            # Email already delivered; report success without the timestamp.
            logger.error(f"Failed to record alert for watchlist entry {alert.watchlist_id}: {e}")
        return email_response


class WatchlistAlertService:
    """Evaluates watchlist entries against live quotes and enforces the cooldown."""

    def __init__(
        self,
        quotes: QuoteService,
        notifier: AlertNotifier,
        cooldown: timedelta = DEFAULT_COOLDOWN,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._quotes = quotes
        self._notifier = notifier
        self._cooldown = cooldown
        self._clock = clock

    async def check(
        self, entries: List[WatchlistEntry], recipient: str
    ) -> List[AlertCheckResult]:
        if not (recipient or "").strip():
            raise InputValidationError("userEmail is required")

        infos = [symbols.resolve_or_fallback(entry.symbol) for entry in entries]
        outcomes = await self._quotes.fetch_many(infos)
        now = self._clock()

        results = []
        for entry, outcome in zip(entries, outcomes):
            price: Optional[float] = outcome.value.price if isinstance(outcome, Ok) else None
            results.append(await self._evaluate(entry, price, recipient, now))
        return results

    async def _evaluate(
        self,
        entry: WatchlistEntry,
        price: Optional[float],
        recipient: str,
        now: datetime,
    ) -> AlertCheckResult:
        result = AlertCheckResult(
            watchlist_id=entry.id,
            symbol=entry.symbol,
            current_price=price,
            status=AlertStatus.NOT_TRIGGERED,
        )
        if not price:
            result.status = AlertStatus.QUOTE_UNAVAILABLE
            return result
        if not check_alert_condition(entry, price):
            return result
        if cooldown_active(entry, now, self._cooldown):
            result.status = AlertStatus.COOLDOWN
            return result

        alert = PriceAlert(
            watchlist_id=entry.id,
            symbol=entry.symbol,
            name=entry.name or entry.symbol,
            current_price=price,
            target_price=entry.target_price,
            alert_type=entry.alert_type,
            recipient=recipient,
        )
        try:
            await self._notifier.notify(alert)
        except FinnolanError as e:
            logger.error(f"Alert for {entry.symbol} ({entry.id}) failed: {e}")
            result.status = AlertStatus.FAILED
            result.error = e.message
            return result
        result.status = AlertStatus.SENT
        return result
