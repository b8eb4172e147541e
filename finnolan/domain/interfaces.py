"""Provider interfaces (Ports) - abstraction for external services."""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional

from finnolan.domain.entities import NewsItem, Quote, SymbolInfo


class QuoteProvider(ABC):
    """Interface for current-quote lookups."""

    @abstractmethod
    async def fetch_quote(self, info: SymbolInfo) -> Quote:
        """Fetch a quote. Raises ProviderError when no usable price exists."""
        pass


class NewsSearchProvider(ABC):
    """Interface for free-text news search."""

    @abstractmethod
    async def search(self, query: str, language: str, max_results: int) -> List[NewsItem]:
        """Return matching articles, possibly empty."""
        pass


class TextGenerator(ABC):
    """Interface for chat-completion style text generation."""

    @abstractmethod
    async def complete(
        self, messages: List[Dict[str, str]], model: Optional[str] = None
    ) -> str:
        """Return the generated text for a list of role/content messages."""
        pass

    def ensure_configured(self) -> None:
        """Raise ConfigurationError if the generator cannot be called."""
        return None


class PageFetcher(ABC):
    """Interface for downloading a web document."""

    @abstractmethod
    async def fetch(self, url: str) -> str:
        """Return the raw document body."""
        pass


class SpeechSynthesizer(ABC):
    """Interface for text-to-speech."""

    @abstractmethod
    async def synthesize(self, text: str, language_code: str, voice_name: str) -> str:
        """Return base64-encoded MP3 audio."""
        pass


class EmailSender(ABC):
    """Interface for transactional email delivery."""

    @abstractmethod
    async def send(self, to: List[str], subject: str, html: str) -> dict:
        """Send an email and return the provider's response body."""
        pass


class WatchlistRepository(ABC):
    """Interface for watchlist persistence owned by the external datastore."""

    @abstractmethod
    async def mark_alert_sent(self, watchlist_id: str, sent_at: datetime) -> None:
        """Record the last time an alert was sent for an entry."""
        pass
