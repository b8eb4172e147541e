"""Domain exceptions. Each carries the HTTP status it surfaces as."""


class FinnolanError(Exception):
    """Base exception for all handled errors."""
    http_status: int = 500

    def __init__(self, message: str, http_status: int = None):
        super().__init__(message)
        self.message = message
        if http_status is not None:
            self.http_status = http_status


class InputValidationError(FinnolanError):
    """Raised when required request input is missing or empty."""
    http_status = 400


class SymbolNotFoundError(FinnolanError):
    """Raised when a symbol cannot be resolved to a tradable quote."""
    http_status = 404


class ConfigurationError(FinnolanError):
    """Raised when a required provider key is not configured."""
    http_status = 500


class ProviderError(FinnolanError):
    """Raised when an upstream provider fails or returns a malformed body."""
    http_status = 500

    def __init__(self, provider: str, message: str, status_code: int = None):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class RateLimitedError(ProviderError):
    """Generation provider rejected the call with 429."""
    http_status = 429


class PaymentRequiredError(ProviderError):
    """Generation provider rejected the call with 402."""
    http_status = 402


class QuoteUnavailableError(FinnolanError):
    """Raised when a resolved symbol returns no usable price."""
    http_status = 500


class DatastoreError(FinnolanError):
    """Raised when the external datastore rejects an update."""
    http_status = 500
