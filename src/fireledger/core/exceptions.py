"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class QuoteFetchError(AppError):
    """Raised by market data providers when a quote cannot be fetched."""

    def __init__(self, symbol: str, message: str, code: str = "QUOTE_FETCH_ERROR"):
        self.symbol = symbol
        super().__init__(message, code=code)


class QuoteNotFoundError(QuoteFetchError):
    """Raised when the price source does not know the ticker."""

    def __init__(self, symbol: str):
        super().__init__(symbol, "ticker not found", code="TICKER_NOT_FOUND")


class RateLimitedError(QuoteFetchError):
    """Raised when the price source rejects a request because of rate limits."""

    def __init__(self, symbol: str):
        super().__init__(symbol, "rate limited", code="RATE_LIMITED")
