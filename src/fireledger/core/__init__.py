"""Core utilities and shared functionality."""

from fireledger.core.timezone import (
    local_tz,
    now_local,
    to_local,
    parse_datetime_local,
)
from fireledger.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    QuoteFetchError,
    QuoteNotFoundError,
    RateLimitedError,
)

__all__ = [
    "local_tz",
    "now_local",
    "to_local",
    "parse_datetime_local",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "QuoteFetchError",
    "QuoteNotFoundError",
    "RateLimitedError",
]
