"""Quote cache: per-ticker TTL cache in front of the market data provider."""

import asyncio
import logging
import time
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, Optional

from fireledger.core.exceptions import AppError
from fireledger.core.timezone import now_local
from fireledger.domain.views import Quote, QuoteResult
from fireledger.providers.market_data_provider import MarketDataProvider

logger = logging.getLogger(__name__)

DEFAULT_FRESHNESS_SECONDS = 60.0
DEFAULT_EVICTION_FACTOR = 10
DEFAULT_SWEEP_INTERVAL_SECONDS = 300.0
DEFAULT_MAX_BATCH_SIZE = 50


@dataclass
class _CacheEntry:
    quote: Quote
    stored_at: float  # clock seconds when the quote was fetched


def normalize_symbol(ticker: Optional[str]) -> str:
    """Trim and uppercase so `" aapl "` and `"AAPL"` share one entry."""
    return (ticker or "").strip().upper()


def _failure_message(exc: BaseException) -> str:
    if isinstance(exc, AppError):
        return exc.message
    if isinstance(exc, asyncio.TimeoutError):
        return "timed out"
    return str(exc) or exc.__class__.__name__


class QuoteCache:
    """
    In-process quote cache shared by all requests of one process.

    - Fresh entries (younger than the freshness window) are served without
      calling the provider.
    - Concurrent lookups of the same ticker share one in-flight fetch.
    - Fetch failures never raise: the previous entry is served as STALE when
      one exists, otherwise an ERROR result carries the reason.
    - Entries older than eviction_factor x freshness window are dropped by a
      periodic sweep (start()/stop()), never on the read path.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        freshness_seconds: float = DEFAULT_FRESHNESS_SECONDS,
        eviction_factor: int = DEFAULT_EVICTION_FACTOR,
        sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
        max_batch_size: int = DEFAULT_MAX_BATCH_SIZE,
        fetch_timeout_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._provider = provider
        self._freshness = freshness_seconds
        self._eviction_factor = eviction_factor
        self._sweep_interval = sweep_interval_seconds
        self._max_batch_size = max_batch_size
        self._fetch_timeout = fetch_timeout_seconds
        self._clock = clock

        self._entries: dict[str, _CacheEntry] = {}
        self._in_flight: dict[str, asyncio.Task] = {}
        self._sweep_task: Optional[asyncio.Task] = None

        self._hits = 0
        self._misses = 0
        self._coalesced = 0
        self._fetch_errors = 0

    @property
    def max_batch_size(self) -> int:
        return self._max_batch_size

    @property
    def is_running(self) -> bool:
        return self._sweep_task is not None and not self._sweep_task.done()

    def __len__(self) -> int:
        return len(self._entries)

    # Lookups

    async def get_quote(self, ticker: str) -> QuoteResult:
        """
        Return the quote for `ticker`, fetching it when missing or expired.

        Never raises for provider failures; see QuoteResult for the tagging.
        """
        symbol = normalize_symbol(ticker)
        if not symbol:
            return QuoteResult.error(ticker or "", "empty ticker")

        entry = self._entries.get(symbol)
        if entry is not None and self._is_fresh(entry):
            self._hits += 1
            return QuoteResult.fresh(entry.quote)

        task = self._in_flight.get(symbol)
        if task is None:
            self._misses += 1
            task = asyncio.create_task(self._refresh(symbol), name=f"quote-fetch-{symbol}")
            self._in_flight[symbol] = task
            task.add_done_callback(lambda t, s=symbol: self._release(s, t))
        else:
            self._coalesced += 1

        # Shielded so one cancelled waiter does not cancel the shared fetch
        return await asyncio.shield(task)

    async def get_quotes(self, tickers: Iterable[str]) -> list[QuoteResult]:
        """
        Look up a batch of tickers concurrently.

        Returns one result per ticker in input order. Batches longer than
        max_batch_size are truncated to protect the upstream rate limit.
        """
        tickers = list(tickers)
        if not tickers:
            return []
        if len(tickers) > self._max_batch_size:
            logger.warning(
                "Quote batch of %d tickers truncated to %d",
                len(tickers),
                self._max_batch_size,
            )
            tickers = tickers[: self._max_batch_size]

        results = await asyncio.gather(*(self.get_quote(t) for t in tickers))
        return list(results)

    async def get_quote_map(self, tickers: Iterable[str]) -> dict[str, QuoteResult]:
        """
        Look up every distinct ticker and key the results by normalized symbol.

        Unlike get_quotes, long lists are processed in consecutive batches so
        that no ticker is dropped.
        """
        symbols = sorted({normalize_symbol(t) for t in tickers if normalize_symbol(t)})
        result: dict[str, QuoteResult] = {}
        for start in range(0, len(symbols), self._max_batch_size):
            chunk = symbols[start : start + self._max_batch_size]
            for quote_result in await self.get_quotes(chunk):
                result[quote_result.symbol] = quote_result
        return result

    # Maintenance

    def sweep(self) -> int:
        """Evict entries older than eviction_factor x freshness window."""
        now = self._clock()
        max_age = self._freshness * self._eviction_factor
        expired = [
            symbol
            for symbol, entry in list(self._entries.items())
            if now - entry.stored_at > max_age
        ]
        for symbol in expired:
            self._entries.pop(symbol, None)
        if expired:
            logger.debug("Quote cache sweep evicted %d entries", len(expired))
        return len(expired)

    def clear(self) -> None:
        """Drop every cached quote."""
        self._entries.clear()

    def stats(self) -> dict[str, Any]:
        """Cache size and counters, for health checks and logging."""
        return {
            "entries": len(self._entries),
            "in_flight": len(self._in_flight),
            "hits": self._hits,
            "misses": self._misses,
            "coalesced": self._coalesced,
            "fetch_errors": self._fetch_errors,
            "sweeping": self.is_running,
        }

    async def start(self) -> None:
        """Start the periodic eviction sweep."""
        if self.is_running:
            return
        self._sweep_task = asyncio.create_task(self._sweep_loop(), name="quote-cache-sweep")
        logger.info(
            "Quote cache started (freshness=%ss, sweep every %ss)",
            self._freshness,
            self._sweep_interval,
        )

    async def stop(self) -> None:
        """Stop the sweep task and wait for it to finish."""
        if self._sweep_task is None:
            return
        self._sweep_task.cancel()
        try:
            await self._sweep_task
        except asyncio.CancelledError:
            pass
        self._sweep_task = None
        logger.info("Quote cache stopped")

    # Internals

    def _is_fresh(self, entry: _CacheEntry) -> bool:
        return self._clock() - entry.stored_at < self._freshness

    def _release(self, symbol: str, task: asyncio.Task) -> None:
        if self._in_flight.get(symbol) is task:
            del self._in_flight[symbol]

    async def _refresh(self, symbol: str) -> QuoteResult:
        try:
            if self._fetch_timeout:
                quote = await asyncio.wait_for(
                    self._provider.fetch_quote(symbol), timeout=self._fetch_timeout
                )
            else:
                quote = await self._provider.fetch_quote(symbol)
        except Exception as e:
            self._fetch_errors += 1
            message = _failure_message(e)
            previous = self._entries.get(symbol)
            if previous is not None:
                logger.warning("Quote fetch for %s failed (%s); serving stale entry", symbol, message)
                return QuoteResult.stale(previous.quote, message)
            logger.warning("Quote fetch for %s failed: %s", symbol, message)
            return QuoteResult.error(symbol, message)

        if quote.symbol != symbol or quote.fetched_at is None:
            quote = replace(quote, symbol=symbol, fetched_at=quote.fetched_at or now_local())
        self._entries[symbol] = _CacheEntry(quote=quote, stored_at=self._clock())
        return QuoteResult.fresh(quote)

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_interval)
            try:
                self.sweep()
            except Exception:
                logger.exception("Quote cache sweep failed")
