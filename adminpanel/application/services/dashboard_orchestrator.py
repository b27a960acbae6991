"""Dashboard fetch orchestrator.

Owns the dashboard ViewState and coordinates the four request lines
(summary, sales, user growth, category). Runs on a single event loop:
state is only touched between awaits, so no locks are needed.

Per line: Idle -> Loading -> Success | Failed -> Idle on the next fetch.
is_loading is true while any line has a request in flight; error holds the
latest failure. Every issued fetch takes a per-line generation number and
only the newest generation may write its slice, so an older request that
resolves late never overwrites a newer one.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace
from typing import Any, TypeVar

from adminpanel.application.dtos.dashboard import (
    CategoryDistribution,
    DashboardSummary,
    NotificationEvent,
    SalesPoint,
    UserGrowthPoint,
    ViewState,
)
from adminpanel.application.interfaces.services import (
    IDashboardDataSource,
    IErrorReporter,
    NotifyCallback,
)
from adminpanel.core.config import Settings, get_settings
from adminpanel.core.constants import REFRESH_OPERATION_NAME
from adminpanel.domain.enums import GrowthPeriod, RequestLine, SalesPeriod, Severity
from adminpanel.domain.exceptions import AdminPanelException, ValidationException
from adminpanel.infrastructure.cache.cache_protocol import CacheCellProtocol
from adminpanel.infrastructure.cache.ttl_cell import TTLCacheCell
from adminpanel.shared.errors import normalize_error
from adminpanel.shared.notifier import StableNotifier
from adminpanel.shared.retry import OperationResult, run_with_retry

logger = logging.getLogger(__name__)

T = TypeVar("T")

REFRESH_CONTEXT = "Dashboard Refresh"
REFRESH_KEY = "refresh"


def _validate_sales_period(period: str) -> str:
    try:
        return SalesPeriod(period).value
    except ValueError:
        raise ValidationException(
            f"Invalid sales period: {period!r}. Must be one of: "
            + ", ".join(SalesPeriod.values()),
            field="period",
        ) from None


def _validate_growth_period(period: str) -> str:
    try:
        return GrowthPeriod(period).value
    except ValueError:
        raise ValidationException(
            f"Invalid user growth period: {period!r}. Must be one of: "
            + ", ".join(GrowthPeriod.values()),
            field="period",
        ) from None


class DashboardOrchestrator:
    """Fetch, cache and merge dashboard data into one ViewState.

    Collaborators are injected: the data source, the notify callback
    (wrapped in a StableNotifier unless one is passed), an optional error
    reporter and an optional cache cell for the summary.
    """

    def __init__(
        self,
        data_source: IDashboardDataSource,
        notify: NotifyCallback | StableNotifier,
        reporter: IErrorReporter | None = None,
        cache: CacheCellProtocol[DashboardSummary] | None = None,
        settings: Settings | None = None,
    ) -> None:
        s = settings or get_settings()
        self._source = data_source
        self.notifier = notify if isinstance(notify, StableNotifier) else StableNotifier(notify)
        self._reporter = reporter
        self._cache: CacheCellProtocol[DashboardSummary] = cache or TTLCacheCell(
            ttl_seconds=s.dashboard_cache_ttl_seconds
        )
        self._refresh_timeout_seconds = s.refresh_timeout_seconds
        self._refresh_retries = s.refresh_retries
        self._state = ViewState()
        self._in_flight: dict[RequestLine, int] = {line: 0 for line in RequestLine}
        self._generations: dict[RequestLine, int] = {line: 0 for line in RequestLine}
        # Outstanding failures keyed by line (or the manual refresh), tagged
        # with a sequence number so the newest one is ViewState.error.
        self._failures: dict[str, tuple[int, AdminPanelException]] = {}
        self._failure_seq = 0
        self._initial_load: asyncio.Task[ViewState] | None = None

    @property
    def state(self) -> ViewState:
        """Current ViewState snapshot (immutable)."""
        return self._state

    @property
    def cache(self) -> CacheCellProtocol[DashboardSummary]:
        return self._cache

    def summary_cache_age(self) -> float | None:
        """Seconds since the cached summary was stored; None when absent or expired."""
        if not self._cache.is_valid():
            return None
        return self._cache.age()

    def _set_state(self, **changes: Any) -> None:
        latest = max(self._failures.values(), key=lambda item: item[0], default=None)
        self._state = replace(
            self._state,
            is_loading=any(self._in_flight.values()),
            error=latest[1] if latest else None,
            **changes,
        )

    def _record_failure(self, key: str, error: AdminPanelException) -> None:
        self._failure_seq += 1
        self._failures[key] = (self._failure_seq, error)

    def _surface_failure(self, error: AdminPanelException, message: str, context: str) -> None:
        """Notify the user once and hand the error to the reporter."""
        self.notifier(NotificationEvent(Severity.ERROR, "Error", message))
        if self._reporter is not None:
            self._reporter.report(error, context)

    def _is_current(self, line: RequestLine, generation: int) -> bool:
        return generation == self._generations[line]

    async def _run_line(
        self,
        line: RequestLine,
        fetch: Callable[[], Awaitable[T]],
        apply: Callable[[T], dict[str, Any]],
        failure_message: str,
        surface: bool = True,
    ) -> tuple[T, int]:
        """Run one network fetch for a line and merge its result.

        Returns the value with the generation it was issued under; pair it
        with _is_current() before any write that outlives the call.

        Raises the normalized error after recording it in ViewState and,
        when surface is True, notifying and reporting it.
        """
        self._generations[line] += 1
        generation = self._generations[line]
        self._in_flight[line] += 1
        self._failures.pop(line.value, None)
        self._set_state()
        try:
            value = await fetch()
        except Exception as e:
            error = normalize_error(e)
            if self._is_current(line, generation):
                self._record_failure(line.value, error)
            logger.warning("Dashboard %s fetch failed: %s", line.value, error.message)
            if surface:
                self._surface_failure(error, failure_message, f"dashboard.{line.value}")
            if error is e:
                raise
            raise error from e
        else:
            if self._is_current(line, generation):
                self._set_state(**apply(value))
            else:
                logger.debug(
                    "Discarding stale %s result (generation %s, current %s)",
                    line.value,
                    generation,
                    self._generations[line],
                )
            return value, generation
        finally:
            self._in_flight[line] -= 1
            self._set_state()

    async def _load_summary(self, surface: bool = True) -> tuple[DashboardSummary, int]:
        return await self._run_line(
            RequestLine.SUMMARY,
            self._source.get_summary,
            lambda data: {"summary": data},
            "Failed to fetch dashboard statistics",
            surface=surface,
        )

    def _cache_summary(self, summary: DashboardSummary, generation: int) -> None:
        if self._is_current(RequestLine.SUMMARY, generation):
            self._cache.put(summary)
        else:
            logger.debug("Not caching superseded summary (generation %s)", generation)

    async def fetch_summary(self, force_refresh: bool = False) -> DashboardSummary:
        """Return summary statistics, from the cache while it is valid.

        A cache hit performs no network call and leaves is_loading alone.
        Otherwise the summary is fetched, written to ViewState and cached,
        unless a newer summary fetch was issued while it was in flight.

        Raises:
            AdminPanelException: The fetch failed (already notified).
        """
        if not force_refresh and self._cache.is_valid():
            cached = self._cache.get()
            if cached is not None:
                logger.debug("Cache HIT: summary (age: %.1fs)", self._cache.age() or 0.0)
                self._set_state(summary=cached)
                return cached
        summary, generation = await self._load_summary()
        self._cache_summary(summary, generation)
        return summary

    async def _load_sales(self, period: str, surface: bool = True) -> list[SalesPoint]:
        points, _ = await self._run_line(
            RequestLine.SALES,
            lambda: self._source.get_sales_series(period),
            lambda data: {"sales_series": tuple(data), "sales_period": period},
            f"Failed to fetch sales data for {period}",
            surface=surface,
        )
        return points

    async def fetch_sales_series(self, period: str) -> list[SalesPoint]:
        """Fetch the sales series for day, week, month or year (never cached)."""
        return await self._load_sales(_validate_sales_period(period))

    async def _load_user_growth(self, period: str, surface: bool = True) -> list[UserGrowthPoint]:
        points, _ = await self._run_line(
            RequestLine.USER_GROWTH,
            lambda: self._source.get_user_growth_series(period),
            lambda data: {"user_growth_series": tuple(data), "user_growth_period": period},
            f"Failed to fetch user growth data for {period}",
            surface=surface,
        )
        return points

    async def fetch_user_growth_series(self, period: str) -> list[UserGrowthPoint]:
        """Fetch the user growth series for week, month or year (never cached)."""
        return await self._load_user_growth(_validate_growth_period(period))

    async def _load_categories(self, surface: bool = True) -> CategoryDistribution:
        distribution, _ = await self._run_line(
            RequestLine.CATEGORY,
            self._source.get_category_distribution,
            lambda data: {"category_distribution": data},
            "Failed to fetch category distribution data",
            surface=surface,
        )
        return distribution

    async def fetch_category_distribution(self) -> CategoryDistribution:
        """Fetch the category distribution (never cached)."""
        return await self._load_categories()

    async def _refresh_all(self, surface: bool) -> ViewState:
        failures: list[AdminPanelException] = []

        async def settle(awaitable: Awaitable[T]) -> T | None:
            try:
                return await awaitable
            except AdminPanelException as e:
                failures.append(e)
                return None

        sales_period = self._state.sales_period
        growth_period = self._state.user_growth_period
        loaded_summary, _, _, _ = await asyncio.gather(
            settle(self._load_summary(surface=surface)),
            settle(self._load_sales(sales_period, surface=surface)),
            settle(self._load_user_growth(growth_period, surface=surface)),
            settle(self._load_categories(surface=surface)),
        )
        if failures:
            # failures is in completion order; the earliest one wins.
            raise failures[0]
        if loaded_summary is not None:
            self._cache_summary(*loaded_summary)
        return self._state

    async def refresh_all(self) -> ViewState:
        """Fetch all four lines concurrently and merge what succeeds.

        Partial successes stay in ViewState. The summary cache is refreshed
        only when the whole batch succeeds and no newer summary fetch was
        issued meanwhile.

        Returns:
            ViewState after the batch.

        Raises:
            AdminPanelException: The first line to fail.
        """
        return await self._refresh_all(surface=True)

    async def manual_refresh(self) -> OperationResult[ViewState]:
        """User-triggered refresh: refresh_all under the retry/timeout wrapper.

        Attempts do not notify individually; a final failure produces one
        notification and one report. Never raises for a failed refresh.
        """
        self._failures.pop(REFRESH_KEY, None)
        result = await run_with_retry(
            lambda: self._refresh_all(surface=False),
            timeout_seconds=self._refresh_timeout_seconds,
            retries=self._refresh_retries,
            operation_name=REFRESH_OPERATION_NAME,
        )
        if not result.success and result.error is not None:
            self._record_failure(REFRESH_KEY, result.error)
            self._set_state()
            self._surface_failure(result.error, result.error.message, REFRESH_CONTEXT)
        return result

    def ensure_initial_load(self) -> asyncio.Task[ViewState]:
        """Start the initial refresh_all once; later calls return the same task.

        Must be called from a running event loop.
        """
        if self._initial_load is None:
            loop = asyncio.get_running_loop()
            self._initial_load = loop.create_task(self.refresh_all())
            self._initial_load.add_done_callback(self._log_initial_load)
        return self._initial_load

    @staticmethod
    def _log_initial_load(task: asyncio.Task[ViewState]) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning("Initial dashboard load failed: %s", error)
        else:
            logger.info("Initial dashboard load complete")

    async def aclose(self) -> None:
        """Tear down: cancel a pending initial load and drop the cache."""
        task = self._initial_load
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._cache.clear()
