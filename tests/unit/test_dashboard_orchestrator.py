"""Tests for DashboardOrchestrator (cache, per-line state, refresh, notifications)."""

import asyncio
from dataclasses import replace
from unittest.mock import AsyncMock, MagicMock

import pytest

from adminpanel.application.dtos.dashboard import NotificationEvent, ViewState
from adminpanel.application.services.dashboard_orchestrator import DashboardOrchestrator
from adminpanel.core.config import Settings
from adminpanel.domain.enums import Severity
from adminpanel.domain.exceptions import (
    AdminPanelException,
    OperationTimeoutError,
    TransportError,
    ValidationException,
)
from adminpanel.infrastructure.cache.ttl_cell import TTLCacheCell
from adminpanel.infrastructure.external.dashboard_api.transformers import to_dashboard_summary
from tests.fakes import SUMMARY, FakeClock, FakeDataSource, QueuedSummarySource

OLD_SUMMARY = replace(SUMMARY, total_users=1)
NEW_SUMMARY = replace(SUMMARY, total_users=2)


async def _settle() -> None:
    """Let pending tasks run up to their next suspension point."""
    for _ in range(3):
        await asyncio.sleep(0)


class TestFetchSummaryCache:
    """Summary is served from the TTL cache unless forced or expired."""

    async def test_first_fetch_hits_network_and_fills_state(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource
    ) -> None:
        summary = await orchestrator.fetch_summary()
        assert summary == SUMMARY
        assert source.calls["summary"] == 1
        assert orchestrator.state.summary == SUMMARY
        assert orchestrator.state.is_loading is False
        assert orchestrator.cache.is_valid() is True

    async def test_second_fetch_within_ttl_makes_no_call(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource, clock: FakeClock
    ) -> None:
        await orchestrator.fetch_summary()
        clock.advance(299)
        summary = await orchestrator.fetch_summary()
        assert summary == SUMMARY
        assert source.calls["summary"] == 1

    async def test_force_refresh_bypasses_cache(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource
    ) -> None:
        await orchestrator.fetch_summary()
        await orchestrator.fetch_summary(force_refresh=True)
        assert source.calls["summary"] == 2

    async def test_expired_entry_refetches(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource, clock: FakeClock
    ) -> None:
        await orchestrator.fetch_summary()
        clock.advance(300)
        await orchestrator.fetch_summary()
        assert source.calls["summary"] == 2

    async def test_summary_cache_age(
        self, orchestrator: DashboardOrchestrator, clock: FakeClock
    ) -> None:
        assert orchestrator.summary_cache_age() is None
        await orchestrator.fetch_summary()
        clock.advance(30)
        assert orchestrator.summary_cache_age() == 30
        clock.advance(270)
        assert orchestrator.summary_cache_age() is None

    async def test_failed_fetch_does_not_touch_cache(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource
    ) -> None:
        source.failures["summary"] = TransportError("down", status_code=500)
        with pytest.raises(TransportError):
            await orchestrator.fetch_summary()
        assert orchestrator.cache.is_valid() is False
        assert orchestrator.state.summary is None

    async def test_scenario_from_remote_payload(self, clock: FakeClock) -> None:
        """Real payload shape through the transform, then a cache hit one second later."""
        payload = {
            "totalUsers": 6,
            "totalSuppliers": 19,
            "totalOrders": 68,
            "totalRevenue": 13485370,
            "pendingVerifications": 9,
            "activeUsers": 4,
            "monthlyGrowth": {"users": 0, "orders": -8.7, "revenue": -99.9},
        }
        source = FakeDataSource(summary=to_dashboard_summary(payload))
        orchestrator = DashboardOrchestrator(
            data_source=source,
            notify=lambda event: None,
            cache=TTLCacheCell(ttl_seconds=300, clock=clock),
            settings=Settings(),
        )
        summary = await orchestrator.fetch_summary()
        assert summary.total_users == 6
        assert summary.monthly_growth.orders == -8.7
        clock.advance(1)
        again = await orchestrator.fetch_summary()
        assert again.total_revenue == 13485370
        assert source.calls["summary"] == 1


class TestSeriesFetches:
    """Sales and user growth series record data and period together."""

    async def test_sales_series_sets_period(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource
    ) -> None:
        points = await orchestrator.fetch_sales_series("week")
        assert points[0].date == "week-1"
        assert orchestrator.state.sales_period == "week"
        assert orchestrator.state.sales_series == tuple(points)

    async def test_sales_series_is_never_cached(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource
    ) -> None:
        await orchestrator.fetch_sales_series("month")
        await orchestrator.fetch_sales_series("month")
        assert source.calls["sales"] == 2

    async def test_user_growth_series_sets_period(
        self, orchestrator: DashboardOrchestrator
    ) -> None:
        points = await orchestrator.fetch_user_growth_series("year")
        assert orchestrator.state.user_growth_period == "year"
        assert orchestrator.state.user_growth_series == tuple(points)

    async def test_category_distribution(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource
    ) -> None:
        dist = await orchestrator.fetch_category_distribution()
        assert dist is source.categories
        assert orchestrator.state.category_distribution is dist

    @pytest.mark.parametrize("period", ["quarter", "", "MONTH"])
    async def test_invalid_sales_period_rejected_without_call(
        self,
        orchestrator: DashboardOrchestrator,
        source: FakeDataSource,
        notifications: list[NotificationEvent],
        period: str,
    ) -> None:
        with pytest.raises(ValidationException) as exc_info:
            await orchestrator.fetch_sales_series(period)
        assert exc_info.value.details == {"field": "period"}
        assert source.calls["sales"] == 0
        assert notifications == []

    async def test_day_is_not_a_growth_period(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource
    ) -> None:
        with pytest.raises(ValidationException):
            await orchestrator.fetch_user_growth_series("day")
        assert source.calls["growth"] == 0


class TestFailureHandling:
    """A failed line records the error, notifies once and re-raises."""

    async def test_failure_notifies_and_sets_error(
        self,
        orchestrator: DashboardOrchestrator,
        source: FakeDataSource,
        notifications: list[NotificationEvent],
    ) -> None:
        error = TransportError("Internal server error.", status_code=500)
        source.failures["sales:week"] = error
        with pytest.raises(TransportError) as exc_info:
            await orchestrator.fetch_sales_series("week")
        assert exc_info.value is error
        assert orchestrator.state.error is error
        assert orchestrator.state.is_loading is False
        assert notifications == [
            NotificationEvent(Severity.ERROR, "Error", "Failed to fetch sales data for week")
        ]

    async def test_plain_exception_is_normalized(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource
    ) -> None:
        source.failures["category"] = RuntimeError("kaput")
        with pytest.raises(AdminPanelException) as exc_info:
            await orchestrator.fetch_category_distribution()
        assert exc_info.value.message == "kaput"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert orchestrator.state.error is exc_info.value

    async def test_retrying_line_clears_its_error(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource
    ) -> None:
        source.fail_times["summary"] = (1, TransportError("down"))
        with pytest.raises(TransportError):
            await orchestrator.fetch_summary()
        assert orchestrator.state.error is not None
        await orchestrator.fetch_summary()
        assert orchestrator.state.error is None

    async def test_other_line_success_keeps_error(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource
    ) -> None:
        error = TransportError("down")
        source.failures["summary"] = error
        with pytest.raises(TransportError):
            await orchestrator.fetch_summary()
        await orchestrator.fetch_category_distribution()
        assert orchestrator.state.error is error

    async def test_async_mock_source(self, settings: Settings) -> None:
        """Any object with the data source coroutines can back the orchestrator."""
        source = AsyncMock()
        source.get_category_distribution.side_effect = TransportError("down", status_code=502)
        notifications: list[NotificationEvent] = []
        orchestrator = DashboardOrchestrator(
            data_source=source, notify=notifications.append, settings=settings
        )
        with pytest.raises(TransportError):
            await orchestrator.fetch_category_distribution()
        source.get_category_distribution.assert_awaited_once_with()
        assert len(notifications) == 1

    async def test_reporter_receives_failure(
        self, source: FakeDataSource, settings: Settings
    ) -> None:
        reporter = MagicMock()
        orchestrator = DashboardOrchestrator(
            data_source=source, notify=lambda event: None, reporter=reporter, settings=settings
        )
        error = TransportError("down")
        source.failures["category"] = error
        with pytest.raises(TransportError):
            await orchestrator.fetch_category_distribution()
        reporter.report.assert_called_once_with(error, "dashboard.category")


class TestLoadingAndStaleness:
    """is_loading tracks in-flight lines; stale completions do not write state."""

    async def test_is_loading_while_in_flight(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource
    ) -> None:
        gate = source.gates["category"] = asyncio.Event()
        task = asyncio.create_task(orchestrator.fetch_category_distribution())
        await _settle()
        assert orchestrator.state.is_loading is True
        gate.set()
        await task
        assert orchestrator.state.is_loading is False

    async def test_cache_hit_leaves_loading_to_in_flight_lines(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource
    ) -> None:
        await orchestrator.fetch_summary()
        gate = source.gates["category"] = asyncio.Event()
        task = asyncio.create_task(orchestrator.fetch_category_distribution())
        await _settle()
        await orchestrator.fetch_summary()
        assert orchestrator.state.is_loading is True
        gate.set()
        await task
        assert orchestrator.state.is_loading is False
        assert source.calls["summary"] == 1

    async def test_older_request_resolving_late_is_discarded(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource
    ) -> None:
        gate = source.gates["sales:week"] = asyncio.Event()
        older = asyncio.create_task(orchestrator.fetch_sales_series("week"))
        await _settle()
        await orchestrator.fetch_sales_series("day")
        gate.set()
        late = await older
        assert late[0].date == "week-1"
        assert orchestrator.state.sales_period == "day"
        assert orchestrator.state.sales_series[0].date == "day-1"
        assert orchestrator.state.is_loading is False

    async def test_stale_failure_does_not_set_error(
        self,
        orchestrator: DashboardOrchestrator,
        source: FakeDataSource,
        notifications: list[NotificationEvent],
    ) -> None:
        gate = source.gates["growth:week"] = asyncio.Event()
        source.failures["growth:week"] = TransportError("late failure")
        older = asyncio.create_task(orchestrator.fetch_user_growth_series("week"))
        await _settle()
        await orchestrator.fetch_user_growth_series("month")
        gate.set()
        with pytest.raises(TransportError):
            await older
        assert orchestrator.state.error is None
        assert orchestrator.state.user_growth_period == "month"
        assert len(notifications) == 1

    async def test_notifier_replaced_mid_flight(
        self,
        orchestrator: DashboardOrchestrator,
        source: FakeDataSource,
        notifications: list[NotificationEvent],
    ) -> None:
        """A failure that lands after update() goes to the new callback."""
        gate = source.gates["summary"] = asyncio.Event()
        source.failures["summary"] = TransportError("down")
        task = asyncio.create_task(orchestrator.fetch_summary())
        await _settle()
        replacement: list[NotificationEvent] = []
        orchestrator.notifier.update(replacement.append)
        gate.set()
        with pytest.raises(TransportError):
            await task
        assert notifications == []
        assert [e.message for e in replacement] == ["Failed to fetch dashboard statistics"]

    async def test_superseded_summary_is_not_cached(
        self, clock: FakeClock, settings: Settings
    ) -> None:
        source = QueuedSummarySource(OLD_SUMMARY, NEW_SUMMARY)
        orchestrator = DashboardOrchestrator(
            data_source=source,
            notify=lambda event: None,
            cache=TTLCacheCell(ttl_seconds=300, clock=clock),
            settings=settings,
        )
        older = asyncio.create_task(orchestrator.fetch_summary(force_refresh=True))
        await _settle()
        newer = asyncio.create_task(orchestrator.fetch_summary(force_refresh=True))
        await _settle()
        source.release(1)
        assert await newer == NEW_SUMMARY
        source.release(0)
        assert await older == OLD_SUMMARY
        assert orchestrator.state.summary == NEW_SUMMARY
        assert orchestrator.cache.get() == NEW_SUMMARY
        clock.advance(1)
        assert await orchestrator.fetch_summary() == NEW_SUMMARY
        assert orchestrator.state.summary == NEW_SUMMARY
        assert source.calls["summary"] == 2

    async def test_refresh_all_does_not_cache_superseded_summary(
        self, clock: FakeClock, settings: Settings
    ) -> None:
        source = QueuedSummarySource(OLD_SUMMARY, NEW_SUMMARY)
        orchestrator = DashboardOrchestrator(
            data_source=source,
            notify=lambda event: None,
            cache=TTLCacheCell(ttl_seconds=300, clock=clock),
            settings=settings,
        )
        batch = asyncio.create_task(orchestrator.refresh_all())
        await _settle()
        newer = asyncio.create_task(orchestrator.fetch_summary(force_refresh=True))
        await _settle()
        source.release(1)
        assert await newer == NEW_SUMMARY
        source.release(0)
        state = await batch
        assert state.summary == NEW_SUMMARY
        assert orchestrator.cache.get() == NEW_SUMMARY
        assert await orchestrator.fetch_summary() == NEW_SUMMARY

    async def test_refresh_all_finishing_after_newer_fetch_keeps_newer_cache(
        self, clock: FakeClock, settings: Settings
    ) -> None:
        """The batch summary landed first, but a newer fetch cached before the batch ended."""
        source = QueuedSummarySource(OLD_SUMMARY, NEW_SUMMARY)
        gate = source.gates["category"] = asyncio.Event()
        orchestrator = DashboardOrchestrator(
            data_source=source,
            notify=lambda event: None,
            cache=TTLCacheCell(ttl_seconds=300, clock=clock),
            settings=settings,
        )
        batch = asyncio.create_task(orchestrator.refresh_all())
        await _settle()
        source.release(0)
        await _settle()
        assert orchestrator.state.summary == OLD_SUMMARY
        newer = asyncio.create_task(orchestrator.fetch_summary(force_refresh=True))
        await _settle()
        source.release(1)
        await newer
        gate.set()
        await batch
        assert orchestrator.cache.get() == NEW_SUMMARY
        assert orchestrator.state.summary == NEW_SUMMARY


class TestRefreshAll:
    """refresh_all runs the four lines concurrently and merges what succeeds."""

    async def test_full_success_fills_state_and_cache(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource
    ) -> None:
        state = await orchestrator.refresh_all()
        assert isinstance(state, ViewState)
        assert state.summary == SUMMARY
        assert len(state.sales_series) == 1
        assert len(state.user_growth_series) == 1
        assert state.category_distribution is source.categories
        assert state.is_loading is False
        assert state.error is None
        assert orchestrator.cache.is_valid() is True
        assert dict(source.calls) == {"summary": 1, "sales": 1, "growth": 1, "category": 1}

    async def test_always_fetches_summary_even_when_cached(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource
    ) -> None:
        await orchestrator.fetch_summary()
        await orchestrator.refresh_all()
        assert source.calls["summary"] == 2

    async def test_uses_current_periods(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource
    ) -> None:
        await orchestrator.fetch_sales_series("year")
        await orchestrator.fetch_user_growth_series("week")
        state = await orchestrator.refresh_all()
        assert state.sales_series[0].date == "year-1"
        assert state.user_growth_series[0].date == "week-1"

    async def test_partial_failure_keeps_successful_lines(
        self,
        orchestrator: DashboardOrchestrator,
        source: FakeDataSource,
        notifications: list[NotificationEvent],
    ) -> None:
        error = TransportError("Internal server error.", status_code=500)
        source.failures["category"] = error
        with pytest.raises(TransportError) as exc_info:
            await orchestrator.refresh_all()
        assert exc_info.value is error
        state = orchestrator.state
        assert state.summary == SUMMARY
        assert len(state.sales_series) == 1
        assert len(state.user_growth_series) == 1
        assert state.category_distribution is None
        assert state.error is error
        assert state.is_loading is False
        assert [e.message for e in notifications] == [
            "Failed to fetch category distribution data"
        ]
        assert orchestrator.cache.is_valid() is False

    async def test_first_failure_is_raised_and_each_notifies(
        self,
        orchestrator: DashboardOrchestrator,
        source: FakeDataSource,
        notifications: list[NotificationEvent],
    ) -> None:
        gate = source.gates["category"] = asyncio.Event()
        summary_error = TransportError("summary down")
        category_error = TransportError("category down")
        source.failures["summary"] = summary_error
        source.failures["category"] = category_error
        task = asyncio.create_task(orchestrator.refresh_all())
        await _settle()
        gate.set()
        with pytest.raises(TransportError) as exc_info:
            await task
        assert exc_info.value is summary_error
        assert orchestrator.state.error is category_error
        assert len(notifications) == 2


class TestManualRefresh:
    """manual_refresh wraps refresh_all with retry and timeout."""

    async def test_success(
        self,
        orchestrator: DashboardOrchestrator,
        notifications: list[NotificationEvent],
    ) -> None:
        result = await orchestrator.manual_refresh()
        assert result.success is True
        assert result.attempts == 1
        assert result.value == orchestrator.state
        assert notifications == []

    async def test_recovers_on_later_attempt_without_notifying(
        self,
        orchestrator: DashboardOrchestrator,
        source: FakeDataSource,
        notifications: list[NotificationEvent],
    ) -> None:
        source.fail_times["sales:month"] = (1, TransportError("flaky"))
        result = await orchestrator.manual_refresh()
        assert result.success is True
        assert result.attempts == 2
        assert notifications == []
        assert orchestrator.state.error is None
        assert orchestrator.cache.is_valid() is True

    async def test_exhausted_notifies_once(
        self,
        source: FakeDataSource,
        notifications: list[NotificationEvent],
        settings: Settings,
    ) -> None:
        reporter = MagicMock()
        orchestrator = DashboardOrchestrator(
            data_source=source,
            notify=notifications.append,
            reporter=reporter,
            settings=settings,
        )
        source.failures["summary"] = TransportError("Service unavailable.", status_code=503)
        result = await orchestrator.manual_refresh()
        assert result.success is False
        assert result.attempts == 3
        assert source.calls["summary"] == 3
        assert result.error is not None
        assert result.error.message == "Service unavailable."
        assert notifications == [
            NotificationEvent(Severity.ERROR, "Error", "Service unavailable.")
        ]
        reporter.report.assert_called_once_with(result.error, "Dashboard Refresh")
        assert orchestrator.state.error is result.error

    async def test_timeout(
        self, source: FakeDataSource, notifications: list[NotificationEvent]
    ) -> None:
        settings = Settings(refresh_timeout_seconds=0.05, refresh_retries=1)
        orchestrator = DashboardOrchestrator(
            data_source=source, notify=notifications.append, settings=settings
        )
        source.gates["category"] = asyncio.Event()
        result = await orchestrator.manual_refresh()
        assert result.success is False
        assert result.attempts == 2
        assert isinstance(result.error, OperationTimeoutError)
        assert result.error.message == "Refresh Dashboard timed out after 0.05 seconds"
        assert orchestrator.state.is_loading is False
        assert [e.message for e in notifications] == [result.error.message]

    async def test_next_refresh_clears_previous_refresh_error(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource
    ) -> None:
        source.failures["summary"] = TransportError("down")
        failed = await orchestrator.manual_refresh()
        assert orchestrator.state.error is failed.error
        del source.failures["summary"]
        result = await orchestrator.manual_refresh()
        assert result.success is True
        assert orchestrator.state.error is None


class TestInitialLoad:
    """ensure_initial_load starts refresh_all exactly once."""

    async def test_idempotent(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource
    ) -> None:
        first = orchestrator.ensure_initial_load()
        second = orchestrator.ensure_initial_load()
        assert first is second
        await first
        assert orchestrator.ensure_initial_load() is first
        assert source.calls["summary"] == 1
        assert orchestrator.state.summary == SUMMARY

    async def test_failure_is_recorded_not_raised_to_caller(
        self,
        orchestrator: DashboardOrchestrator,
        source: FakeDataSource,
        notifications: list[NotificationEvent],
    ) -> None:
        source.failures["summary"] = TransportError("down")
        task = orchestrator.ensure_initial_load()
        await asyncio.wait([task])
        assert isinstance(task.exception(), TransportError)
        assert orchestrator.state.error is not None
        assert len(notifications) == 1

    async def test_aclose_cancels_pending_load(
        self, orchestrator: DashboardOrchestrator, source: FakeDataSource
    ) -> None:
        source.gates["summary"] = asyncio.Event()
        task = orchestrator.ensure_initial_load()
        await _settle()
        await orchestrator.aclose()
        assert task.cancelled()
        assert orchestrator.state.is_loading is False
