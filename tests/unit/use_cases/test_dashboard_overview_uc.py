"""Unit tests for the concurrent dashboard refresh."""

import asyncio

import pytest
from structlog.testing import capture_logs

from stockbook.application.use_cases.dashboard_overview import (
    DashboardOverviewUseCase,
    DashboardRegistry,
    DashboardState,
)
from stockbook.core.entities import Session
from stockbook.core.exceptions import (
    AuthenticationRequiredError,
    BackendRejectedError,
    BackendUnavailableError,
)


@pytest.fixture
def backend(mock_backend, inventory_payload, invoice_payload):
    mock_backend.list_inventory.return_value = inventory_payload
    mock_backend.list_orders.return_value = {"orders": []}
    mock_backend.list_invoices.return_value = {"invoices": [invoice_payload]}
    mock_backend.get_monthly_profit.return_value = {
        "data": {"totalRevenue": 1500, "totalCost": 1100, "totalProfit": 400}
    }
    return mock_backend


@pytest.fixture
def use_case(backend) -> DashboardOverviewUseCase:
    return DashboardOverviewUseCase(backend=backend, registry=DashboardRegistry())


class TestOverview:
    async def test_all_sections_load(self, use_case, session):
        response = use_case.to_response(await use_case.execute(session))

        assert response.inventory.loaded
        assert response.inventory.data.total == 2
        assert response.invoices.data.invoices[0].invoice_number == "INV-001"
        assert response.monthly_profit.data.total_profit == 400.0
        assert response.orders.error is None

    async def test_failing_section_is_isolated(self, use_case, backend, session):
        backend.list_orders.side_effect = BackendRejectedError("list_orders", 500, "boom")

        response = use_case.to_response(await use_case.execute(session))

        assert not response.orders.loaded
        assert response.orders.error.error_code == "BACKEND_REJECTED"
        assert response.orders.error.message == "boom"
        assert response.inventory.loaded
        assert response.invoices.loaded
        assert response.monthly_profit.loaded

    async def test_unexpected_exception_is_isolated(self, use_case, backend, session):
        backend.list_orders.side_effect = RuntimeError("connection reset mid-parse")

        with capture_logs() as logs:
            response = use_case.to_response(await use_case.execute(session))

        assert not response.orders.loaded
        assert response.orders.error.error_code == "SECTION_FAILED"
        assert response.orders.error.message == "Section failed to load"
        assert response.inventory.loaded
        assert response.invoices.loaded
        assert response.monthly_profit.loaded

        failed = [e for e in logs if e["event"] == "dashboard_section_failed"]
        assert len(failed) == 1
        assert failed[0]["section"] == "orders"
        assert failed[0]["log_level"] == "error"
        assert failed[0]["exc_info"]

    async def test_error_keeps_last_good_data(self, use_case, backend, session):
        await use_case.execute(session)
        backend.list_inventory.side_effect = BackendUnavailableError("list_inventory")

        response = use_case.to_response(await use_case.execute(session))

        assert response.inventory.loaded
        assert response.inventory.data.total == 2
        assert response.inventory.error.retryable

    async def test_requires_token(self, use_case, anonymous, backend):
        with pytest.raises(AuthenticationRequiredError):
            await use_case.execute(anonymous)
        backend.list_inventory.assert_not_awaited()

    async def test_overlapping_refresh_drops_stale_result(
        self, use_case, backend, session, inventory_payload
    ):
        release = asyncio.Event()
        calls = 0
        old = {"items": [inventory_payload["items"][0]]}

        async def list_inventory(_session):
            nonlocal calls
            calls += 1
            if calls == 1:
                await release.wait()
                return old
            return inventory_payload

        backend.list_inventory.side_effect = list_inventory

        first = asyncio.create_task(use_case.execute(session))
        while calls < 1:
            await asyncio.sleep(0)
        state = await use_case.execute(session)
        release.set()
        await first

        inventory = state.sections["inventory"]
        assert inventory.ticket == 2
        assert inventory.data.total == 2


class TestDashboardState:
    def test_stale_ticket_is_discarded(self):
        state = DashboardState()
        first = state.begin("orders")
        second = state.begin("orders")

        assert state.apply("orders", second, data="new")
        assert not state.apply("orders", first, data="old")
        assert state.sections["orders"].data == "new"


class TestDashboardRegistry:
    def test_state_per_session(self, session):
        registry = DashboardRegistry()
        assert registry.get(session) is registry.get(session)
        assert registry.get(Session(token="other")) is not registry.get(session)

    def test_evicts_least_recent(self):
        registry = DashboardRegistry(max_sessions=2)
        a, b, c = (Session(token=t) for t in "abc")
        state_a = registry.get(a)
        registry.get(b)
        registry.get(a)
        registry.get(c)

        assert len(registry) == 2
        assert registry.get(a) is state_a

    def test_discard(self, session):
        registry = DashboardRegistry()
        registry.get(session)
        registry.discard(session)
        assert len(registry) == 0
