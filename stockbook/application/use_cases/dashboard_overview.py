"""
Dashboard overview: every section loaded concurrently.

Sections are independent. Each one holds either its data or the error it
hit, and a failing section never blanks the others. Results are applied
through a per-session ResponseSequencer, so when two refreshes overlap the
older responses are dropped instead of overwriting newer data.
"""

import asyncio
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from stockbook.application.dto.responses import (
    DashboardOverviewResponse,
    ErrorResponse,
    SectionResponse,
)
from stockbook.application.services import get_backend
from stockbook.application.use_cases.load_monthly_profit import LoadMonthlyProfitUseCase
from stockbook.application.use_cases.manage_inventory import ListInventoryUseCase
from stockbook.application.use_cases.manage_invoices import ListInvoicesUseCase
from stockbook.application.use_cases.record_order import ListOrdersUseCase
from stockbook.config import get_logger
from stockbook.core.entities import Session
from stockbook.core.exceptions import StockbookError
from stockbook.core.interfaces import IBackendClient
from stockbook.core.services import ResponseSequencer

logger = get_logger(__name__)

SECTIONS = ("inventory", "orders", "invoices", "monthly_profit")
SECTION_FAILED = "SECTION_FAILED"


@dataclass
class SectionState:
    """Last applied result for one section."""

    loaded: bool = False
    data: Any = None
    error: StockbookError | None = None
    ticket: int = 0
    updated_at: datetime | None = None


@dataclass
class DashboardState:
    """Dashboard sections for one session."""

    sequencer: ResponseSequencer = field(default_factory=ResponseSequencer)
    sections: dict[str, SectionState] = field(
        default_factory=lambda: {name: SectionState() for name in SECTIONS}
    )

    def begin(self, section: str) -> int:
        return self.sequencer.issue(section)

    def apply(
        self,
        section: str,
        ticket: int,
        data: Any = None,
        error: StockbookError | None = None,
    ) -> bool:
        """Apply a result if its ticket is still current. Returns whether it was."""
        if not self.sequencer.is_current(section, ticket):
            logger.info(
                "stale_response_discarded",
                section=section,
                ticket=ticket,
                latest=self.sequencer.latest(section),
            )
            return False

        previous = self.sections[section]
        if error is not None:
            # Keep the last good data alongside the error
            self.sections[section] = SectionState(
                loaded=previous.loaded,
                data=previous.data,
                error=error,
                ticket=ticket,
                updated_at=datetime.now(),
            )
        else:
            self.sections[section] = SectionState(
                loaded=True, data=data, ticket=ticket, updated_at=datetime.now()
            )
        return True


class DashboardRegistry:
    """Per-session dashboard state, bounded to the most recent sessions."""

    def __init__(self, max_sessions: int = 256):
        self._max_sessions = max_sessions
        self._states: OrderedDict[str, DashboardState] = OrderedDict()

    def get(self, session: Session) -> DashboardState:
        key = session.require_token("dashboard_overview")
        state = self._states.get(key)
        if state is None:
            state = DashboardState()
            self._states[key] = state
            while len(self._states) > self._max_sessions:
                self._states.popitem(last=False)
        else:
            self._states.move_to_end(key)
        return state

    def discard(self, session: Session) -> None:
        if session.token:
            self._states.pop(session.token, None)

    def __len__(self) -> int:
        return len(self._states)


_registry: DashboardRegistry | None = None


def get_dashboard_registry() -> DashboardRegistry:
    """Get or create the shared dashboard registry."""
    global _registry
    if _registry is None:
        _registry = DashboardRegistry()
    return _registry


def _error_view(error: StockbookError) -> ErrorResponse:
    return ErrorResponse(
        error_code=error.code,
        message=error.message,
        retryable=error.retryable,
        severity=error.severity,
    )


class DashboardOverviewUseCase:
    """Refresh all dashboard sections for a session."""

    def __init__(
        self,
        backend: IBackendClient | None = None,
        registry: DashboardRegistry | None = None,
    ):
        self._backend = backend
        self._registry = registry

    def _loaders(self, session: Session) -> dict[str, Callable[[], Awaitable[Any]]]:
        backend = get_backend(self._backend)
        inventory = ListInventoryUseCase(backend)
        orders = ListOrdersUseCase(backend)
        invoices = ListInvoicesUseCase(backend)
        monthly = LoadMonthlyProfitUseCase(backend)

        async def load_inventory() -> Any:
            return inventory.to_response(await inventory.execute(session))

        async def load_orders() -> Any:
            return orders.to_response(await orders.execute(session))

        async def load_invoices() -> Any:
            return invoices.to_response(await invoices.execute(session))

        async def load_monthly() -> Any:
            return monthly.to_response(await monthly.execute(session))

        return {
            "inventory": load_inventory,
            "orders": load_orders,
            "invoices": load_invoices,
            "monthly_profit": load_monthly,
        }

    async def _run_section(
        self,
        state: DashboardState,
        section: str,
        ticket: int,
        loader: Callable[[], Awaitable[Any]],
    ) -> None:
        try:
            data = await loader()
        except StockbookError as e:
            logger.warning(
                "dashboard_section_failed",
                section=section,
                code=e.code,
                error=e.message,
            )
            state.apply(section, ticket, error=e)
            return
        except Exception as e:
            # Unexpected failures stay inside their section
            logger.exception(
                "dashboard_section_failed",
                section=section,
                code=SECTION_FAILED,
                error=str(e),
            )
            state.apply(
                section,
                ticket,
                error=StockbookError("Section failed to load", code=SECTION_FAILED),
            )
            return
        state.apply(section, ticket, data=data)

    async def execute(self, session: Session) -> DashboardState:
        registry = self._registry or get_dashboard_registry()
        state = registry.get(session)

        loaders = self._loaders(session)
        tickets = {section: state.begin(section) for section in loaders}
        logger.info("dashboard_refresh_started", tickets=tickets)

        await asyncio.gather(
            *(
                self._run_section(state, section, tickets[section], loader)
                for section, loader in loaders.items()
            )
        )

        failed = [name for name, s in state.sections.items() if s.error is not None]
        logger.info("dashboard_refresh_complete", failed_sections=failed)
        return state

    def to_response(self, state: DashboardState) -> DashboardOverviewResponse:
        def section(name: str) -> SectionResponse:
            s = state.sections[name]
            return SectionResponse(
                loaded=s.loaded,
                data=s.data,
                error=_error_view(s.error) if s.error else None,
                ticket=s.ticket,
            )

        return DashboardOverviewResponse(
            inventory=section("inventory"),
            orders=section("orders"),
            invoices=section("invoices"),
            monthly_profit=section("monthly_profit"),
        )
