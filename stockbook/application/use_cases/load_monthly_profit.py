"""Monthly profit card."""

from stockbook.application.dto.responses import MonthlyProfitResponse
from stockbook.application.services import get_backend
from stockbook.application.use_cases.views import monthly_view
from stockbook.core.entities import MonthlyProfit, Session
from stockbook.core.interfaces import IBackendClient
from stockbook.core.services import parse_monthly_profit


class LoadMonthlyProfitUseCase:
    """Fetch the backend's rollup for the current month. None means no data."""

    def __init__(self, backend: IBackendClient | None = None):
        self._backend = backend

    async def execute(self, session: Session) -> MonthlyProfit | None:
        payload = await get_backend(self._backend).get_monthly_profit(session)
        return parse_monthly_profit(payload)

    def to_response(self, result: MonthlyProfit | None) -> MonthlyProfitResponse:
        return monthly_view(result)
