"""Dashboard endpoints: monthly profit card and the full overview."""

from fastapi import APIRouter, Depends

from stockbook.api.dependencies import (
    get_dashboard_overview_use_case,
    get_monthly_profit_use_case,
    get_session,
)
from stockbook.application.dto.responses import (
    DashboardOverviewResponse,
    ErrorResponse,
    MonthlyProfitResponse,
)
from stockbook.application.use_cases import (
    DashboardOverviewUseCase,
    LoadMonthlyProfitUseCase,
)
from stockbook.core.entities import Session

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get(
    "/monthly",
    response_model=MonthlyProfitResponse,
    responses={401: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def monthly_profit(
    session: Session = Depends(get_session),
    use_case: LoadMonthlyProfitUseCase = Depends(get_monthly_profit_use_case),
) -> MonthlyProfitResponse:
    """This month's revenue, cost and profit, or "No Data Available"."""
    result = await use_case.execute(session)
    return use_case.to_response(result)


@router.get(
    "/overview",
    response_model=DashboardOverviewResponse,
    responses={401: {"model": ErrorResponse}},
)
async def overview(
    session: Session = Depends(get_session),
    use_case: DashboardOverviewUseCase = Depends(get_dashboard_overview_use_case),
) -> DashboardOverviewResponse:
    """
    All dashboard sections, loaded concurrently.

    Each section reports its own error; one failing section does not
    affect the others.
    """
    state = await use_case.execute(session)
    return use_case.to_response(state)
