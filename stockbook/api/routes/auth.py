"""Login and registration endpoints."""

from fastapi import APIRouter, Depends

from stockbook.api.dependencies import get_login_use_case, get_register_use_case
from stockbook.application.dto.requests import LoginRequest, RegisterRequest
from stockbook.application.dto.responses import ErrorResponse, SessionResponse
from stockbook.application.use_cases import LoginUseCase, RegisterUseCase

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=SessionResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def login(
    request: LoginRequest,
    use_case: LoginUseCase = Depends(get_login_use_case),
) -> SessionResponse:
    """Exchange credentials for a Bearer token."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post(
    "/register",
    response_model=SessionResponse,
    responses={400: {"model": ErrorResponse}},
)
async def register(
    request: RegisterRequest,
    use_case: RegisterUseCase = Depends(get_register_use_case),
) -> SessionResponse:
    result = await use_case.execute(request)
    return use_case.to_response(result)
