"""Login and registration against the backend."""

from stockbook.application.dto.requests import LoginRequest, RegisterRequest
from stockbook.application.dto.responses import SessionResponse, UserResponse
from stockbook.application.services import get_backend
from stockbook.config import get_logger
from stockbook.core.entities import AuthResponse
from stockbook.core.exceptions import ValidationError
from stockbook.core.interfaces import IBackendClient

logger = get_logger(__name__)


def _require(value: str, field: str) -> str:
    text = value.strip()
    if not text:
        raise ValidationError(field, "is required")
    return text


class _AuthUseCase:
    def __init__(self, backend: IBackendClient | None = None):
        self._backend = backend

    def _get_backend(self) -> IBackendClient:
        return get_backend(self._backend)

    @staticmethod
    def to_response(result: AuthResponse) -> SessionResponse:
        return SessionResponse(
            token=result.token,
            user=UserResponse(
                id=result.user.id, name=result.user.name, email=result.user.email
            ),
        )


class LoginUseCase(_AuthUseCase):
    """Exchange credentials for a session token."""

    async def execute(self, request: LoginRequest) -> AuthResponse:
        email = _require(request.email, "email")
        password = _require(request.password, "password")

        result = await self._get_backend().login(email, password)
        logger.info("login_complete", user_id=result.user.id)
        return result


class RegisterUseCase(_AuthUseCase):
    """Create an account and start a session."""

    async def execute(self, request: RegisterRequest) -> AuthResponse:
        name = _require(request.name, "name")
        email = _require(request.email, "email")
        password = _require(request.password, "password")

        result = await self._get_backend().register(name, email, password)
        logger.info("register_complete", user_id=result.user.id)
        return result
