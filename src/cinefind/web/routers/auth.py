from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from cinefind.core.modules.session.models import AuthResult, SessionUser
from cinefind.web.deps import AppDep
from cinefind.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class LoginRequest(BaseModel):
    """Authentication request."""

    email: str = Field(..., description="Account email (case-insensitive)")
    password: str = Field(..., description="Account password")


class RegisterRequest(BaseModel):
    """Registration request."""

    email: str = Field(..., description="Account email (case-insensitive)")
    display_name: str = Field(..., description="Name shown in the UI")
    password: str = Field(..., description="Account password")


class AuthResponse(BaseModel):
    """Outcome of login or registration."""

    success: bool = Field(..., description="Whether the user is now signed in")
    message: str = Field(..., description="Human-readable outcome")
    user: SessionUser | None = Field(None, description="Signed-in user on success")
    token: str | None = Field(None, description="Session token on success")

    @classmethod
    def from_result(cls, result: AuthResult) -> "AuthResponse":
        if result.session is None:
            return cls(success=result.success, message=result.message)
        return cls(success=result.success, message=result.message, user=result.session.user, token=result.session.token)


class AuthStatusResponse(BaseModel):
    """Current authentication state."""

    is_authenticated: bool = Field(..., description="Whether a valid session is held")
    user: SessionUser | None = Field(None, description="Signed-in user, if any")


@router.post(
    "/auth/login",
    summary="Sign in",
    description="Authenticate with email and password. Failures are reported in the body with HTTP 401.",
    operation_id="login",
    responses={
        200: {"description": "Signed in"},
        401: {"model": AuthResponse, "description": "Invalid credentials"},
    },
)
async def login(login_data: LoginRequest, app: AppDep, response: Response) -> AuthResponse:
    result = await app.login(login_data.email, login_data.password)
    if not result.success:
        response.status_code = 401
    return AuthResponse.from_result(result)


@router.post(
    "/auth/register",
    summary="Create account",
    description="Register a new account and sign it in. Failures are reported in the body with HTTP 400.",
    operation_id="register",
    responses={
        200: {"description": "Account created and signed in"},
        400: {"model": AuthResponse, "description": "Duplicate email or invalid input"},
    },
)
async def register(register_data: RegisterRequest, app: AppDep, response: Response) -> AuthResponse:
    result = await app.register(register_data.email, register_data.display_name, register_data.password)
    if not result.success:
        response.status_code = 400
    return AuthResponse.from_result(result)


@router.post(
    "/auth/logout",
    summary="Sign out",
    description="Clear the current session. Succeeds even when nobody is signed in.",
    operation_id="logout",
    status_code=204,
    responses={204: {"description": "Signed out"}, 500: {"model": ErrorResponse, "description": "Storage failure"}},
)
async def logout(app: AppDep) -> None:
    await app.logout()


@router.get(
    "/auth/status",
    summary="Authentication status",
    description="Report whether a valid, unexpired session is held.",
    operation_id="getAuthStatus",
)
async def auth_status(app: AppDep) -> AuthStatusResponse:
    session = app.get_current_session()
    if session is None:
        return AuthStatusResponse(is_authenticated=False)
    return AuthStatusResponse(is_authenticated=True, user=session.user)
