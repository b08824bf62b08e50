from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from venus.config import Config
from venus.core.modules.session.models import AuthToken
from venus.core.modules.session.service import SESSION_TTL
from venus.core.modules.user.models import UserView
from venus.web.deps import AUTH_COOKIE_NAME, AppDep, AuthTokenDep, ConfigDep
from venus.web.openapi import ErrorResponse, MessageResponse

router = APIRouter(tags=["auth"])


class CredentialsRequest(BaseModel):
    """Email and password, used for both registration and login."""

    email: str | None = Field(None, description="Email address (case-insensitive)")
    password: str | None = Field(None, description="Password")


class UserResponse(BaseModel):
    """Authenticated user, returned together with the session cookie."""

    message: str = Field(..., description="Human-readable outcome")
    user: UserView


def set_auth_cookie(response: Response, token: AuthToken, config: Config) -> None:
    """Store the session token in an HTTP-only cookie for browser clients."""
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=config.cookie_secure,
        max_age=int(SESSION_TTL.total_seconds()),  # Matches token expiry
    )


@router.post(
    "/auth/register",
    summary="Create account",
    description="Register with email and password. Sets the session cookie on success.",
    operation_id="register",
    status_code=201,
    responses={
        201: {"description": "Account created"},
        400: {"model": ErrorResponse, "description": "Email or password missing"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
async def register(request: CredentialsRequest, app: AppDep, config: ConfigDep, response: Response) -> UserResponse:
    user, token = await app.register(request.email or "", request.password or "")
    set_auth_cookie(response, token, config)
    return UserResponse(message="account created.", user=user)


@router.post(
    "/auth/login",
    summary="Authenticate user",
    description="Authenticate with email and password. Sets the session cookie on success.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        400: {"model": ErrorResponse, "description": "Email or password missing"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(request: CredentialsRequest, app: AppDep, config: ConfigDep, response: Response) -> UserResponse:
    user, token = await app.login(request.email or "", request.password or "")
    set_auth_cookie(response, token, config)
    return UserResponse(message="logged in.", user=user)


@router.post(
    "/auth/logout",
    summary="End session",
    description="Clear the session cookie. Tokens are stateless, so nothing is revoked server-side.",
    operation_id="logout",
    responses={200: {"description": "Session cookie cleared"}},
)
async def logout(config: ConfigDep, response: Response) -> MessageResponse:
    response.delete_cookie(AUTH_COOKIE_NAME, httponly=True, samesite="lax", secure=config.cookie_secure)
    return MessageResponse(message="logged out.")


@router.get(
    "/auth/me",
    summary="Get current user",
    description="Get the user the session cookie belongs to.",
    operation_id="getCurrentUser",
    responses={
        200: {"description": "Current user"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_current_user(app: AppDep, auth_token: AuthTokenDep) -> UserView:
    return await app.get_current_user(auth_token)
