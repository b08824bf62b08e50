from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie

from venus.app import App
from venus.config import Config
from venus.core.modules.session.models import AuthToken

AUTH_COOKIE_NAME = "authToken"

# Security scheme
cookie_scheme = APIKeyCookie(name=AUTH_COOKIE_NAME, auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_config(request: Request) -> Config:
    return cast(Config, request.app.state.config)


async def get_auth_token(token_cookie: Annotated[str | None, Depends(cookie_scheme)] = None) -> AuthToken | None:
    """Get the session token from the auth cookie.

    Validation happens in the App facade, before any protected operation runs.
    """
    if not token_cookie:
        return None
    return AuthToken(token_cookie)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
ConfigDep = Annotated[Config, Depends(get_config)]
AuthTokenDep = Annotated[AuthToken | None, Depends(get_auth_token)]
