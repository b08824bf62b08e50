from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from venus.app import App
from venus.config import Config
from venus.errors import UserError
from venus.web.error_handlers import general_exception_handler, request_validation_error_handler, user_error_handler
from venus.web.openapi import set_custom_openapi
from venus.web.routers import auth_router, savings_router

API_PREFIX = "/api"


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="Venus API",
        lifespan=lifespan,
        openapi_tags=[],  # Tags will be added by custom OpenAPI function
    )
    # Set before startup so dependencies work even when the lifespan is not run
    app.state.app = app_instance
    app.state.config = config

    # Browser client sends the session cookie cross-origin
    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get(f"{API_PREFIX}/health")
    async def health_check() -> dict[str, str]:
        return {"status": "ok", "message": "auth backend is running."}

    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(savings_router, prefix=API_PREFIX)

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
