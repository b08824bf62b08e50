from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from venus.web.deps import AUTH_COOKIE_NAME

# Endpoints reachable without a session cookie
PUBLIC_ENDPOINTS = {
    ("POST", "/api/auth/register"),
    ("POST", "/api/auth/login"),
    ("POST", "/api/auth/logout"),
    ("GET", "/api/health"),
}


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Venus API",
            version="0.1.0",
            summary="Accounts and lockable savings goals",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "AuthTokenCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": AUTH_COOKIE_NAME,
                "description": "Signed session token stored in an HTTP-only cookie",
            },
        }

        # Apply security globally, then remove it from public endpoints
        openapi_schema["security"] = [{"AuthTokenCookie": []}]
        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in PUBLIC_ENDPOINTS:
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "email or password is wrong.", "type": "authentication_error"},
                {"message": "savings goal not found.", "type": "not_found"},
                {"message": "this goal does not allow emergency withdrawals yet.", "type": "access_denied"},
            ]
        }
    }


class MessageResponse(BaseModel):
    """Response carrying only a human-readable message."""

    message: str = Field(..., description="Human-readable message")
