from typing import Any, Literal

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from chatroom.core.modules.message.models import MessageView
from chatroom.core.modules.user.models import UserView

# Endpoints that work without a session
PUBLIC_ENDPOINTS = {
    ("POST", "/api/register"),
    ("POST", "/api/login"),
    ("POST", "/api/logout"),
    ("GET", "/api/messages"),
    ("GET", "/verify"),
    ("GET", "/health"),
}


def set_custom_openapi(app: FastAPI, cookie_name: str) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Chat Room API",
            version="0.1.0",
            summary="Email-verified accounts and a shared polling chat room",
            routes=app.routes,
        )

        # Add security schemes
        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "SessionCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": cookie_name,
                "description": "Session identifier stored in cookie",
            },
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "description": "Session identifier sent as a bearer token",
            },
        }

        # Apply security globally (will be overridden for public endpoints)
        openapi_schema["security"] = [
            {"SessionCookie": []},
            {"BearerAuth": []},
        ]

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in PUBLIC_ENDPOINTS:
                    # Mark as public endpoint (no security required)
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    ok: Literal[False] = False
    error: str = Field(..., description="Human-readable error message")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"ok": False, "error": "Invalid email or password"},
                {"ok": False, "error": "Email already registered"},
                {"ok": False, "error": "Not authenticated"},
            ]
        }
    }


class OkResponse(BaseModel):
    """Acknowledgement with a human-readable message."""

    ok: Literal[True] = True
    message: str = Field(..., description="Human-readable status message")


class UserResponse(BaseModel):
    ok: Literal[True] = True
    user: UserView


class MessagesResponse(BaseModel):
    ok: Literal[True] = True
    messages: list[MessageView]
