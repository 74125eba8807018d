"""Shared request helpers."""

from typing import Optional

from fastapi import Request

from ...config import Container


def get_app_container(request: Request) -> Container:
    return request.app.state.container


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def format_validation_errors(error) -> str:
    """Compact message from a pydantic ``ValidationError``."""
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item.get("loc", ()))
        parts.append(f"{location}: {item.get('msg')}" if location else item.get("msg", ""))
    return "; ".join(parts)
