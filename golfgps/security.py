"""Request guards for the read API and the course editor."""

from __future__ import annotations

import os
from typing import Optional, Set

from fastapi import Header, HTTPException, Query, Request, status

from .config import env_bool


def _key_set(name: str) -> Set[str]:
    return {key.strip() for key in os.getenv(name, "").split(",") if key.strip()}


def require_api_key(
    x_api_key: str | None = Header(default=None, alias="x-api-key"),
    api_key_query: str | None = Query(default=None, alias="apiKey"),
) -> str | None:
    """Require a matching API key when ``REQUIRE_API_KEY`` is enabled.

    The key may come from the ``x-api-key`` header or the ``apiKey`` query
    parameter; ``API_KEY`` may list several comma-separated keys.
    """

    candidate = x_api_key or api_key_query
    if not env_bool("REQUIRE_API_KEY"):
        return candidate

    if candidate not in _key_set("API_KEY"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="invalid api key",
        )
    return candidate


def require_editor_token(request: Request) -> Optional[str]:
    """Guard editor writes with ``EDITOR_TOKEN`` when it is configured.

    Without a token the editor stays open (local mapping sessions). With one,
    writes need a matching ``x-editor-token`` header and must not come from a
    foreign browser origin.
    """

    expected = os.getenv("EDITOR_TOKEN")
    if not expected:
        return None

    provided = request.headers.get("x-editor-token")
    if provided != expected:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="invalid editor token",
        )
    origin = request.headers.get("origin")
    if origin:
        base = f"{request.url.scheme}://{request.url.netloc}"
        if origin.rstrip("/") != base.rstrip("/"):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="cross-origin edits are not permitted",
            )
    return f"editor:{provided[-4:]}"


__all__ = ["require_api_key", "require_editor_token"]
