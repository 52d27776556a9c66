"""Security helpers for API authentication."""

from __future__ import annotations

import os
from typing import Set, Tuple

from fastapi import Header, HTTPException, Query, status

from golfmaster.config import env_bool


def _parse_keys(raw: str) -> Set[str]:
    return {key.strip() for key in raw.split(",") if key.strip()}


def load_api_keys() -> Tuple[str | None, Set[str]]:
    """Return the primary API key and the set of allowed keys."""

    primary = os.getenv("API_KEY")
    allowed = _parse_keys(os.getenv("GOLFMASTER_API_KEYS", ""))
    if primary:
        allowed.add(primary)
    return primary, allowed


def require_api_key(
    x_api_key: str | None = Header(default=None, alias="x-api-key"),
    api_key_query: str | None = Query(default=None, alias="apiKey"),
) -> str | None:
    """Require a matching API key header when enabled via env."""

    candidate = x_api_key or api_key_query

    if not env_bool("REQUIRE_API_KEY"):
        return candidate

    _primary, allowed_keys = load_api_keys()
    if not allowed_keys or candidate not in allowed_keys:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="invalid api key",
        )

    return candidate


__all__ = ["require_api_key", "load_api_keys"]
