"""httpx wrapper.

Why a wrapper:
- Standardizes headers and timeout policy for every request the tool makes.
- Easy to test: the submitter takes a client factory, so tests pass a client
  built on `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings, load_settings

HELIX_BASE_URL = "https://api.twitch.tv/helix"


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    timeout: httpx.Timeout | float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the tool's defaults.

    `timeout=None` disables httpx's own timeouts; the marker request is
    bounded by an explicit cancellation deadline instead.
    """

    settings = settings or load_settings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=False,
        headers=headers,
        transport=transport,
    )


def bearer_headers(client_id: str, access_token: str) -> dict[str, str]:
    """Helix auth headers for an app credential."""

    return {
        "Client-ID": client_id,
        "Authorization": "Bearer " + access_token,
    }
