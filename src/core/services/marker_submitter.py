"""Place a marker in the live broadcast.

One invocation, one request:
1. compose the description (timestamp plus optional note) and check its length
2. read `twitch.id` from the Configuration Store
3. look up the `twitch` credential
4. POST the JSON envelope with a cancellation deadline racing the request
5. print the HTTP status code

Any status code is reported as-is; only local failures, transport errors and
the deadline raise.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable, Sequence

import httpx
from rich.console import Console

from adapters.http_client import HELIX_BASE_URL, bearer_headers, build_async_client
from core.domain.models import MAX_DESCRIPTION_LENGTH, AppCredential, MarkerOutcome, MarkerRequest
from core.errors import ConfigurationError, CredentialError, MarkerValidationError, TransportError
from core.interfaces.stores import ConfigStore, CredentialStore

logger = logging.getLogger(__name__)

MARKERS_URL = f"{HELIX_BASE_URL}/streams/markers"
DEFAULT_DEADLINE_SECONDS = 10.0
CANCELLED_NOTICE = "Cancelled"
TWITCH_ID_KEY = "twitch.id"
TWITCH_SERVICE = "twitch"


def iso_second(moment: datetime) -> str:
    """`2023-09-14T10:15:30` (no fraction, no offset)."""

    return moment.strftime("%Y-%m-%dT%H:%M:%S")


def compose_description(timestamp: str, args: Sequence[str]) -> str:
    """Timestamp, then a newline and the space-joined note when args are given.

    Raises `MarkerValidationError` above 140 characters.
    """

    description = timestamp
    if args:
        description += "\n" + " ".join(args)
    if len(description) > MAX_DESCRIPTION_LENGTH:
        budget = MAX_DESCRIPTION_LENGTH - len(timestamp) - 1
        raise MarkerValidationError(
            f"note must be at most {budget} characters "
            f"({MAX_DESCRIPTION_LENGTH} total with timestamp, got {len(description)})"
        )
    return description


class MarkerSubmitter:
    """Builds, sends and reports a single marker request.

    Collaborators are injected so tests run without real config, tokens or
    network: `client_factory` returns a fresh `httpx.AsyncClient`, `clock`
    returns the current local time.
    """

    def __init__(
        self,
        config_store: ConfigStore,
        credential_store: CredentialStore,
        *,
        clock: Callable[[], datetime] = datetime.now,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
        deadline_seconds: float = DEFAULT_DEADLINE_SECONDS,
        console: Console | None = None,
    ) -> None:
        self._config_store = config_store
        self._credential_store = credential_store
        self._clock = clock
        self._client_factory = client_factory or (lambda: build_async_client(timeout=None))
        self._deadline_seconds = deadline_seconds
        self._console = console or Console(highlight=False)

    def build_description(self, args: Sequence[str]) -> str:
        return compose_description(iso_second(self._clock()), args)

    def submit(self, args: Sequence[str]) -> MarkerOutcome:
        """Blocking entry point used by the CLI."""

        return asyncio.run(self.submit_async(args))

    async def submit_async(self, args: Sequence[str]) -> MarkerOutcome:
        description = self.build_description(args)
        user_id = self._account_id()
        credential = self._credential()

        envelope = MarkerRequest(user_id=user_id, description=description)
        headers = bearer_headers(credential.client_id, credential.access_token)
        headers["Content-Type"] = "application/json"

        status_code = await self._post_with_deadline(envelope.to_json_bytes(), headers)
        self._console.print(str(status_code))
        return MarkerOutcome(status_code=status_code, description=description)

    def _account_id(self) -> str:
        try:
            self._config_store.load()
            user_id = self._config_store.get(TWITCH_ID_KEY)
        except ConfigurationError:
            raise
        except Exception as exc:
            raise ConfigurationError(f"cannot load configuration: {exc}") from exc
        if not user_id:
            raise ConfigurationError(f"{TWITCH_ID_KEY} not found in configuration")
        return user_id

    def _credential(self) -> AppCredential:
        try:
            _, credential = self._credential_store.lookup(TWITCH_SERVICE)
        except CredentialError:
            raise
        except Exception as exc:
            raise CredentialError(f"cannot load {TWITCH_SERVICE} credential: {exc}") from exc
        return credential

    async def _post_with_deadline(self, body: bytes, headers: dict[str, str]) -> int:
        expired = False

        async with self._client_factory() as client:
            try:
                request = client.build_request("POST", MARKERS_URL, content=body, headers=headers)
            except (httpx.HTTPError, ValueError) as exc:
                raise TransportError(f"cannot build request: {exc}", cause=exc) from exc

            request_task = asyncio.create_task(client.send(request))

            async def expire() -> None:
                nonlocal expired
                await asyncio.sleep(self._deadline_seconds)
                expired = True
                self._console.print(CANCELLED_NOTICE)
                logger.warning("marker request cancelled after %.1fs", self._deadline_seconds)
                request_task.cancel()

            timer = asyncio.create_task(expire())
            logger.debug("POST %s (deadline %.1fs)", MARKERS_URL, self._deadline_seconds)
            try:
                response = await request_task
            except asyncio.CancelledError as exc:
                if not expired:
                    raise
                raise TransportError(
                    f"request cancelled after {self._deadline_seconds:g}s deadline",
                    cause=exc,
                    cancelled=True,
                ) from exc
            except httpx.HTTPError as exc:
                raise TransportError(f"request failed: {exc}", cause=exc) from exc
            finally:
                timer.cancel()

        logger.debug("marker request returned HTTP %s", response.status_code)
        return response.status_code
