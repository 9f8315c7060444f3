"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without tying the
  Core to I/O libraries.
- The request envelope serializes to compact JSON with no hand-written encoder.

Note:
- These models describe *what* the data is, not *how* it is obtained.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

MAX_DESCRIPTION_LENGTH = 140


class AppCredential(BaseModel):
    """Client id and bearer token for a third-party app.

    Only `client_id` and `access_token` are used to place a marker; the other
    fields are kept so the stored file remains the operator's single record.
    """

    model_config = ConfigDict(extra="ignore")

    client_id: str = Field(..., min_length=1, description="Application client id (Client-ID header).")
    access_token: str = Field(..., min_length=1, description="OAuth access token (bearer).")
    client_secret: str | None = Field(default=None, description="Application client secret, if stored.")
    refresh_token: str | None = Field(default=None, description="OAuth refresh token, if stored.")
    scopes: list[str] = Field(default_factory=list, description="Granted OAuth scopes.")
    expires_at: datetime | None = Field(default=None, description="Access token expiry, if known.")


class StoredCredential(AppCredential):
    updated_at: datetime | None = None


class CredentialFile(BaseModel):
    services: dict[str, StoredCredential] = Field(default_factory=dict)


class CredentialMetadata(BaseModel):
    """Where a credential came from."""

    service: str
    source: Path
    updated_at: datetime | None = None


class MarkerRequest(BaseModel):
    """JSON body for `POST /helix/streams/markers`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    user_id: str = Field(..., description="Broadcaster user id.")
    description: str = Field(..., max_length=MAX_DESCRIPTION_LENGTH, description="Marker description.")

    def to_json_bytes(self) -> bytes:
        return self.model_dump_json().encode("utf-8")


class MarkerOutcome(BaseModel):
    status_code: int
    description: str
