"""Credential Store: app credentials in a JSON file.

Format:
    {"services": {"twitch": {"client_id": "...", "access_token": "...", ...}}}

The file lives in the user config dir and is written with 0600 permissions.
Tokens are stored as given; refresh is the operator's job (`auth add`).
"""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from core.config import get_user_config_dir
from core.domain.models import AppCredential, CredentialFile, CredentialMetadata, StoredCredential
from core.errors import CredentialError


def default_credentials_path() -> Path:
    return get_user_config_dir() / "credentials.json"


class JsonCredentialStore:
    def __init__(self, path: Path | None = None) -> None:
        self.path = path or default_credentials_path()

    def _read(self) -> CredentialFile:
        if not self.path.exists():
            raise CredentialError(f"no credentials file at {self.path} (run `twitch-mark auth add`)")
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise CredentialError(f"cannot read {self.path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise CredentialError(f"{self.path} is not valid JSON: {exc}") from exc
        try:
            return CredentialFile.model_validate(data)
        except ValidationError as exc:
            raise CredentialError(f"invalid credentials file {self.path}: {exc}") from exc

    def lookup(self, service: str) -> tuple[CredentialMetadata, AppCredential]:
        stored = self._read().services.get(service)
        if stored is None:
            raise CredentialError(f"no credential stored for service {service!r}")
        meta = CredentialMetadata(service=service, source=self.path, updated_at=stored.updated_at)
        credential = AppCredential.model_validate(stored.model_dump(exclude={"updated_at"}))
        return meta, credential

    def services(self) -> list[str]:
        if not self.path.exists():
            return []
        return sorted(self._read().services)

    def save(self, service: str, credential: AppCredential) -> Path:
        """Store (or replace) the credential for `service`."""

        current = self._read() if self.path.exists() else CredentialFile()
        current.services[service] = StoredCredential(
            **credential.model_dump(exclude={"updated_at"}),
            updated_at=datetime.now(timezone.utc),
        )

        payload = current.model_dump(mode="json", exclude_none=True)
        text = json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.unlink(missing_ok=True)
            # Mode 0600 from creation; the live file is only ever replaced whole.
            fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise CredentialError(f"cannot write {self.path}: {exc}") from exc
        return self.path
