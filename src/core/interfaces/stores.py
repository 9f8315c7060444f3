"""Contracts for the configuration and credential stores.

Why Protocol:
- Structural contract (duck typing) without rigid inheritance.
- Tests pass in-memory fakes; the CLI passes the file-backed adapters.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import AppCredential, CredentialMetadata


@runtime_checkable
class ConfigStore(Protocol):
    """String-keyed configuration lookup."""

    def load(self) -> None:
        """Load the configuration. Raises `ConfigurationError` on failure."""

        ...

    def get(self, key: str) -> str:
        """Return the value for a dotted key, or `""` when unset."""

        ...


@runtime_checkable
class CredentialStore(Protocol):
    """Lookup of stored app credentials by service name."""

    def lookup(self, service: str) -> tuple[CredentialMetadata, AppCredential]:
        """Return the credential for `service`. Raises `CredentialError` if absent."""

        ...
