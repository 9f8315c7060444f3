"""In-memory stand-ins for the configuration and credential stores."""

from datetime import datetime
from pathlib import Path

from core.domain.models import CredentialMetadata
from core.errors import CredentialError

FIXED_NOW = datetime(2023, 9, 14, 10, 15, 30, 987654)
TIMESTAMP = "2023-09-14T10:15:30"


class FakeConfigStore:
    def __init__(self, values=None, fail=None):
        self.values = values or {}
        self.fail = fail
        self.loads = 0

    def load(self):
        self.loads += 1
        if self.fail is not None:
            raise self.fail

    def get(self, key):
        return self.values.get(key, "")


class FakeCredentialStore:
    def __init__(self, credentials=None):
        self.credentials = credentials or {}
        self.lookups = []

    def lookup(self, service):
        self.lookups.append(service)
        if service not in self.credentials:
            raise CredentialError(f"no credential stored for service {service!r}")
        return CredentialMetadata(service=service, source=Path("memory")), self.credentials[service]
