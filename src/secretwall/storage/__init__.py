"""Storage backends for secretwall."""

from __future__ import annotations

from secretwall.storage.base import SecretStore, SessionStore, StorageProtocol, UserStore
from secretwall.storage.memory import InMemoryStorage

__all__ = [
    "InMemoryStorage",
    "SecretStore",
    "SessionStore",
    "StorageProtocol",
    "UserStore",
]
