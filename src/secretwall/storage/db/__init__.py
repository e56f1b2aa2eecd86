"""Database storage backend for secretwall.

This module provides SQLAlchemy-based persistent storage.
"""

from __future__ import annotations

from secretwall.storage.db.models import SecretModel, SessionModel, UserModel
from secretwall.storage.db.setup import DatabaseManager, get_database_url
from secretwall.storage.db.storage import DatabaseStorage

__all__ = [
    "DatabaseManager",
    "DatabaseStorage",
    "SecretModel",
    "SessionModel",
    "UserModel",
    "get_database_url",
]
