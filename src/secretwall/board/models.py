"""Bulletin board models for secretwall."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass
class Secret:
    """An anonymous post on the shared board.

    Secrets are not linked to the user who posted them.

    Attributes:
        text: Free-form secret text.
        id: Unique secret identifier.
        created_at: Creation timestamp.
    """

    text: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
