"""The shared secrets board."""

from __future__ import annotations

from secretwall.board.controller import BoardController
from secretwall.board.models import Secret
from secretwall.board.service import SecretService

__all__ = ["BoardController", "Secret", "SecretService"]
