"""Command line extensions for secretwall."""

from __future__ import annotations

from secretwall.cli.database import SecretWallCLIPlugin, query_group

__all__ = ["SecretWallCLIPlugin", "query_group"]
