"""Tests for the secrets board service."""

from __future__ import annotations

import pytest

from secretwall.board.models import Secret
from secretwall.board.service import SecretService
from secretwall.exceptions import InvalidSecretError


class TestSecretService:
    """Tests for posting and listing secrets."""

    async def test_post_and_list(self, secret_service: SecretService) -> None:
        """Test a posted secret shows up in the listing."""
        secret = await secret_service.post_secret("I like pineapple on pizza")

        assert isinstance(secret, Secret)
        listed = await secret_service.list_secrets()
        assert [s.text for s in listed] == ["I like pineapple on pizza"]

    async def test_text_stored_verbatim(self, secret_service: SecretService) -> None:
        """Test markup and surrounding whitespace are kept as typed."""
        text = "  <b>bold</b> & stuff  "
        secret = await secret_service.post_secret(text)

        assert secret.text == text

    async def test_empty_secret_rejected(self, secret_service: SecretService) -> None:
        """Test the empty string is rejected."""
        with pytest.raises(InvalidSecretError):
            await secret_service.post_secret("")

        assert await secret_service.list_secrets() == []

    @pytest.mark.parametrize("text", ["   ", "\n\t"])
    async def test_whitespace_secret_stored(self, secret_service: SecretService, text: str) -> None:
        """Test whitespace-only text is stored like any other text."""
        secret = await secret_service.post_secret(text)

        assert secret.text == text
        assert [s.text for s in await secret_service.list_secrets()] == [text]

    async def test_secret_has_no_author(self, secret_service: SecretService) -> None:
        """Test secrets carry no reference to a user."""
        secret = await secret_service.post_secret("anonymous")

        assert not hasattr(secret, "user_id")
