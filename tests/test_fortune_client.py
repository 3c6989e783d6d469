"""
Tests for the fortune client and prompt loader.

Uses mocked Anthropic client to avoid actual API calls.
"""

from __future__ import annotations

import os
from datetime import date
from unittest.mock import MagicMock, patch

import anthropic
import httpx
import pytest

from harmony.core.exceptions import AdapterError, AuthenticationError, RateLimitError

API_URL = "https://api.anthropic.com/v1/messages"


def _api_response(status_code: int, headers: dict[str, str] | None = None) -> httpx.Response:
    return httpx.Response(status_code, headers=headers, request=httpx.Request("POST", API_URL))


class TestFortuneClientInit:
    """Tests for FortuneClient initialization."""

    def test_init_without_api_key_raises_error(self):
        """Should raise AuthenticationError when API key is missing."""
        with patch.dict(os.environ, {}, clear=True):
            with patch("harmony.llm.fortune_client.load_dotenv"):
                from harmony.llm.fortune_client import FortuneClient

                with pytest.raises(AuthenticationError) as exc_info:
                    FortuneClient()

                assert "ANTHROPIC_API_KEY" in str(exc_info.value)
                assert exc_info.value.service == "anthropic"

    def test_init_with_api_key_succeeds(self):
        """Should initialize successfully with valid API key."""
        with patch.dict(os.environ, {"ANTHROPIC_API_KEY": "test-key"}):
            with patch("harmony.llm.fortune_client.Anthropic") as mock_anthropic:
                from harmony.llm.fortune_client import FortuneClient

                client = FortuneClient()

                assert client.client is not None
                assert client.model == FortuneClient.DEFAULT_MODEL
                mock_anthropic.assert_called_once_with(api_key="test-key")

    def test_explicit_key_and_model(self):
        with patch("harmony.llm.fortune_client.Anthropic") as mock_anthropic:
            from harmony.llm.fortune_client import FortuneClient

            client = FortuneClient(api_key="explicit", model="claude-test")

            assert client.model == "claude-test"
            mock_anthropic.assert_called_once_with(api_key="explicit")


    def test_max_tokens_default_and_override(self):
        with patch("harmony.llm.fortune_client.Anthropic"):
            from harmony.llm.fortune_client import FortuneClient

            assert FortuneClient(api_key="k").max_tokens == 1024
            assert FortuneClient(api_key="k", max_tokens=300).max_tokens == 300


class TestFortuneClientChat:
    """Tests for chat and error mapping."""

    @pytest.fixture
    def mock_client(self):
        """Create a mocked FortuneClient."""
        with patch.dict(os.environ, {"ANTHROPIC_API_KEY": "test-key"}):
            with patch("harmony.llm.fortune_client.Anthropic") as mock_anthropic:
                mock_response = MagicMock()
                mock_response.content = [MagicMock(text="오늘은 "), MagicMock(text="좋은 날")]
                mock_anthropic.return_value.messages.create.return_value = mock_response

                from harmony.llm.fortune_client import FortuneClient
                client = FortuneClient()
                client._mock_anthropic = mock_anthropic
                yield client

    def _create(self, client) -> MagicMock:
        return client._mock_anthropic.return_value.messages.create

    @pytest.mark.asyncio
    async def test_chat_joins_text_blocks(self, mock_client):
        result = await mock_client.chat([{"role": "user", "content": "Hello"}])
        assert result == "오늘은 좋은 날"

    @pytest.mark.asyncio
    async def test_chat_with_system_prompt(self, mock_client):
        await mock_client.chat([{"role": "user", "content": "Hello"}], system="You are helpful")

        call_kwargs = self._create(mock_client).call_args.kwargs
        assert call_kwargs["system"] == "You are helpful"
        assert call_kwargs["model"] == mock_client.DEFAULT_MODEL

    @pytest.mark.asyncio
    async def test_chat_without_system_prompt(self, mock_client):
        await mock_client.chat([{"role": "user", "content": "Hello"}])
        assert "system" not in self._create(mock_client).call_args.kwargs

    @pytest.mark.asyncio
    async def test_rate_limit_mapped(self, mock_client):
        self._create(mock_client).side_effect = anthropic.RateLimitError(
            "quota exceeded",
            response=_api_response(429, {"retry-after": "30"}),
            body=None,
        )

        with pytest.raises(RateLimitError) as exc_info:
            await mock_client.chat([{"role": "user", "content": "Hello"}])

        assert exc_info.value.retry_after == 30
        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_rejected_key_mapped(self, mock_client):
        self._create(mock_client).side_effect = anthropic.AuthenticationError(
            "invalid x-api-key", response=_api_response(401), body=None,
        )

        with pytest.raises(AuthenticationError):
            await mock_client.chat([{"role": "user", "content": "Hello"}])

    @pytest.mark.asyncio
    async def test_server_error_mapped(self, mock_client):
        self._create(mock_client).side_effect = anthropic.InternalServerError(
            "overloaded", response=_api_response(500), body=None,
        )

        with pytest.raises(AdapterError) as exc_info:
            await mock_client.chat([{"role": "user", "content": "Hello"}])

        assert exc_info.value.status_code == 500
        assert not isinstance(exc_info.value, RateLimitError)

    @pytest.mark.asyncio
    async def test_connection_error_mapped(self, mock_client):
        self._create(mock_client).side_effect = anthropic.APIConnectionError(
            request=httpx.Request("POST", API_URL),
        )

        with pytest.raises(AdapterError) as exc_info:
            await mock_client.chat([{"role": "user", "content": "Hello"}])

        assert exc_info.value.status_code is None


class TestDailyFortune:
    @pytest.fixture
    def mock_client(self):
        with patch("harmony.llm.fortune_client.Anthropic") as mock_anthropic:
            from harmony.llm.fortune_client import FortuneClient
            client = FortuneClient(api_key="test-key", max_tokens=600)
            client._mock_anthropic = mock_anthropic
            yield client

    def _reply(self, client, text: str) -> MagicMock:
        mock_response = MagicMock()
        mock_response.content = [MagicMock(text=text)]
        create = client._mock_anthropic.return_value.messages.create
        create.return_value = mock_response
        return create

    @pytest.mark.asyncio
    async def test_prompt_contains_birth_data(self, mock_client):
        create = self._reply(mock_client, "  총운: 맑음  ")

        result = await mock_client.daily_fortune("1990-05-17", "07:30", date(2024, 3, 5))

        assert result == "총운: 맑음"
        call_kwargs = create.call_args.kwargs
        prompt = call_kwargs["messages"][0]["content"]
        assert "1990-05-17" in prompt
        assert "07:30" in prompt
        assert "2024-03-05" in prompt
        assert "{{" not in prompt
        assert call_kwargs["system"]
        assert call_kwargs["max_tokens"] == 600

    @pytest.mark.asyncio
    async def test_unknown_birth_time(self, mock_client):
        create = self._reply(mock_client, "총운")

        await mock_client.daily_fortune(date(1990, 5, 17), None, "2024-03-05")

        assert "모름" in create.call_args.kwargs["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_empty_reply_gives_fallback(self, mock_client):
        from harmony.llm.fortune_client import EMPTY_RESPONSE

        self._reply(mock_client, "   ")
        assert await mock_client.daily_fortune("1990-05-17", None, "2024-03-05") == EMPTY_RESPONSE


class TestPromptLoader:
    """Tests for prompt template loading."""

    @pytest.fixture
    def prompts_dir(self, tmp_path):
        """Create a temporary prompts directory with test templates."""
        prompts = tmp_path / "prompts"
        prompts.mkdir()

        (prompts / "system.md").write_text("You are a test assistant.", encoding="utf-8")
        (prompts / "multi.md").write_text("{{var1}} and {{var2}}", encoding="utf-8")

        return prompts

    def test_load_template_caches(self, prompts_dir):
        """Should cache loaded templates."""
        from harmony.llm.prompts import PromptLoader

        loader = PromptLoader(prompts_dir)
        assert loader.load("system") == "You are a test assistant."

        (prompts_dir / "system.md").write_text("Modified content", encoding="utf-8")
        assert loader.load("system") == "You are a test assistant."

        loader.clear_cache()
        assert loader.load("system") == "Modified content"

    def test_load_nonexistent_raises_error(self, prompts_dir):
        from harmony.llm.prompts import PromptLoader

        with pytest.raises(FileNotFoundError) as exc_info:
            PromptLoader(prompts_dir).load("nonexistent")

        assert "Prompt template not found" in str(exc_info.value)

    def test_render_missing_variable_preserved(self, prompts_dir):
        """Should preserve unsubstituted variables."""
        from harmony.llm.prompts import PromptLoader

        loader = PromptLoader(prompts_dir)
        assert loader.render("multi", var1="first", var2="second") == "first and second"
        assert loader.render("multi", var1="first") == "first and {{var2}}"

    def test_list_templates(self, prompts_dir):
        from harmony.llm.prompts import PromptLoader

        assert PromptLoader(prompts_dir).list_templates() == ["multi", "system"]

    def test_packaged_templates(self):
        """Should ship the fortune templates inside the package."""
        from harmony.llm.prompts import PromptLoader

        loader = PromptLoader()
        assert {"fortune", "fortune_system"} <= set(loader.list_templates())
        content = loader.load("fortune")
        assert "{{birth_date}}" in content
        assert "{{target_date}}" in content
