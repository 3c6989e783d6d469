"""
Daily fortune client.

Generates the daily fortune text from the user's birth data through the
Anthropic Messages API. Credential and quota failures surface as
AuthenticationError / RateLimitError so the caller can show a fallback.
"""

from __future__ import annotations

import logging
import os
from datetime import date, datetime
from typing import Any

import anthropic
from anthropic import Anthropic
from dotenv import load_dotenv

from harmony.calendar.models import as_date
from harmony.core.exceptions import AdapterError, AuthenticationError, RateLimitError
from harmony.llm.prompts import PromptLoader

logger = logging.getLogger(__name__)

UNKNOWN_BIRTH_TIME = "모름"
EMPTY_RESPONSE = "AI가 응답을 생성했지만 내용을 읽을 수 없습니다."


class FortuneClient:
    """
    Fortune-text client.

    Usage:
        client = FortuneClient()
        text = await client.daily_fortune("1990-05-01", "07:30", date.today())
    """

    DEFAULT_MODEL = "claude-sonnet-4-20250514"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        prompts: PromptLoader | None = None,
        max_tokens: int = 1024,
    ):
        """
        Initialize client with API key from argument or environment.

        Raises:
            AuthenticationError: If ANTHROPIC_API_KEY is not available
        """
        load_dotenv()
        api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            raise AuthenticationError(
                "ANTHROPIC_API_KEY not found. Set it in the environment or .env file.",
                service="anthropic",
            )
        self.client = Anthropic(api_key=api_key)
        self.model = model or self.DEFAULT_MODEL
        self.prompts = prompts or PromptLoader()
        self.max_tokens = max_tokens
        logger.debug("Fortune client initialized (model=%s)", self.model)

    async def chat(
        self,
        messages: list[dict[str, str]],
        system: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.8,
    ) -> str:
        """
        Send messages and return the concatenated text response.

        Raises:
            AuthenticationError: API key rejected
            RateLimitError: Rate limit or quota exceeded
            AdapterError: Any other API failure
        """
        kwargs: dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "messages": messages,
            "temperature": temperature,
        }
        if system:
            kwargs["system"] = system

        logger.debug("Sending chat request to %s with %d messages", self.model, len(messages))

        try:
            response = self.client.messages.create(**kwargs)
        except (anthropic.AuthenticationError, anthropic.PermissionDeniedError) as e:
            logger.error("Fortune request rejected: %s", e)
            raise AuthenticationError(str(e), service="anthropic") from e
        except anthropic.RateLimitError as e:
            logger.error("Fortune request rate limited: %s", e)
            retry_after = e.response.headers.get("retry-after") if e.response is not None else None
            raise RateLimitError(
                str(e),
                adapter="anthropic",
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
            ) from e
        except anthropic.APIStatusError as e:
            logger.error("Fortune request failed: %s", e)
            raise AdapterError(str(e), adapter="anthropic", status_code=e.status_code) from e
        except anthropic.APIError as e:
            logger.error("Fortune request failed: %s", e)
            raise AdapterError(str(e), adapter="anthropic") from e

        text = "".join(
            getattr(block, "text", "") for block in response.content or []
        )
        logger.debug("Received response: %d chars", len(text))
        return text

    async def daily_fortune(
        self,
        birth_date: date | str,
        birth_time: str | None,
        target_date: date | datetime | str,
    ) -> str:
        """
        Daily fortune in Korean: 총운 / 금전운 / 연애운 / 건강운 plus lucky colour and number.

        Args:
            birth_date: Birth date
            birth_time: Birth time (HH:MM) or None when unknown
            target_date: Date the fortune is for

        Returns:
            Fortune text (fallback sentence when the response is empty)
        """
        prompt = self.prompts.render(
            "fortune",
            birth_date=as_date(birth_date).isoformat(),
            birth_time=birth_time or UNKNOWN_BIRTH_TIME,
            target_date=as_date(target_date).isoformat(),
        )
        result = await self.chat(
            messages=[{"role": "user", "content": prompt}],
            system=self.prompts.load("fortune_system"),
            max_tokens=self.max_tokens,
        )
        result = result.strip()
        if not result:
            logger.warning("Fortune response was empty")
            return EMPTY_RESPONSE
        return result
