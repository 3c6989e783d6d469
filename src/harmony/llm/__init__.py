"""
LLM integration module for Daily Harmony.

Provides the daily fortune client and prompt template management.
"""

from harmony.llm.fortune_client import FortuneClient
from harmony.llm.prompts import PromptLoader

__all__ = ["FortuneClient", "PromptLoader"]
