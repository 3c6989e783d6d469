"""
Prompt template loader and renderer.

Loads Markdown prompt templates shipped inside the package
and supports {{variable}} substitution.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).parent / "templates"

_VARIABLE = re.compile(r"\{\{(\w+)\}\}")


class PromptLoader:
    """
    Prompt template loader with caching and variable substitution.

    Usage:
        loader = PromptLoader()
        system_prompt = loader.load("fortune_system")
        prompt = loader.render("fortune", birth_date="1990-05-01", ...)
    """

    def __init__(self, prompts_dir: Path | None = None):
        self.prompts_dir = prompts_dir or PROMPTS_DIR
        self._cache: dict[str, str] = {}

    def load(self, name: str) -> str:
        """
        Load prompt template by name (with caching).

        Raises:
            FileNotFoundError: If template file doesn't exist
        """
        if name in self._cache:
            return self._cache[name]

        file_path = self.prompts_dir / f"{name}.md"
        if not file_path.exists():
            raise FileNotFoundError(f"Prompt template not found: {file_path}")

        content = file_path.read_text(encoding="utf-8").strip()
        self._cache[name] = content
        logger.debug("Loaded prompt '%s': %d chars", name, len(content))
        return content

    def render(self, name: str, **kwargs: Any) -> str:
        """
        Load template and substitute {{variable}} placeholders.

        Unknown placeholders are left as-is and logged.
        """
        template = self.load(name)

        def replacer(match: re.Match[str]) -> str:
            var_name = match.group(1)
            if var_name in kwargs:
                return str(kwargs[var_name])
            logger.warning("Variable '%s' not provided for template '%s'", var_name, name)
            return match.group(0)

        return _VARIABLE.sub(replacer, template)

    def list_templates(self) -> list[str]:
        """Available template names (without .md extension)."""
        if not self.prompts_dir.exists():
            return []
        return sorted(f.stem for f in self.prompts_dir.glob("*.md") if f.is_file())

    def clear_cache(self) -> None:
        """Clear the template cache."""
        self._cache.clear()
