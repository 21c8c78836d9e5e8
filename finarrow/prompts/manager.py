"""Versioned prompt templates for insight generation.

Templates live in ``finarrow/prompts/templates/{prompt_name}/v{N}.txt`` and
use ``str.format`` placeholders.

Usage:
    manager = PromptManager()
    system = manager.get("insights_system")
    user = manager.render("insights_user", mrr="$55,000", ...)
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from finarrow.logging_config import get_logger

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


class PromptManager:
    """Load prompt templates by name and version.

    Examples:
        >>> manager = PromptManager()
        >>> manager.list_versions("insights_system")
        ['v1']
    """

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = base_dir or TEMPLATES_DIR
        if not self.base_dir.is_dir():
            raise FileNotFoundError(f"Prompt templates directory not found: {self.base_dir}")

    @lru_cache(maxsize=16)
    def get(self, prompt_name: str, version: str = "latest") -> str:
        """Raw template text.

        Raises:
            FileNotFoundError: unknown prompt or version.
        """
        if version == "latest":
            version = self.latest_version(prompt_name)
        path = self.base_dir / prompt_name / f"{version}.txt"
        if not path.is_file():
            raise FileNotFoundError(f"Prompt '{prompt_name}' version '{version}' not found at {path}")
        text = path.read_text(encoding="utf-8").strip()
        logger.debug("prompt_loaded", prompt=prompt_name, version=version, chars=len(text))
        return text

    def render(self, prompt_name: str, version: str = "latest", **values: object) -> str:
        """Template with placeholders filled from *values*.

        Raises:
            KeyError: a placeholder has no value.
        """
        return self.get(prompt_name, version).format(**values)

    def list_versions(self, prompt_name: str) -> list[str]:
        prompt_dir = self.base_dir / prompt_name
        if not prompt_dir.is_dir():
            return []
        return sorted((p.stem for p in prompt_dir.glob("v*.txt")), key=_version_number)

    def latest_version(self, prompt_name: str) -> str:
        versions = self.list_versions(prompt_name)
        if not versions:
            raise FileNotFoundError(f"No versions found for prompt '{prompt_name}' in {self.base_dir}")
        return versions[-1]


def _version_number(tag: str) -> int:
    """``"v10"`` → 10; tags without digits sort first."""
    digits = "".join(ch for ch in tag if ch.isdigit())
    return int(digits) if digits else 0
