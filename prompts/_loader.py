"""
Prompt Loader - Load and format prompts from markdown files.

Prompts live next to this module as ``<name>.md`` files with ``{variable}``
placeholders. Literal braces (JSON examples) are written doubled: ``{{ }}``.
"""

import re
from pathlib import Path
from typing import Optional, Dict, Any

from loguru import logger


class PromptLoader:
    """
    Load and format prompts from markdown files.

    Example:
        loader = PromptLoader()
        prompt = loader.format("classification", text="...")
    """

    _instance: Optional["PromptLoader"] = None

    def __new__(cls, prompts_dir: Optional[Path] = None) -> "PromptLoader":
        """One shared loader for the default directory; custom dirs get their own."""
        if prompts_dir is not None:
            return super().__new__(cls)
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, prompts_dir: Optional[Path] = None):
        if getattr(self, "_initialized", False):
            return

        self._prompts_dir = Path(prompts_dir) if prompts_dir else Path(__file__).parent
        self._cache: Dict[str, str] = {}
        self._initialized = True

        logger.debug(f"PromptLoader initialized with prompts dir: {self._prompts_dir}")

    @property
    def prompts_dir(self) -> Path:
        return self._prompts_dir

    def get(self, prompt_name: str) -> str:
        """
        Raw template by name (without the .md extension).

        Raises:
            FileNotFoundError: If the prompt file doesn't exist
        """
        if prompt_name in self._cache:
            return self._cache[prompt_name]

        prompt_path = self._prompts_dir / f"{prompt_name}.md"
        if not prompt_path.exists():
            raise FileNotFoundError(
                f"Prompt file not found: {prompt_path}\n"
                f"Available prompts: {self.list_prompts()}"
            )

        content = prompt_path.read_text(encoding="utf-8")
        self._cache[prompt_name] = content

        logger.debug(f"Loaded prompt: {prompt_name} ({len(content)} chars)")
        return content

    def format(self, prompt_name: str, **kwargs: Any) -> str:
        """
        Template with variables substituted.

        Raises:
            ValueError: If a placeholder has no matching keyword argument
        """
        template = self.get(prompt_name)

        try:
            return template.format(**kwargs)
        except KeyError as e:
            logger.error(f"Missing variable in prompt '{prompt_name}': {e}")
            raise ValueError(
                f"Missing required variable {e} for prompt '{prompt_name}'"
            ) from e

    def list_prompts(self) -> list[str]:
        return sorted(
            f.stem for f in self._prompts_dir.glob("*.md")
            if f.stem != "README"
        )

    def reload(self, prompt_name: Optional[str] = None) -> None:
        """Drop cached templates so the next read hits the disk."""
        if prompt_name:
            self._cache.pop(prompt_name, None)
        else:
            self._cache.clear()

    def get_variables(self, prompt_name: str) -> list[str]:
        """Placeholder names in a template, escaped braces excluded."""
        template = self.get(prompt_name)
        unescaped = template.replace("{{", "").replace("}}", "")
        matches = re.findall(r"\{([a-zA-Z_][a-zA-Z0-9_]*)\}", unescaped)
        return list(dict.fromkeys(matches))

    def validate(self, prompt_name: str, **kwargs: Any) -> tuple[bool, list[str]]:
        """Check that every placeholder is provided; returns (ok, missing)."""
        missing = set(self.get_variables(prompt_name)) - set(kwargs.keys())
        return len(missing) == 0, sorted(missing)


def get_prompt(prompt_name: str, **kwargs: Any) -> str:
    """Get a prompt, formatted when variables are given."""
    loader = PromptLoader()
    if kwargs:
        return loader.format(prompt_name, **kwargs)
    return loader.get(prompt_name)


def list_prompts() -> list[str]:
    return PromptLoader().list_prompts()
