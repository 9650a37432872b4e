"""
Prompts Module - prompt templates for the external classification model.

Usage:
    from prompts import PromptLoader, get_prompt

    prompt = get_prompt("classification", text="...")

Prompt Files:
- classification.md: security-event and location questions, JSON-only answer
"""

from ._loader import PromptLoader, get_prompt, list_prompts

__all__ = [
    "PromptLoader",
    "get_prompt",
    "list_prompts",
]
