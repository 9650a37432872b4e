"""
LLM Client Base - Abstract base class for LLM providers.
"""
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, List, Dict

from loguru import logger


class LLMError(Exception):
    """A provider call failed (transport error, timeout or non-2xx status)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class LLMResponse:
    """Standard response from LLM."""
    content: str
    model: str
    usage: Dict[str, int]  # input_tokens, output_tokens
    stop_reason: Optional[str] = None
    latency_ms: Optional[int] = None

    @property
    def total_tokens(self) -> int:
        return self.usage.get("input_tokens", 0) + self.usage.get("output_tokens", 0)

    @property
    def is_valid_json(self) -> bool:
        try:
            json.loads(self.content)
            return True
        except (json.JSONDecodeError, TypeError):
            return False


@dataclass
class Message:
    """Chat message."""
    role: str  # "user", "assistant", "system"
    content: str


class LLMClient(ABC):
    """
    Abstract base class for LLM clients.

    Implementations must raise ``LLMError`` for every provider-side failure
    so callers can handle a single exception type.
    """

    def __init__(self, api_key: str, model: str):
        self.api_key = api_key
        self.model = model

    def generate(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = 256,
        temperature: float = 0.0,
    ) -> LLMResponse:
        """Generate a response from a single user prompt."""
        messages = [Message(role="user", content=prompt)]
        return self.chat(messages, system=system, max_tokens=max_tokens, temperature=temperature)

    @abstractmethod
    def chat(
        self,
        messages: List[Message],
        system: Optional[str] = None,
        max_tokens: int = 256,
        temperature: float = 0.0,
    ) -> LLMResponse:
        """
        Generate a response from a conversation.

        Args:
            messages: List of conversation messages
            system: Optional system prompt
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature (0.0 = deterministic)

        Returns:
            LLMResponse with generated content

        Raises:
            LLMError: On any provider failure
        """

    def log_response(self, response: LLMResponse) -> None:
        logger.debug(
            f"LLM response: model={response.model}, tokens={response.total_tokens}, "
            f"latency={response.latency_ms}ms, valid_json={response.is_valid_json}"
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model={self.model})"
