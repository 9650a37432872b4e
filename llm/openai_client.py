"""
OpenAI Client - chat completions over any OpenAI-compatible endpoint.

API docs: https://platform.openai.com/docs/api-reference/chat
"""
import time
from typing import Optional, List

import httpx
import openai
from openai import OpenAI
from loguru import logger

from .base import LLMClient, LLMError, LLMResponse, Message


class OpenAIClient(LLMClient):
    """
    OpenAI chat-completions client.

    Retries are disabled in the SDK: a classification that does not answer
    within ``timeout`` falls back to keywords instead of waiting.
    """

    API_BASE = "https://api.openai.com/v1"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        timeout: float = 8.0,
        verify_ssl: bool = True,
        base_url: Optional[str] = None,
    ):
        """
        Args:
            api_key: Provider API key
            model: Model name
            timeout: Per-request timeout in seconds
            verify_ssl: Whether to verify SSL certificates (disable for dev if needed)
            base_url: Override for OpenAI-compatible providers
        """
        super().__init__(api_key, model)
        self.timeout = timeout

        http_client = None
        if not verify_ssl:
            http_client = httpx.Client(verify=False, timeout=timeout)
            logger.warning("SSL verification disabled for OpenAI client")

        self._client = OpenAI(
            api_key=api_key,
            base_url=base_url or self.API_BASE,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )

    def chat(
        self,
        messages: List[Message],
        system: Optional[str] = None,
        max_tokens: int = 256,
        temperature: float = 0.0,
    ) -> LLMResponse:
        """Generate response from conversation."""
        api_messages = []
        if system:
            api_messages.append({"role": "system", "content": system})
        for msg in messages:
            api_messages.append({"role": msg.role, "content": msg.content})

        logger.debug(f"OpenAI request: model={self.model}, messages={len(api_messages)}")
        started = time.monotonic()

        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=api_messages,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except openai.APIStatusError as e:
            raise LLMError(f"OpenAI API error {e.status_code}: {e.message}", e.status_code) from e
        except openai.APITimeoutError as e:
            raise LLMError(f"OpenAI request timed out after {self.timeout}s") from e
        except openai.APIError as e:
            raise LLMError(f"OpenAI request failed: {e}") from e

        if not response.choices:
            raise LLMError("OpenAI response contained no choices")

        choice = response.choices[0]
        usage = response.usage
        result = LLMResponse(
            content=choice.message.content or "",
            model=response.model,
            usage={
                "input_tokens": usage.prompt_tokens if usage else 0,
                "output_tokens": usage.completion_tokens if usage else 0,
            },
            stop_reason=choice.finish_reason,
            latency_ms=int((time.monotonic() - started) * 1000),
        )
        self.log_response(result)
        return result
