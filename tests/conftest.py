"""
Shared fixtures: fake LLM clients and feed items. No test touches the network.
"""
import json
import threading
from datetime import datetime, timezone
from typing import Callable, List, Optional, Union

import pytest

from config import settings
from llm import LLMClient, LLMError, LLMResponse, Message
from processor.models import FeedItem


T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class FakeLLMClient(LLMClient):
    """
    Returns canned answers. ``answer`` is either a fixed string, an
    exception to raise, or a callable taking the prompt.
    """

    def __init__(self, answer: Union[str, Exception, Callable[[str], str]]):
        super().__init__(api_key="test-key", model="fake-model")
        self.answer = answer
        self.prompts: List[str] = []
        self.temperatures: List[float] = []
        self._lock = threading.Lock()

    def chat(
        self,
        messages: List[Message],
        system: Optional[str] = None,
        max_tokens: int = 256,
        temperature: float = 0.0,
    ) -> LLMResponse:
        prompt = messages[-1].content
        with self._lock:
            self.prompts.append(prompt)
            self.temperatures.append(temperature)

        answer = self.answer
        if isinstance(answer, Exception):
            raise answer
        if callable(answer):
            answer = answer(prompt)
        return LLMResponse(content=answer, model=self.model, usage={"input_tokens": 10, "output_tokens": 5})


def model_answer(is_security_event, location) -> str:
    return json.dumps({"is_security_event": is_security_event, "location": location}, ensure_ascii=False)


def make_item(title: str, description: str = "", index: int = 1) -> FeedItem:
    return FeedItem(
        title=title,
        description=description,
        link=f"https://www.example.com/news/{index}",
        published_at=T0,
        guid=str(index),
    )


@pytest.fixture(autouse=True)
def no_ambient_credentials(monkeypatch, tmp_path):
    """Keep real API keys from the environment out of every test."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "")
    monkeypatch.setattr(settings, "API_KEY_FILE", tmp_path / "missing_key")


@pytest.fixture
def nahariya_item() -> FeedItem:
    return make_item(
        "אזעקה בנהריה: חשד לחדירת כלי טיס עוין",
        "אזעקות נשמעו בנהריה ובסביבתה בעקבות חשד לחדירת כלי טיס עוין.",
    )


@pytest.fixture
def coalition_item() -> FeedItem:
    return make_item(
        "המפלגות הגדולות חתמו על הסכם קואליציוני",
        "לאחר שבועות של משא ומתן, המפלגות הגדולות הגיעו להסכם קואליציוני.",
        index=4,
    )


@pytest.fixture
def transport_error() -> LLMError:
    return LLMError("OpenAI API error 503: unavailable", status_code=503)
