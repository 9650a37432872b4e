import asyncio
import json

import pytest

from constants import ClassificationStrategy, UNKNOWN_LOCATION
from llm import CredentialChain, StaticCredentialProvider
from processor.classifier import KeywordClassifier, ModelClassifier
from tests.conftest import FakeLLMClient, make_item, model_answer


def no_credentials() -> CredentialChain:
    return CredentialChain([])


def test_model_verdict_is_used(nahariya_item):
    client = FakeLLMClient(model_answer(True, "נהריה"))
    alert = ModelClassifier(client=client).classify(nahariya_item, "נהריה")

    assert alert.is_security_event
    assert alert.is_relevant
    assert alert.location == "נהריה"
    assert alert.classified_by is ClassificationStrategy.MODEL


def test_prompt_carries_item_text_and_zero_temperature(nahariya_item):
    client = FakeLLMClient(model_answer(True, "נהריה"))
    ModelClassifier(client=client).classify(nahariya_item, "נהריה")

    assert nahariya_item.title in client.prompts[0]
    assert nahariya_item.description in client.prompts[0]
    assert '"is_security_event"' in client.prompts[0]
    assert client.temperatures == [0.0]


def test_model_location_is_passed_through_unchanged(nahariya_item):
    client = FakeLLMClient(model_answer(True, "מצפה רמון"))
    alert = ModelClassifier(client=client).classify(nahariya_item, "מצפה רמון")

    assert alert.location == "מצפה רמון"
    assert alert.is_relevant


def test_null_location_maps_to_unknown_and_is_not_relevant(nahariya_item):
    client = FakeLLMClient(model_answer(True, "null"))
    alert = ModelClassifier(client=client).classify(nahariya_item, "נהריה")

    assert alert.location == UNKNOWN_LOCATION
    assert alert.is_security_event
    assert not alert.is_relevant


def test_relevance_requires_security_event(nahariya_item):
    client = FakeLLMClient(model_answer(False, "נהריה"))
    alert = ModelClassifier(client=client).classify(nahariya_item, "נהריה")

    assert not alert.is_security_event
    assert not alert.is_relevant


def test_missing_credentials_fall_back_to_keywords(nahariya_item):
    keyword_alert = KeywordClassifier().create_alert(nahariya_item, "נהריה")
    alert = ModelClassifier(credentials=no_credentials()).classify(nahariya_item, "נהריה")

    assert alert.classified_by is ClassificationStrategy.KEYWORD
    assert alert.is_security_event == keyword_alert.is_security_event
    assert alert.location == keyword_alert.location
    assert alert.is_relevant == keyword_alert.is_relevant


def test_transport_error_falls_back_to_keywords(nahariya_item, transport_error):
    keyword_alert = KeywordClassifier().create_alert(nahariya_item, "אילת")
    alert = ModelClassifier(client=FakeLLMClient(transport_error)).classify(nahariya_item, "אילת")

    assert alert.classified_by is ClassificationStrategy.KEYWORD
    assert alert.is_security_event == keyword_alert.is_security_event
    assert alert.location == keyword_alert.location
    assert alert.is_relevant == keyword_alert.is_relevant


@pytest.mark.parametrize("answer", ["not json at all", '{"location": "נהריה"}', ""])
def test_malformed_answer_falls_back_to_keywords(nahariya_item, answer):
    alert = ModelClassifier(client=FakeLLMClient(answer)).classify(nahariya_item, "נהריה")

    assert alert.classified_by is ClassificationStrategy.KEYWORD
    assert alert.is_security_event
    assert alert.location == "נהריה"


def test_client_built_from_credential_chain(monkeypatch, nahariya_item):
    fake = FakeLLMClient(model_answer(True, "נהריה"))
    seen_keys = []

    def fake_get_client(api_key=None, **kwargs):
        seen_keys.append(api_key)
        return fake

    monkeypatch.setattr("processor.classifier.model_classifier.get_client", fake_get_client)
    chain = CredentialChain([StaticCredentialProvider(None), StaticCredentialProvider("sk-second")])

    alert = ModelClassifier(credentials=chain).classify(nahariya_item, "נהריה")

    assert seen_keys == ["sk-second"]
    assert alert.classified_by is ClassificationStrategy.MODEL


def _answer_by_title(prompt: str) -> str:
    if "קואליציוני" in prompt:
        return model_answer(False, "null")
    if "נהריה" in prompt:
        return model_answer(True, "נהריה")
    if "ירושלים" in prompt:
        return "broken"
    return model_answer(True, "ישראל")


def test_batch_filters_and_isolates_failures(nahariya_item, coalition_item):
    jerusalem = make_item("אזעקות נשמעות בירושלים", "תושבים מתבקשים להיכנס למרחבים מוגנים.", index=5)
    national = make_item("Rocket fire reported", "Launches detected toward the country", index=6)
    client = FakeLLMClient(_answer_by_title)

    alerts = asyncio.run(
        ModelClassifier(client=client, max_concurrency=2).classify_batch(
            [nahariya_item, coalition_item, jerusalem, national], "חיפה"
        )
    )

    assert [a.title for a in alerts] == [nahariya_item.title, jerusalem.title, national.title]
    assert all(a.is_security_event for a in alerts)
    by_title = {a.title: a for a in alerts}
    assert by_title[nahariya_item.title].classified_by is ClassificationStrategy.MODEL
    assert by_title[jerusalem.title].classified_by is ClassificationStrategy.KEYWORD
    assert by_title[national.title].is_relevant
    assert not by_title[nahariya_item.title].is_relevant
    assert len(client.prompts) == 4


def test_batch_without_credentials_uses_keywords(nahariya_item, coalition_item):
    alerts = asyncio.run(
        ModelClassifier(credentials=no_credentials()).classify_batch([nahariya_item, coalition_item], "נהריה")
    )

    assert len(alerts) == 1
    assert alerts[0].classified_by is ClassificationStrategy.KEYWORD
    assert alerts[0].is_relevant


def test_batch_raises_when_client_cannot_be_built(monkeypatch, nahariya_item):
    def broken_get_client(**kwargs):
        raise ValueError("Unknown LLM provider: nope")

    monkeypatch.setattr("processor.classifier.model_classifier.get_client", broken_get_client)
    classifier = ModelClassifier(credentials=CredentialChain([StaticCredentialProvider("sk-test")]))

    with pytest.raises(ValueError):
        asyncio.run(classifier.classify_batch([nahariya_item], "נהריה"))
