import pytest

from prompts import PromptLoader, get_prompt, list_prompts


def test_classification_prompt_is_bundled():
    assert "classification" in list_prompts()


def test_classification_prompt_formats_text():
    prompt = get_prompt("classification", text="אזעקה בנהריה {not a placeholder}")

    assert "אזעקה בנהריה {not a placeholder}" in prompt
    assert '"is_security_event"' in prompt
    assert '"location"' in prompt
    assert "null" in prompt


def test_classification_prompt_variables():
    loader = PromptLoader()

    assert loader.get_variables("classification") == ["text"]
    assert loader.validate("classification", text="x") == (True, [])
    assert loader.validate("classification") == (False, ["text"])


def test_missing_variable_raises_value_error():
    with pytest.raises(ValueError):
        PromptLoader().format("classification")


def test_custom_directory(tmp_path):
    (tmp_path / "greeting.md").write_text("שלום {name}", encoding="utf-8")
    loader = PromptLoader(tmp_path)

    assert loader.list_prompts() == ["greeting"]
    assert loader.format("greeting", name="עולם") == "שלום עולם"
    with pytest.raises(FileNotFoundError):
        loader.get("missing")
