import pytest

from processor.classifier import ResponseParseError, parse_classification_response


def test_plain_json():
    result = parse_classification_response('{"is_security_event": true, "location": "נהריה"}')

    assert result.is_security_event is True
    assert result.raw_location == "נהריה"


@pytest.mark.parametrize("location", ["null", "NULL", "", None, "לא ידוע"])
def test_null_location_means_unknown(location):
    raw = '{"is_security_event": false, "location": %s}' % ("null" if location is None else f'"{location}"')
    result = parse_classification_response(raw)

    assert result.raw_location is None
    assert result.location == "לא ידוע"


def test_code_fence_and_trailing_comma():
    raw = 'Here you go:\n```json\n{"is_security_event": "true", "location": "Ashdod",}\n```'
    result = parse_classification_response(raw)

    assert result.is_security_event is True
    assert result.raw_location == "Ashdod"


@pytest.mark.parametrize("raw", [
    "",
    "   ",
    "I think this is a security event in Haifa.",
    "{not json}",
    "[true, \"Haifa\"]",
    '{"location": "Haifa"}',
    '{"is_security_event": true}',
    '{"is_security_event": "maybe", "location": "Haifa"}',
    '{"is_security_event": 1, "location": "Haifa"}',
    '{"is_security_event": true, "location": ["Haifa"]}',
])
def test_malformed_answers_raise(raw):
    with pytest.raises(ResponseParseError):
        parse_classification_response(raw)
