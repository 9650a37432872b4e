"""
Output Parser - Parse and validate the model's classification answer.

Expected shape:
    {"is_security_event": true|false, "location": "<place>"|"null"}
"""
import json
import re
from typing import Any, Optional

from constants import UNKNOWN_LOCATION
from processor.models import ClassificationResult


class ResponseParseError(ValueError):
    """Model output is not JSON or does not match the expected shape."""

    def __init__(self, message: str, raw_output: str = ""):
        super().__init__(message)
        self.raw_output = raw_output


class ClassificationOutputParser:
    """Parse the two-field JSON answer into a ClassificationResult."""

    NULL_LOCATIONS = {"", "null", "none", "unknown", UNKNOWN_LOCATION}

    def parse(self, llm_output: Optional[str]) -> ClassificationResult:
        if not llm_output or not llm_output.strip():
            raise ResponseParseError("Empty response", llm_output or "")

        json_str = self._extract_json(llm_output)
        if not json_str:
            raise ResponseParseError("Could not extract JSON from model output", llm_output)

        try:
            data = json.loads(self._fix_json(json_str))
        except json.JSONDecodeError as e:
            raise ResponseParseError(f"JSON parse error: {e}", llm_output) from e

        if not isinstance(data, dict):
            raise ResponseParseError(
                f"Expected a JSON object, got {type(data).__name__}", llm_output
            )

        return ClassificationResult(
            is_security_event=self._parse_flag(data, llm_output),
            raw_location=self._parse_location(data, llm_output),
        )

    def _extract_json(self, text: str) -> Optional[str]:
        """Extract JSON from text, handling markdown code blocks."""
        code_block = re.search(r"```(?:json)?\s*\n?([\s\S]*?)\n?```", text)
        if code_block:
            text = code_block.group(1)

        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end <= start:
            return None
        return text[start:end + 1]

    def _fix_json(self, json_str: str) -> str:
        """Remove trailing commas before closing brackets."""
        fixed = re.sub(r",\s*}", "}", json_str)
        return re.sub(r",\s*]", "]", fixed)

    def _parse_flag(self, data: dict, raw: str) -> bool:
        if "is_security_event" not in data:
            raise ResponseParseError("Missing required field: is_security_event", raw)
        value: Any = data["is_security_event"]
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        raise ResponseParseError(f"Invalid is_security_event value: {value!r}", raw)

    def _parse_location(self, data: dict, raw: str) -> Optional[str]:
        if "location" not in data:
            raise ResponseParseError("Missing required field: location", raw)
        value = data["location"]
        if value is None:
            return None
        if not isinstance(value, str):
            raise ResponseParseError(f"Invalid location value: {value!r}", raw)
        value = value.strip()
        if value.lower() in self.NULL_LOCATIONS:
            return None
        return value


def parse_classification_response(llm_output: Optional[str]) -> ClassificationResult:
    """Parse model output, raising ResponseParseError on anything malformed."""
    return ClassificationOutputParser().parse(llm_output)
