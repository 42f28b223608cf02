"""
ResponseParser - Parse JSON from LLM responses with truncation recovery.

Models asked for a JSON array sometimes wrap it in markdown fences,
in an object, or cut it off at the token limit.
"""
import json
import logging
import re
from typing import Any, Dict, List, Optional

from teachplan.core.exceptions import ExtractionError

logger = logging.getLogger(__name__)

# Wrapper keys seen around the record array
_WRAPPER_KEYS = ("standards", "achievementStandards", "items", "records")

_OBJECT_PATTERN = re.compile(r'\{[^{}]*(?:\{[^{}]*\}[^{}]*)*\}', re.DOTALL)


class ResponseParser:
    """Parse JSON responses from LLM with robust error recovery."""

    def __init__(self, required_key: str = "standard"):
        """
        Args:
            required_key: Field a recovered object must carry to count as a record
        """
        self._required_key = required_key

    def parse(self, response: str) -> List[Dict[str, Any]]:
        """
        Parse LLM response into a list of record dicts.

        Args:
            response: Raw LLM response text

        Returns:
            List of record dicts ([] for an empty response)

        Raises:
            ExtractionError: If the response holds no recoverable JSON
        """
        if not response or not response.strip():
            return []

        json_text = self._extract_json(response)

        try:
            parsed = json.loads(json_text)
            return self._normalize(parsed)
        except json.JSONDecodeError:
            recovered = self._recover_truncated(json_text)
            if recovered is None:
                raise ExtractionError(f"Unparseable model output: {response[:80]!r}")
            return self._normalize(recovered)

    def _extract_json(self, response: str) -> str:
        """Extract JSON from markdown code blocks."""
        if "```json" in response:
            start = response.find("```json") + 7
            end = response.find("```", start)
            return response[start:end if end != -1 else None].strip()
        if "```" in response:
            start = response.find("```") + 3
            end = response.find("```", start)
            return response[start:end if end != -1 else None].strip()
        return response.strip()

    def _normalize(self, parsed: Any) -> List[Dict]:
        """Normalize to list of dicts."""
        if isinstance(parsed, list):
            return [e for e in parsed if isinstance(e, dict)]
        if isinstance(parsed, dict):
            for key in _WRAPPER_KEYS:
                if key in parsed:
                    return self._normalize(parsed[key])
            return [parsed]
        return []

    def _is_record(self, entry: Any) -> bool:
        return isinstance(entry, dict) and bool(entry.get(self._required_key))

    def _recover_truncated(self, json_text: str) -> Optional[List[Dict]]:
        """
        Recover valid records from truncated/malformed JSON.

        1. Find complete objects via regex
        2. Close unbalanced quotes, braces and brackets
        """
        objects = _OBJECT_PATTERN.findall(json_text)
        valid = []
        for obj_str in objects:
            try:
                entry = json.loads(obj_str)
            except json.JSONDecodeError:
                continue
            if self._is_record(entry):
                valid.append(entry)
        if valid:
            logger.info(f"Recovered {len(valid)} records from truncated JSON")
            return valid

        fixed = json_text.rstrip()
        fixed = re.sub(r',\s*$', '', fixed)

        open_brackets = fixed.count('[') - fixed.count(']')
        open_braces = fixed.count('{') - fixed.count('}')
        if fixed.count('"') % 2:
            fixed += '"'
        fixed += '}' * max(open_braces, 0)
        fixed += ']' * max(open_brackets, 0)

        try:
            result = json.loads(fixed)
        except json.JSONDecodeError:
            logger.warning("Could not recover any valid records from malformed JSON")
            return None

        if isinstance(result, list):
            logger.info(f"Fixed truncated JSON, recovered {len(result)} records")
            return result
        if self._is_record(result):
            return [result]
        return None
