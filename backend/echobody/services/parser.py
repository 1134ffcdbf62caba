# echobody/services/parser.py
# completion text → JSON (strict) or JSON-or-raw-text (lenient)

from __future__ import annotations
import json
import logging
from typing import Any

log = logging.getLogger(__name__)


class CompletionParseError(ValueError):
    pass


def parse_completion(text: str, lenient: bool = False) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        if lenient:
            log.info("Completion is not JSON; returning plain text")
            return text
        raise CompletionParseError(f"completion is not valid JSON: {e}") from e
