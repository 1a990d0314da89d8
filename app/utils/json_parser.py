import json
import re
from typing import Any, Dict, List, Union

from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

FENCED_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


def strip_code_fence(text: str) -> str:
    """Return the body of the first fenced code block, or the text unchanged."""
    match = FENCED_BLOCK_PATTERN.search(text)
    if match:
        return match.group(1)
    return text


def parse_json_safely(text: str) -> Union[Dict[str, Any], List[Any], None]:
    """Parse JSON from text, handling common LLM formatting issues.

    Handles:
    - Markdown code blocks (```json ... ```), anywhere in the reply
    - Leading/trailing whitespace
    - Prose before or after a single JSON value

    Args:
        text: The text containing JSON

    Returns:
        Parsed JSON object or None if parsing fails
    """
    if not text:
        return None

    cleaned_text = strip_code_fence(text).strip()

    try:
        return json.loads(cleaned_text)
    except json.JSONDecodeError as e:
        LOGGER.warning(f"Initial JSON parse failed: {e}, attempting repairs...")

    # Fallback: decode the first complete array or object in the text
    decoder = json.JSONDecoder()
    starts = [idx for idx in (cleaned_text.find("["), cleaned_text.find("{")) if idx != -1]
    for start in sorted(starts):
        try:
            obj, _ = decoder.raw_decode(cleaned_text, start)
            LOGGER.info(f"Parsed embedded JSON value at position {start}")
            return obj
        except json.JSONDecodeError:
            continue

    LOGGER.error("Failed to parse JSON", extra={"response": cleaned_text[:500]})
    return None
