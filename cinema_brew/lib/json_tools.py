# cinema_brew/lib/json_tools.py
import json
import re
from typing import Any, Dict

from cinema_brew.errors import FormatError
from cinema_brew.logger import get_logger

log = get_logger(__name__)

_FENCED_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", flags=re.IGNORECASE)
_OBJECT_RE = re.compile(r"(\{[\s\S]*\})")

def extract_json_block(text: str) -> str:
    """
    Pick the JSON candidate out of a model reply:
    fenced ```json block -> first {...} span -> the text itself.
    """
    m = _FENCED_RE.search(text)
    if m:
        return m.group(1)
    m = _OBJECT_RE.search(text)
    if m:
        return m.group(1)
    return text

def parse_model_response(text: str) -> Dict[str, Any]:
    try:
        data = json.loads(extract_json_block(text).strip())
    except (ValueError, RecursionError):
        log.error(f"JSON parse error. Raw text: {text}")
        raise FormatError()
    if not isinstance(data, dict):
        log.error(f"Expected a JSON object, got {type(data).__name__}. Raw text: {text}")
        raise FormatError()
    return data
