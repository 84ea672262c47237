import json
import re
from typing import Any

from agents.errors import UpstreamContractError

# One fence on each side, the opening one may carry a language tag (```json)
_LEADING_FENCE = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```$")


def strip_code_fences(text: str) -> str:
    """Remove a markdown code-fence wrapper around model output, if present."""
    cleaned = (text or "").strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_model_json(text: str) -> Any:
    """
    Strip fences and decode the model's JSON.
    Raises UpstreamContractError carrying the cleaned text on failure.
    """
    cleaned = strip_code_fences(text)

    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise UpstreamContractError(raw_text=cleaned, error=str(e), kind="json_decode") from e
