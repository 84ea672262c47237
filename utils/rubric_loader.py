import json
import os
from typing import Dict, List

CRITERION_IDS = ("context", "goal", "format", "constraints", "examples")

DEFAULT_RUBRIC_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    "data",
    "prompt_rubric.json",
)


def load_default_rubric(json_path: str = DEFAULT_RUBRIC_PATH) -> dict:
    """
    Load the prompt-engineering rubric from its JSON file.
    Every fixed criterion id must appear exactly once, in rubric order.
    """
    try:
        if not os.path.exists(json_path):
            raise FileNotFoundError(f"Default rubric not found at {json_path}")

        with open(json_path, "r", encoding="utf-8") as f:
            rubric = json.load(f)

        if "criteria" not in rubric:
            raise ValueError("Default rubric missing 'criteria' field")

        ids = [criterion.get("id") for criterion in rubric["criteria"]]
        if tuple(ids) != CRITERION_IDS:
            raise ValueError(f"Rubric criteria must be {list(CRITERION_IDS)}, got {ids}")

        return rubric

    except Exception as e:
        raise ValueError(f"Error loading default rubric: {str(e)}")


def rubric_criteria(rubric: dict = None) -> List[Dict[str, str]]:
    """Criteria list of the given rubric (default rubric when omitted)."""
    if rubric is None:
        rubric = load_default_rubric()
    return rubric["criteria"]
