import logging
from dataclasses import dataclass
from typing import List, Optional

from api.models import Analysis, CriterionScore
from utils.api_client import FALLBACK_ERROR, AnalyzeRequestError
from utils.clipboard import copy_button_html
from utils.rubric_loader import rubric_criteria

logger = logging.getLogger(__name__)

EMPTY_PROMPT_ERROR = "Write a prompt first."
NOT_ANALYZED_LABEL = "Not analyzed yet"

SAMPLE_PROMPT = (
    "You are an AI tutor.\n\n"
    "Task: Teach me the basics of prompt engineering.\n"
    "Context: I am a beginner who has used ChatGPT a few times but never designed prompts deliberately.\n"
    "Output format: Bullet-point mini lesson with short explanations.\n"
    "Tone/style: Simple, friendly, and practical.\n"
    "Constraints: Keep it under 300 words.\n"
    "Examples: Show 1 weak prompt and 1 improved prompt."
)


@dataclass
class PromptSession:
    """
    UI state for one interactive session.
    A failed analysis never touches the previous analysis.
    """

    prompt_text: str = SAMPLE_PROMPT
    analysis: Optional[Analysis] = None
    is_busy: bool = False
    error: Optional[str] = None

    def analyze(self, client) -> bool:
        if not self.prompt_text.strip():
            self.error = EMPTY_PROMPT_ERROR
            return False

        self.is_busy = True
        self.error = None
        try:
            self.analysis = client.analyze(self.prompt_text)
            return True
        except AnalyzeRequestError as e:
            logger.info("Analysis request failed: %s", e.message)
            self.error = e.message or FALLBACK_ERROR
            return False
        finally:
            self.is_busy = False

    @property
    def improved_prompt(self) -> str:
        if self.analysis is None:
            return ""
        return self.analysis.improved_prompt or ""

    def use_improved_prompt(self) -> bool:
        if not self.improved_prompt.strip():
            return False
        self.prompt_text = self.improved_prompt
        return True

    def copy_button(self) -> Optional[str]:
        """Browser copy button for the improved prompt, or None when there is nothing to copy."""
        if not self.improved_prompt.strip():
            return None
        return copy_button_html(self.improved_prompt)

    @property
    def overall_score(self) -> int:
        return self.analysis.overall_score if self.analysis else 0

    @property
    def overall_label(self) -> str:
        return self.analysis.overall_label if self.analysis else NOT_ANALYZED_LABEL

    @property
    def status_text(self) -> str:
        return "Last run from Gemini" if self.analysis else "Waiting for first analysis"

    def criteria_rows(self) -> List[CriterionScore]:
        if self.analysis is not None:
            return self.analysis.criteria

        return [
            CriterionScore(
                id=criterion["id"],
                label=criterion["label"],
                score=0,
                level="missing",
                feedback=criterion["description"],
            )
            for criterion in rubric_criteria()
        ]
