import math
from collections import Counter
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from utils.rubric_loader import CRITERION_IDS

CriterionId = Literal["context", "goal", "format", "constraints", "examples"]
Level = Literal["missing", "weak", "ok", "strong"]


def _coerce_score(value):
    if isinstance(value, bool):
        raise ValueError("score must be a number, not a boolean")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError("score must be a finite number")
        return round(value)
    return value


def _clamp_score(value: int) -> int:
    return max(0, min(100, value))


class AnalyzeRequest(BaseModel):
    prompt: str = Field(..., min_length=1)


class CriterionScore(BaseModel):
    id: CriterionId
    label: str
    score: int
    level: Level
    feedback: str

    @field_validator("score", mode="before")
    @classmethod
    def coerce_score(cls, value):
        return _coerce_score(value)

    @field_validator("score")
    @classmethod
    def clamp_score(cls, value: int) -> int:
        return _clamp_score(value)

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class Analysis(BaseModel):
    """Validated critique of one prompt, serialized with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    overall_score: int = Field(..., alias="overallScore")
    overall_label: str = Field(..., alias="overallLabel")
    criteria: List[CriterionScore]
    suggestions: List[str] = Field(default_factory=list)
    improved_prompt: str = Field("", alias="improvedPrompt")

    @field_validator("suggestions", mode="before")
    @classmethod
    def default_suggestions(cls, value):
        return [] if value is None else value

    @field_validator("improved_prompt", mode="before")
    @classmethod
    def default_improved_prompt(cls, value):
        return "" if value is None else value

    @field_validator("overall_score", mode="before")
    @classmethod
    def coerce_overall_score(cls, value):
        return _coerce_score(value)

    @field_validator("overall_score")
    @classmethod
    def clamp_overall_score(cls, value: int) -> int:
        return _clamp_score(value)

    @model_validator(mode="after")
    def validate_criteria(self) -> "Analysis":
        counts = Counter(criterion.id for criterion in self.criteria)
        missing = [criterion_id for criterion_id in CRITERION_IDS if counts[criterion_id] == 0]
        duplicated = [criterion_id for criterion_id, count in counts.items() if count > 1]
        problems = []
        if missing:
            problems.append(f"criteria missing ids: {', '.join(missing)}")
        if duplicated:
            problems.append(f"criteria repeat ids: {', '.join(duplicated)}")
        if problems:
            raise ValueError("; ".join(problems))
        return self

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True)


class ErrorResponse(BaseModel):
    error: str
    raw: Optional[str] = None
    details: Optional[str] = None
