import logging

from pydantic import ValidationError

from agents.errors import ConfigurationError, UpstreamContractError
from agents.gemini_gateway import ModelGateway
from api.models import Analysis
from utils.response_parser import parse_model_json, strip_code_fences
from utils.rubric_loader import rubric_criteria

logger = logging.getLogger(__name__)


def build_system_instruction(criteria=None) -> str:
    """Rubric instruction sent ahead of every user prompt."""
    if criteria is None:
        criteria = rubric_criteria()

    criteria_lines = "\n".join(
        f"- {criterion['label']}: {criterion['instruction']}" for criterion in criteria
    )
    criterion_ids = " | ".join(f'"{criterion["id"]}"' for criterion in criteria)

    return f"""You are an expert prompt-engineering coach.
You analyze user prompts using the following criteria:
{criteria_lines}

Return a JSON object only. Do not include any extra text, markdown, or explanations.
The JSON MUST match this shape exactly:

CriterionScore:
{{
  "id": {criterion_ids},
  "label": string,          // human readable label
  "score": number,          // 0-100
  "level": "missing" | "weak" | "ok" | "strong",
  "feedback": string        // short feedback specific to this criterion
}}

Analysis:
{{
  "overallScore": number,     // 0-100
  "overallLabel": string,     // short summary e.g. "Excellent prompt", "Needs work"
  "criteria": CriterionScore[],
  "suggestions": string[],    // concrete, actionable suggestions for improvement
  "improvedPrompt": string    // a rewritten, improved version of the user prompt
}}

Rules:
- Grade strictly but fairly.
- Use 0-100 for all scores.
- Always fill all {len(criteria)} criteria with the exact ids listed.
- The improvedPrompt must preserve the user's intent but upgrade clarity, structure, and explicitness using the criteria above.
- Respond with valid JSON only."""


SYSTEM_INSTRUCTION = build_system_instruction()


def _summarize_validation_error(error: ValidationError) -> str:
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "analysis"
        messages.append(f"{location}: {item['msg']}")
    return "; ".join(messages)


class PromptAnalyzerAgent:
    """
    Grades one prompt against the fixed rubric.
    The model is treated as untrusted: its text is fence-stripped, decoded
    and validated into an Analysis, or an UpstreamContractError is raised.
    """

    def __init__(self, gateway: ModelGateway, system_instruction: str = SYSTEM_INSTRUCTION):
        self.gateway = gateway
        self.system_instruction = system_instruction

    def is_configured(self) -> bool:
        return self.gateway.is_configured()

    def build_request(self, prompt: str) -> str:
        return f"{self.system_instruction}\n\nUSER_PROMPT:\n{prompt}"

    def analyze(self, prompt: str) -> Analysis:
        if not self.gateway.is_configured():
            raise ConfigurationError()

        raw_text = self.gateway.invoke(self.build_request(prompt))
        data = parse_model_json(raw_text)
        return self.validate(data, raw_text)

    def validate(self, data, raw_text: str) -> Analysis:
        if not isinstance(data, dict):
            raise UpstreamContractError(
                raw_text=strip_code_fences(raw_text),
                error=f"expected a JSON object, got {type(data).__name__}",
                kind="schema_validation",
            )

        try:
            analysis = Analysis.model_validate(data)
        except ValidationError as e:
            raise UpstreamContractError(
                raw_text=strip_code_fences(raw_text),
                error=_summarize_validation_error(e),
                kind="schema_validation",
            ) from e

        logger.info(
            "✓ Analysis complete: %s/100 (%s)", analysis.overall_score, analysis.overall_label
        )
        return analysis
