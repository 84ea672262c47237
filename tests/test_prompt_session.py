from unittest.mock import MagicMock

import pytest

from api.models import Analysis
from utils.api_client import AnalyzeRequestError
from utils.prompt_session import (
    EMPTY_PROMPT_ERROR,
    NOT_ANALYZED_LABEL,
    SAMPLE_PROMPT,
    PromptSession,
)


@pytest.fixture
def analysis(sample_analysis):
    return Analysis.model_validate(sample_analysis)


@pytest.fixture
def api_client(analysis):
    client = MagicMock()
    client.analyze.return_value = analysis
    return client


class TestAnalyze:
    def test_starts_with_sample_prompt(self):
        assert PromptSession().prompt_text == SAMPLE_PROMPT

    @pytest.mark.parametrize("prompt", ["", "   ", "\n\t"])
    def test_blank_prompt_never_calls_api(self, api_client, prompt):
        session = PromptSession(prompt_text=prompt)

        assert session.analyze(api_client) is False
        assert session.error == EMPTY_PROMPT_ERROR
        api_client.analyze.assert_not_called()

    def test_success_replaces_analysis(self, api_client, analysis):
        session = PromptSession(prompt_text="Write something.", error="old error")

        assert session.analyze(api_client) is True
        api_client.analyze.assert_called_once_with("Write something.")
        assert session.analysis is analysis
        assert session.error is None
        assert session.is_busy is False

    def test_failure_keeps_previous_analysis(self, analysis):
        client = MagicMock()
        client.analyze.side_effect = AnalyzeRequestError("Gemini returned an invalid JSON response.", 502)
        session = PromptSession(prompt_text="Write something.", analysis=analysis)

        assert session.analyze(client) is False
        assert session.analysis is analysis
        assert session.error == "Gemini returned an invalid JSON response."
        assert session.is_busy is False

    def test_busy_while_request_in_flight(self, analysis):
        session = PromptSession(prompt_text="Write something.")
        seen = []

        def fake_analyze(prompt):
            seen.append(session.is_busy)
            return analysis

        client = MagicMock()
        client.analyze.side_effect = fake_analyze
        session.analyze(client)

        assert seen == [True]
        assert session.is_busy is False


class TestImprovedPrompt:
    def test_use_improved_prompt(self, analysis):
        session = PromptSession(prompt_text="Write something.", analysis=analysis)
        assert session.use_improved_prompt() is True
        assert session.prompt_text == "You are ...; Context: ...; Goal: ..."

    @pytest.mark.parametrize("improved", ["", "   "])
    def test_blank_improved_prompt_is_noop(self, sample_analysis, improved):
        sample_analysis["improvedPrompt"] = improved
        session = PromptSession(prompt_text="Mine", analysis=Analysis.model_validate(sample_analysis))
        assert session.use_improved_prompt() is False
        assert session.prompt_text == "Mine"

    def test_absent_improved_prompt_is_noop(self, sample_analysis):
        del sample_analysis["improvedPrompt"]
        session = PromptSession(prompt_text="Mine", analysis=Analysis.model_validate(sample_analysis))
        session.use_improved_prompt()
        assert session.prompt_text == "Mine"

    def test_no_analysis_is_noop(self):
        session = PromptSession(prompt_text="Mine")
        assert session.use_improved_prompt() is False
        assert session.prompt_text == "Mine"

    def test_copy_button_carries_improved_prompt(self, analysis):
        button = PromptSession(analysis=analysis).copy_button()
        assert button is not None
        assert "\"You are ...; Context: ...; Goal: ...\"" in button

    def test_copy_button_absent_without_improved_prompt(self, sample_analysis):
        assert PromptSession().copy_button() is None
        sample_analysis["improvedPrompt"] = "  "
        assert PromptSession(analysis=Analysis.model_validate(sample_analysis)).copy_button() is None


class TestRendering:
    def test_placeholders_before_first_analysis(self):
        session = PromptSession()
        rows = session.criteria_rows()

        assert session.overall_score == 0
        assert session.overall_label == NOT_ANALYZED_LABEL
        assert [row.id for row in rows] == ["context", "goal", "format", "constraints", "examples"]
        assert all(row.score == 0 and row.level == "missing" for row in rows)
        assert rows[0].feedback == "Background info that gives the AI situational awareness."

    def test_values_from_analysis(self, analysis):
        session = PromptSession(analysis=analysis)

        assert f"{session.overall_score}/100" == "42/100"
        assert session.overall_label == "Needs work"
        assert len(session.analysis.suggestions) == 1
        assert session.criteria_rows() == analysis.criteria
        assert session.status_text == "Last run from Gemini"
