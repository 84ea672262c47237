"""
Pytest fixtures for the Prompt Analyzer tests.
"""
import json

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from utils.config import Settings


class FakeGateway:
    """Stands in for Gemini: returns canned text or raises a canned error."""

    def __init__(self, reply="", configured=True, error=None):
        self.reply = reply
        self.configured = configured
        self.error = error
        self.calls = []

    def is_configured(self):
        return self.configured

    def invoke(self, prompt_text):
        self.calls.append(prompt_text)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def sample_analysis():
    return {
        "overallScore": 42,
        "overallLabel": "Needs work",
        "criteria": [
            {"id": "context", "label": "Context", "score": 20, "level": "weak", "feedback": "Say who the audience is."},
            {"id": "goal", "label": "Goal", "score": 55, "level": "ok", "feedback": "Goal is vague."},
            {"id": "format", "label": "Format", "score": 0, "level": "missing", "feedback": "No output format."},
            {"id": "constraints", "label": "Constraints", "score": 10, "level": "missing", "feedback": "No length or tone."},
            {"id": "examples", "label": "Examples", "score": 90, "level": "strong", "feedback": "Good example."},
        ],
        "suggestions": ["Add context"],
        "improvedPrompt": "You are ...; Context: ...; Goal: ...",
    }


@pytest.fixture
def settings():
    return Settings(google_api_key="test-key", model_name="gemini-test")


@pytest.fixture
def gateway(sample_analysis):
    return FakeGateway(reply=json.dumps(sample_analysis))


@pytest.fixture
def app(settings, gateway):
    return create_app(settings=settings, gateway=gateway)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def fake_gateway():
    return FakeGateway
