import logging
from typing import Optional, Protocol

from google import genai
from google.genai import types

from agents.errors import ConfigurationError, UpstreamTransportError
from utils.config import DEFAULT_MODEL

logger = logging.getLogger(__name__)


class ModelGateway(Protocol):
    """Capability the analyzer needs from a language model."""

    def is_configured(self) -> bool: ...

    def invoke(self, prompt_text: str) -> str: ...


class GeminiGateway:
    """
    Single-turn access to Gemini.
    The client is created once, only when a credential is present; a missing
    key is reported per request through is_configured().
    No retries and no explicit timeout: one failed call is one failed request.
    """

    def __init__(self, api_key: Optional[str], model_name: str = DEFAULT_MODEL):
        self.model = model_name
        self.client = genai.Client(api_key=api_key) if api_key else None

        if self.client is None:
            logger.warning("⚠️  Missing GOOGLE_API_KEY; /api/analyze will answer 500")
        else:
            logger.info("✓ Gemini gateway initialized (model=%s)", self.model)

    def is_configured(self) -> bool:
        return self.client is not None

    def invoke(self, prompt_text: str) -> str:
        if self.client is None:
            raise ConfigurationError()

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=[
                    types.Content(
                        role="user",
                        parts=[types.Part(text=prompt_text)],
                    )
                ],
                config=types.GenerateContentConfig(
                    temperature=0.2,
                    response_mime_type="application/json",
                ),
            )
            text = response.text
        except Exception as e:
            raise UpstreamTransportError(f"Gemini API error: {e}") from e

        return text or ""
