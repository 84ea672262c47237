from typing import Optional

import requests
from pydantic import ValidationError

from api.models import Analysis
from utils.config import DEFAULT_API_URL

FALLBACK_ERROR = "Failed to analyze prompt."
CONNECTION_ERROR = "Cannot connect to API. Make sure the FastAPI server is running."


class AnalyzeRequestError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return FALLBACK_ERROR

    if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
        return body["error"]
    return FALLBACK_ERROR


class AnalyzerApiClient:
    """Talks to POST /api/analyze. Every failure becomes an AnalyzeRequestError."""

    def __init__(self, api_url: str = DEFAULT_API_URL):
        self.api_url = api_url

    def analyze(self, prompt: str) -> Analysis:
        try:
            response = requests.post(self.api_url, json={"prompt": prompt})
        except requests.exceptions.ConnectionError as e:
            raise AnalyzeRequestError(CONNECTION_ERROR) from e
        except requests.exceptions.RequestException as e:
            raise AnalyzeRequestError(f"Request failed: {e}") from e

        if not response.ok:
            raise AnalyzeRequestError(_error_message(response), status_code=response.status_code)

        try:
            return Analysis.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise AnalyzeRequestError(FALLBACK_ERROR, status_code=response.status_code) from e
