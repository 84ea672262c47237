import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_API_URL = "http://localhost:8000/api/analyze"
DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:8501",  # Local Streamlit
    "http://localhost:3000",  # Local dev
]


@dataclass(frozen=True)
class Settings:
    """Process configuration, read once at startup and never mutated."""

    google_api_key: Optional[str] = None
    model_name: str = DEFAULT_MODEL
    allowed_origins: List[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS))
    log_level: str = "INFO"
    api_url: str = DEFAULT_API_URL
    api_host: str = "127.0.0.1"
    api_port: int = 8000


def _split_origins(raw: str) -> List[str]:
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    # Empty in .env means local development
    return origins or list(DEFAULT_ALLOWED_ORIGINS)


def load_settings() -> Settings:
    load_dotenv()

    return Settings(
        google_api_key=os.getenv("GOOGLE_API_KEY") or None,
        model_name=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
        allowed_origins=_split_origins(os.getenv("ALLOWED_ORIGINS", "")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        api_url=os.getenv("ANALYZER_API_URL", DEFAULT_API_URL),
        api_host=os.getenv("API_HOST", "127.0.0.1"),
        api_port=int(os.getenv("API_PORT", "8000")),
    )
