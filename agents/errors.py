class PromptAnalyzerError(Exception):
    """Base class for analysis failures surfaced to the API layer."""


class ConfigurationError(PromptAnalyzerError):
    def __init__(self, message: str = "Missing GOOGLE_API_KEY"):
        super().__init__(message)


class UpstreamTransportError(PromptAnalyzerError):
    """Gemini could not be reached or refused the call (network, auth, quota)."""


class UpstreamContractError(PromptAnalyzerError):
    """Gemini answered, but not with a usable analysis."""

    def __init__(self, raw_text: str, error: str, kind: str):
        super().__init__(f"Model output failure ({kind}): {error}")
        self.raw_text = raw_text
        self.error = error
        self.kind = kind
