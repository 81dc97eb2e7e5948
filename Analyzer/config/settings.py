"""
Configuration settings for the Text Analyzer backend
Values are read from the environment (and a local .env file when present)
"""
from dataclasses import dataclass, field
from typing import List
import os

from dotenv import load_dotenv

load_dotenv()


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Config:
    """
    Central configuration for the analyzer service.

    Secrets come from the environment only; everything else has a
    development default.
    """
    # LLM provider
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    # Tried in order, first success wins
    LLM_CANDIDATE_MODELS: List[str] = field(default_factory=lambda: _split_list(
        os.getenv(
            "LLM_CANDIDATE_MODELS",
            "gemini/gemini-1.5-flash,gemini/gemini-pro,gemini/gemini-1.5-pro"
        )
    ))
    # Provider request timeout (seconds), passed through to the client
    LLM_TIMEOUT: float = float(os.getenv("LLM_TIMEOUT", "60"))
    LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.7"))

    # Quota
    DAILY_REQUEST_LIMIT: int = int(os.getenv("DAILY_REQUEST_LIMIT", "50"))

    # Context assembly
    PAGE_CONTENT_LIMIT: int = int(os.getenv("PAGE_CONTENT_LIMIT", "5000"))

    # HTTP server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))
    CORS_ORIGINS: List[str] = field(default_factory=lambda: _split_list(
        os.getenv("CORS_ORIGINS", "*")
    ))

    # Application Insights
    APP_INSIGHTS_CONNECTION_STRING: str = os.getenv(
        "APPLICATIONINSIGHTS_CONNECTION_STRING",
        ""
    )

    def __post_init__(self):
        """Validate configuration values"""
        if not self.LLM_CANDIDATE_MODELS:
            raise ValueError("LLM_CANDIDATE_MODELS must name at least one model")
        if self.LLM_TIMEOUT <= 0:
            raise ValueError("LLM_TIMEOUT must be positive")
        if self.DAILY_REQUEST_LIMIT < 1:
            raise ValueError("DAILY_REQUEST_LIMIT must be at least 1")
        if self.PAGE_CONTENT_LIMIT < 0:
            raise ValueError("PAGE_CONTENT_LIMIT must not be negative")
        if not 0 < self.PORT < 65536:
            raise ValueError("PORT must be a valid TCP port")


# Global config instance
config = Config()
