from dataclasses import dataclass
from typing import Optional
import os

from dotenv import load_dotenv

DEFAULT_DIFY_BASE_URL = "https://api.dify.ai/v1"


@dataclass(frozen=True)
class ProviderConfig:
    """Centralized configuration for language model providers.

    Values are loaded from environment variables (and a `.env` file, if present) to
    keep credentials out of code. Constructing a config performs no network I/O.
    """

    dify_api_key: Optional[str] = None
    dify_base_url: str = DEFAULT_DIFY_BASE_URL
    dify_app_id: Optional[str] = None
    openai_api_key: Optional[str] = None
    openrouter_api_key: Optional[str] = None
    ollama_model: Optional[str] = None

    request_timeout_seconds: float = 30.0
    max_retries: int = 2
    retry_backoff_base_seconds: float = 0.5
    retry_backoff_factor: float = 2.0

    @staticmethod
    def from_env(load_env_file: bool = True) -> "ProviderConfig":
        if load_env_file:
            load_dotenv()
        return ProviderConfig(
            dify_api_key=os.getenv("DIFY_API_KEY"),
            dify_base_url=os.getenv("DIFY_BASE_URL", DEFAULT_DIFY_BASE_URL),
            dify_app_id=os.getenv("DIFY_APP_ID"),
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            openrouter_api_key=os.getenv("OPENROUTER_API_KEY"),
            ollama_model=os.getenv("OLLAMA_MODEL"),
            request_timeout_seconds=float(os.getenv("GRAMMAR_CORRECTOR_TIMEOUT", "30")),
            max_retries=int(os.getenv("GRAMMAR_CORRECTOR_MAX_RETRIES", "2")),
        )

    def backoff_seconds(self, attempt: int) -> float:
        return self.retry_backoff_base_seconds * (self.retry_backoff_factor**attempt)
