from typing import Optional
import logging
from ollama import chat as ollama_chat
import openai

from grammar_corrector.correction.errors import ProviderConfigurationError
from grammar_corrector.correction.providers.base import LLMProvider
from grammar_corrector.correction.providers.config import ProviderConfig

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


class OllamaProvider(LLMProvider):
    """Provider for local Ollama models."""

    def __init__(self, model: str, logger: Optional[logging.Logger] = None):
        super().__init__(logger)
        self.model = model

    @property
    def name(self) -> str:
        return f"ollama:{self.model}"

    def generate_response(self, prompt: str, **kwargs) -> str:
        try:
            response = ollama_chat(model=self.model, messages=[{"role": "user", "content": prompt}])
            return response.message.content
        except Exception as e:
            self.logger.error(f"Error generating Ollama response: {e}")
            raise


class OpenAIProvider(LLMProvider):
    """Provider for OpenAI-compatible APIs (including OpenRouter)."""

    def __init__(
        self,
        model: str,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: int = 2,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(logger)
        if not api_key:
            raise ProviderConfigurationError("An API key is required for OpenAIProvider")
        self.model = model
        self.client = openai.OpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=max_retries)

    @classmethod
    def from_config(cls, model: str, config: ProviderConfig, logger: Optional[logging.Logger] = None) -> "OpenAIProvider":
        """Prefer a direct OpenAI key, otherwise route through OpenRouter."""
        if config.openai_api_key:
            api_key, base_url = config.openai_api_key, None
        elif config.openrouter_api_key:
            api_key, base_url = config.openrouter_api_key, OPENROUTER_BASE_URL
        else:
            raise ProviderConfigurationError("Set OPENAI_API_KEY or OPENROUTER_API_KEY to use an OpenAI-compatible model")
        return cls(
            model=model,
            api_key=api_key,
            base_url=base_url,
            timeout=config.request_timeout_seconds,
            max_retries=config.max_retries,
            logger=logger,
        )

    @property
    def name(self) -> str:
        return f"openai:{self.model}"

    def generate_response(self, prompt: str, **kwargs) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model, messages=[{"role": "user", "content": prompt}], **kwargs
            )
            return response.choices[0].message.content or ""
        except Exception as e:
            self.logger.error(f"Error generating OpenAI response: {e}")
            raise
