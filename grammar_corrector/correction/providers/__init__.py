from grammar_corrector.correction.providers.base import LLMProvider
from grammar_corrector.correction.providers.chat import OllamaProvider, OpenAIProvider
from grammar_corrector.correction.providers.config import ProviderConfig
from grammar_corrector.correction.providers.dify import DifyProvider

__all__ = ["LLMProvider", "OllamaProvider", "OpenAIProvider", "DifyProvider", "ProviderConfig"]
