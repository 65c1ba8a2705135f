from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional
import logging

if TYPE_CHECKING:
    from grammar_corrector.core.config import ReviewConfig


class LLMProvider(ABC):
    """Abstract base class for the language model that reports grammar errors."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def request_options(self, text: str, review: "ReviewConfig") -> Dict[str, Any]:
        """Extra keyword arguments for `generate_response` describing the text under review."""
        return {}

    @abstractmethod
    def generate_response(self, prompt: str, **kwargs) -> str:
        """Generate a response from the LLM.

        Args:
            prompt: The prompt to send to the LLM
            **kwargs: Additional provider-specific parameters

        Returns:
            str: The LLM's raw answer text
        """
        pass
