import pytest
import logging
import os
import sys

# Add the project root to the path so we can import from the package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


@pytest.fixture
def test_logger():
    """Create a logger for testing."""
    logger = logging.getLogger("test_logger")
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture(autouse=True)
def isolated_provider_env(monkeypatch):
    """Keep real credentials from the developer's shell out of the tests."""
    for name in (
        "DIFY_API_KEY",
        "DIFY_BASE_URL",
        "DIFY_APP_ID",
        "OPENAI_API_KEY",
        "OPENROUTER_API_KEY",
        "OLLAMA_MODEL",
        "GRAMMAR_CORRECTOR_CACHE_DIR",
        "GRAMMAR_CORRECTOR_TIMEOUT",
        "GRAMMAR_CORRECTOR_MAX_RETRIES",
    ):
        monkeypatch.delenv(name, raising=False)
