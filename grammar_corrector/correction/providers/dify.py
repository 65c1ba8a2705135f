import logging
import random
import time
from typing import Any, Dict, Optional

import requests

from grammar_corrector.core.config import ReviewConfig
from grammar_corrector.correction.errors import ProviderConfigurationError
from grammar_corrector.correction.prompts import build_inputs
from grammar_corrector.correction.providers.base import LLMProvider
from grammar_corrector.correction.providers.config import ProviderConfig


class DifyProvider(LLMProvider):
    """Sends prompts to a Dify chat app through its blocking chat-messages endpoint.

    Transient request failures are retried with exponential backoff as configured in
    ProviderConfig; the last failure is re-raised to the caller.
    """

    def __init__(self, config: ProviderConfig, logger: Optional[logging.Logger] = None):
        super().__init__(logger)
        if not config.dify_api_key:
            raise ProviderConfigurationError("DIFY_API_KEY not configured")
        self.config = config
        self.url = f"{config.dify_base_url.rstrip('/')}/chat-messages"

    @property
    def name(self) -> str:
        return f"dify:{self.config.dify_app_id or 'default'}"

    def request_options(self, text: str, review: ReviewConfig) -> Dict[str, Any]:
        return {"inputs": build_inputs(text, review), "user": review.user_id}

    def _build_request_body(self, prompt: str, inputs: Optional[Dict[str, Any]], user: str) -> Dict[str, Any]:
        body = {
            "inputs": inputs or {},
            "query": prompt,
            "response_mode": "blocking",
            "user": user,
        }
        if self.config.dify_app_id:
            body["app_id"] = self.config.dify_app_id
        return body

    def generate_response(self, prompt: str, inputs: Optional[Dict[str, Any]] = None, user: str = "default-user", **kwargs) -> str:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.dify_api_key}",
        }
        body = self._build_request_body(prompt, inputs, user)

        attempts = max(1, self.config.max_retries + 1)
        for attempt in range(attempts):
            try:
                self.logger.debug(f"Making Dify API request to: {self.url} (attempt {attempt + 1}/{attempts})")
                response = requests.post(self.url, headers=headers, json=body, timeout=self.config.request_timeout_seconds)
                response.raise_for_status()
                data = response.json()
                return data.get("answer") or data.get("message") or "[]"
            except requests.exceptions.RequestException as e:
                if attempt == attempts - 1:
                    self.logger.error(f"Dify API request failed: {str(e)}")
                    raise
                sleep_s = self.config.backoff_seconds(attempt) + random.uniform(0, 0.05)
                self.logger.warning(f"Dify API request failed ({str(e)}), retrying in {sleep_s:.2f}s")
                time.sleep(sleep_s)
        # Unreachable: the loop either returns or re-raises
        raise RuntimeError("Dify request loop exited without a result")
