import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from grammar_corrector.core.config import CheckerConfig, ReviewConfig
from grammar_corrector.correction.arbiter import PositionArbiter
from grammar_corrector.correction.deduplicator import deduplicate_records
from grammar_corrector.correction.extraction import extract_error_list
from grammar_corrector.correction.locator import WordLocator
from grammar_corrector.correction.normalizer import normalize_records
from grammar_corrector.correction.prompts import build_grammar_prompt
from grammar_corrector.correction.providers.base import LLMProvider
from grammar_corrector.correction.session import CorrectionSession
from grammar_corrector.types import ErrorRecord, PendingCorrection


class GrammarChecker:
    """Coordinates a grammar check: prompt the model, then recover and place its errors.

    The pipeline after the model call is pure:
    extract -> normalize -> deduplicate -> locate -> arbitrate.
    Every failure along the way (provider errors, unparseable answers, malformed or
    unlocatable records, span collisions) degrades to fewer corrections, never to an
    exception.
    """

    def __init__(
        self,
        provider: Optional[LLMProvider] = None,
        config: Optional[CheckerConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.provider = provider
        self.config = config or CheckerConfig()
        self.cache_dir = Path(self.config.cache_dir) if self.config.cache_dir else None
        self.locator = WordLocator(policy=self.config.boundary_policy, logger=self.logger)
        self.arbiter = PositionArbiter(locator=self.locator, logger=self.logger)

    def parse_response(self, response: Optional[str]) -> List[ErrorRecord]:
        """Recover unique, well-formed error records from a raw model answer."""
        raw_errors = extract_error_list(response, logger=self.logger)
        records = normalize_records(raw_errors, logger=self.logger)
        unique = deduplicate_records(records, logger=self.logger)
        self.logger.debug(f"Model reported {len(raw_errors)} error(s), {len(records)} valid, {len(unique)} unique")
        return unique

    def locate(self, text: str, response: Optional[str]) -> List[PendingCorrection]:
        """Run the post-model pipeline for an answer that was already obtained."""
        return self.arbiter.arbitrate(text, self.parse_response(response))

    def _write_debug_info(self, prompt: str, response: str) -> None:
        """Write prompt and response to a debug file in the cache directory."""
        if not self.cache_dir:
            return

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        debug_dir = self.cache_dir / "llm_debug"
        debug_dir.mkdir(exist_ok=True, parents=True)
        filename = debug_dir / f"grammar_debug_{timestamp}.txt"

        debug_content = "=== LLM PROMPT ===\n" f"{prompt}\n\n" "=== LLM RESPONSE ===\n" f"{response}\n"
        try:
            with open(filename, "w", encoding="utf-8") as f:
                f.write(debug_content)
        except IOError as e:
            self.logger.error(f"Failed to write LLM debug file: {e}")

    def check(self, text: str, review: Optional[ReviewConfig] = None) -> List[PendingCorrection]:
        """Ask the model to review `text` and return located, non-overlapping corrections."""
        if not text or not text.strip():
            return []
        if self.provider is None:
            raise ValueError("GrammarChecker.check requires a provider; use locate() for pre-fetched responses")

        review = review or ReviewConfig()
        prompt = build_grammar_prompt(text, review)
        try:
            self.logger.debug(f"Requesting grammar review of {len(text)} characters from {self.provider.name}")
            response = self.provider.generate_response(prompt, **self.provider.request_options(text, review))
        except Exception as e:
            self.logger.error(f"Grammar review request failed: {e}")
            return []

        self._write_debug_info(prompt, response)
        corrections = self.locate(text, response)
        self.logger.info(f"Found {len(corrections)} potential issue(s)")
        return corrections

    def review(self, session: CorrectionSession, text: Optional[str] = None, review: Optional[ReviewConfig] = None) -> bool:
        """Check the session's text and install the result unless a newer check superseded it.

        Passing `text` replaces the session buffer first (the user edited the document).
        Returns True when the corrections were installed.
        """
        ticket = session.begin_check(text)
        corrections = self.check(ticket.text, review)
        return session.complete_check(ticket, corrections)
