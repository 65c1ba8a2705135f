import logging
from typing import List, Optional, Tuple

from grammar_corrector.correction.boundary import BoundaryPolicy, DEFAULT_POLICY
from grammar_corrector.types import ErrorRecord, LocatedOccurrence


class WordLocator:
    """Finds every occurrence of a reported word in the exact source text.

    Matching is exact-first (case-insensitive, whole word). When that finds nothing
    the target is retried with leading/trailing punctuation stripped, which covers a
    model echoing "tresure," instead of "tresure". Single-word matches are then
    expanded to the full surrounding token so that an inflected form in the text is
    covered completely. Multi-word phrases are matched as literal substrings and are
    never expanded.
    """

    def __init__(self, policy: Optional[BoundaryPolicy] = None, logger: Optional[logging.Logger] = None):
        self.policy = policy or DEFAULT_POLICY
        self.logger = logger or logging.getLogger(__name__)

    def find_matches(self, text: str, target: str) -> List[Tuple[int, int]]:
        """Return raw (start, end) matches for `target`, applying the fuzzy fallback."""
        target = target.strip()
        if not target:
            return []

        phrase = " " in target
        matches = list(self.policy.find(text, target, phrase=phrase))
        if matches:
            return matches

        stripped = self.policy.strip_punctuation(target).strip()
        if not stripped or stripped == target:
            self.logger.debug(f"No occurrence of '{target}' found in text")
            return []

        matches = list(self.policy.find(text, stripped, phrase=" " in stripped))
        if matches:
            self.logger.debug(f"Fuzzy fallback matched '{stripped}' for reported word '{target}' ({len(matches)} hit(s))")
        else:
            self.logger.debug(f"No occurrence of '{target}' found in text, even without punctuation")
        return matches

    def locate(self, text: str, record: ErrorRecord, record_index: int = 0) -> List[LocatedOccurrence]:
        """Locate all occurrences of `record.original`, left to right."""
        occurrences = []
        for match_start, match_end in self.find_matches(text, record.original):
            if record.is_phrase:
                start, end = match_start, match_end
            else:
                start, end = self.policy.expand(text, match_start, match_end)
            occurrences.append(
                LocatedOccurrence(
                    record_index=record_index,
                    start=start,
                    end=end,
                    match_start=match_start,
                    match_end=match_end,
                )
            )
        return occurrences
