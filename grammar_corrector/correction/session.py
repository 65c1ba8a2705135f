import logging
import threading
from typing import Dict, List, Optional, Sequence

from grammar_corrector.correction.errors import SpanMismatchError, UnknownCorrectionError
from grammar_corrector.types import ApplyResult, CheckTicket, HighlightSegment, PendingCorrection


class CorrectionSession:
    """Owns one document's text buffer together with its pending corrections.

    All mutation goes through `apply` (one accepted edit) or `complete_check` (a whole
    new correction set), so the buffer and the spans pointing into it always change
    together. Invariants over the pending set, held between calls:

    1. start <= end for every span
    2. spans are pairwise disjoint
    3. text[start:end] == correction.token

    A session is meant for one document being proofread. Calls are serialized with a
    lock, so results from a grammar check running on another thread can be installed
    safely.
    """

    def __init__(self, text: str = "", logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._lock = threading.RLock()
        self._text = text
        self._pending: Dict[str, PendingCorrection] = {}
        self._request_id = 0

    @property
    def text(self) -> str:
        with self._lock:
            return self._text

    @property
    def corrections(self) -> List[PendingCorrection]:
        """Pending corrections ordered by position (copies, safe to hand out)."""
        with self._lock:
            return self._snapshot()

    @property
    def latest_request_id(self) -> int:
        with self._lock:
            return self._request_id

    def get(self, correction_id: str) -> PendingCorrection:
        with self._lock:
            try:
                correction = self._pending[correction_id]
            except KeyError:
                raise UnknownCorrectionError(correction_id) from None
            return self._copy(correction)

    def _snapshot(self) -> List[PendingCorrection]:
        return sorted((self._copy(c) for c in self._pending.values()), key=lambda c: c.start)

    @staticmethod
    def _copy(correction: PendingCorrection) -> PendingCorrection:
        return PendingCorrection(**vars(correction))

    # --- grammar check lifecycle ---

    def begin_check(self, text: Optional[str] = None) -> CheckTicket:
        """Register a new grammar check and return the ticket its result must present.

        Passing `text` means the user changed the document: the buffer is replaced and
        the old corrections are dropped, since their spans point into the old text.
        Any check issued earlier becomes stale.
        """
        with self._lock:
            if text is not None and text != self._text:
                self._text = text
                self._pending = {}
            self._request_id += 1
            self.logger.debug(f"Issued grammar check request {self._request_id}")
            return CheckTicket(request_id=self._request_id, text=self._text)

    def is_current(self, ticket: CheckTicket) -> bool:
        with self._lock:
            return ticket.request_id == self._request_id and ticket.text == self._text

    def complete_check(self, ticket: CheckTicket, corrections: Sequence[PendingCorrection]) -> bool:
        """Install the result of a check, replacing the whole pending set in one step.

        Returns False and leaves the session untouched when the ticket is not the most
        recently issued one, or the buffer changed after the ticket was issued.
        """
        with self._lock:
            if ticket.request_id != self._request_id:
                self.logger.debug(
                    f"Discarding stale grammar check {ticket.request_id} (latest is {self._request_id})"
                )
                return False
            if ticket.text != self._text:
                self.logger.debug(f"Discarding grammar check {ticket.request_id}: text changed since it was issued")
                return False

            self._validate(corrections)
            self._pending = {c.id: self._copy(c) for c in corrections}
            self.logger.info(f"Installed {len(self._pending)} pending correction(s) from check {ticket.request_id}")
            return True

    def _validate(self, corrections: Sequence[PendingCorrection]) -> None:
        previous_end = None
        for correction in sorted(corrections, key=lambda c: c.start):
            if correction.start > correction.end:
                raise ValueError(f"Correction {correction.id} has an inverted span {correction.start}-{correction.end}")
            if previous_end is not None and correction.start < previous_end:
                raise ValueError(f"Correction {correction.id} overlaps a preceding correction")
            actual = self._text[correction.start : correction.end]
            if actual != correction.token:
                raise SpanMismatchError(correction.id, correction.token, actual)
            previous_end = correction.end

    # --- applying corrections ---

    def apply(self, correction_id: str) -> ApplyResult:
        """Replace one correction's span with its corrected text.

        Every pending correction starting at or after the end of the edited span is
        shifted by the length difference; corrections before it are untouched.
        """
        with self._lock:
            correction = self._pending.get(correction_id)
            if correction is None:
                raise UnknownCorrectionError(correction_id)

            start, end = correction.start, correction.end
            actual = self._text[start:end]
            if actual != correction.token:
                raise SpanMismatchError(correction_id, correction.token, actual)

            replacement = correction.corrected.strip()
            self._text = self._text[:start] + replacement + self._text[end:]
            delta = len(replacement) - (end - start)

            del self._pending[correction_id]
            if delta:
                for other in self._pending.values():
                    if other.start >= end:
                        other.start += delta
                        other.end += delta

            self.logger.info(f"Applied correction {correction_id}: '{actual}' -> '{replacement}' at {start}")
            return ApplyResult(text=self._text, remaining=self._snapshot(), applied=self._copy(correction))

    def dismiss(self, correction_id: str) -> PendingCorrection:
        """Drop a pending correction without touching the buffer."""
        with self._lock:
            correction = self._pending.pop(correction_id, None)
            if correction is None:
                raise UnknownCorrectionError(correction_id)
            self.logger.debug(f"Dismissed correction {correction_id}")
            return correction

    # --- display ---

    def highlight_segments(self) -> List[HighlightSegment]:
        """Split the buffer into plain and highlighted pieces, in text order."""
        with self._lock:
            segments = []
            last_index = 0
            for correction in self._snapshot():
                if correction.start > last_index:
                    segments.append(HighlightSegment(text=self._text[last_index : correction.start]))
                segments.append(
                    HighlightSegment(text=self._text[correction.start : correction.end], correction_id=correction.id)
                )
                last_index = correction.end
            if last_index < len(self._text):
                segments.append(HighlightSegment(text=self._text[last_index:]))
            return segments

    def to_dict(self) -> Dict[str, object]:
        with self._lock:
            return {"text": self._text, "corrections": [c.to_dict() for c in self._snapshot()]}
