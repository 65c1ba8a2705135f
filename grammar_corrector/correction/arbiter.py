import logging
from typing import List, Optional, Sequence, Set, Tuple

from grammar_corrector.correction.locator import WordLocator
from grammar_corrector.types import ErrorRecord, LocatedOccurrence, PendingCorrection
from grammar_corrector.utils.ids import CorrectionIds


class PositionArbiter:
    """Turns located occurrences into a set of non-overlapping pending corrections.

    Claimed spans are tracked across the whole record list, so two different records
    can never highlight the same text. Records are visited in order and each record's
    occurrences left to right; the first claimant of a position wins.
    """

    def __init__(
        self,
        locator: Optional[WordLocator] = None,
        ids: Optional[CorrectionIds] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.locator = locator or WordLocator(logger=self.logger)
        self.ids = ids or CorrectionIds()

    @staticmethod
    def _collides(start: int, end: int, claimed: List[Tuple[int, int]]) -> bool:
        return any(start < claimed_end and claimed_start < end for claimed_start, claimed_end in claimed)

    def claim(
        self,
        text: str,
        record: ErrorRecord,
        occurrences: Sequence[LocatedOccurrence],
        claimed: List[Tuple[int, int]],
        raw_claimed: Set[Tuple[int, int]],
    ) -> List[PendingCorrection]:
        """Accept the occurrences of one record that do not collide with earlier claims."""
        accepted = []
        for occurrence in sorted(occurrences, key=lambda o: o.match_start):
            if (occurrence.match_start, occurrence.match_end) in raw_claimed:
                self.logger.debug(f"Skipping '{record.original}' at {occurrence.match_start}: position already used")
                continue

            if self._collides(occurrence.start, occurrence.end, claimed):
                self.logger.debug(
                    f"Skipping '{record.original}' at {occurrence.start}-{occurrence.end}: overlaps an earlier correction"
                )
                continue

            raw_claimed.add((occurrence.match_start, occurrence.match_end))
            claimed.append((occurrence.start, occurrence.end))
            accepted.append(
                PendingCorrection(
                    id=self.ids.generate(),
                    start=occurrence.start,
                    end=occurrence.end,
                    original=record.original,
                    corrected=record.corrected,
                    issue=record.issue,
                    token=text[occurrence.start : occurrence.end],
                )
            )
        return accepted

    def arbitrate(self, text: str, records: Sequence[ErrorRecord]) -> List[PendingCorrection]:
        """Locate every record in `text` and return pending corrections sorted by position."""
        self.ids.reset()
        claimed: List[Tuple[int, int]] = []
        raw_claimed: Set[Tuple[int, int]] = set()
        corrections: List[PendingCorrection] = []

        for index, record in enumerate(records):
            occurrences = self.locator.locate(text, record, record_index=index)
            if not occurrences:
                self.logger.debug(f"Dropping report '{record.original}' -> '{record.corrected}': not found in text")
                continue
            corrections.extend(self.claim(text, record, occurrences, claimed, raw_claimed))

        corrections.sort(key=lambda c: c.start)
        self.logger.debug(f"Arbitrated {len(corrections)} correction(s) from {len(records)} report(s)")
        return corrections
