from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional


@dataclass
class ErrorRecord:
    """A validated grammar error reported by the language model.

    Offsets are deliberately absent: the model only names the offending word and
    its correction, and the word is located in the text afterwards.
    """

    original: str
    corrected: str
    issue: str = ""

    @property
    def is_phrase(self) -> bool:
        """Multi-word reports are matched literally and never boundary-expanded."""
        return " " in self.original

    def dedupe_key(self) -> str:
        return f"{self.original.lower()}\x00{self.corrected.lower()}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ErrorRecord":
        return cls(
            original=data["original"],
            corrected=data["corrected"],
            issue=data.get("issue", ""),
        )


@dataclass(frozen=True)
class LocatedOccurrence:
    """One physical occurrence of a record's word in the buffer.

    `match_start`/`match_end` is the raw regex match, `start`/`end` the span after
    expansion to the full surrounding token.
    """

    record_index: int
    start: int
    end: int
    match_start: int
    match_end: int


@dataclass
class PendingCorrection:
    """A located, not yet applied correction with a live span into the buffer."""

    id: str
    start: int
    end: int
    original: str
    corrected: str
    issue: str
    # Buffer text covered by the span when it was located
    token: str

    @property
    def length(self) -> int:
        return self.end - self.start

    def overlaps(self, start: int, end: int) -> bool:
        return self.start < end and start < self.end

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the shape used for display/highlighting."""
        return {
            "id": self.id,
            "start": self.start,
            "end": self.end,
            "original": self.original,
            "corrected": self.corrected,
            "issue": self.issue,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], text: str) -> "PendingCorrection":
        """Rebuild a correction from its display shape against the buffer it points into."""
        start, end = data["start"], data["end"]
        return cls(
            id=data["id"],
            start=start,
            end=end,
            original=data["original"],
            corrected=data["corrected"],
            issue=data.get("issue", ""),
            token=text[start:end],
        )


@dataclass
class ApplyResult:
    """Buffer and remaining corrections after one correction was applied."""

    text: str
    remaining: List[PendingCorrection] = field(default_factory=list)
    applied: Optional[PendingCorrection] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "remaining": [c.to_dict() for c in self.remaining],
        }


@dataclass(frozen=True)
class HighlightSegment:
    """A contiguous piece of the buffer; `correction_id` is set for highlighted errors."""

    text: str
    correction_id: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.correction_id is not None


@dataclass(frozen=True)
class CheckTicket:
    """Identifies one outstanding grammar check and the text it was issued for."""

    request_id: int
    text: str
