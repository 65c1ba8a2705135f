import re
from dataclasses import dataclass
from typing import Iterator, Pattern, Tuple

DEFAULT_PUNCTUATION = ".,!?;:"


@dataclass(frozen=True)
class BoundaryPolicy:
    """Token boundary rules shared by exact matching, the fuzzy fallback and span expansion.

    A token boundary is whitespace or one of `punctuation`. Keeping the rules in one
    place means the exact and punctuation-stripped passes can never disagree about
    where a word starts or ends.
    """

    punctuation: str = DEFAULT_PUNCTUATION
    case_sensitive: bool = False

    @property
    def flags(self) -> int:
        return 0 if self.case_sensitive else re.IGNORECASE

    def is_boundary(self, char: str) -> bool:
        return char.isspace() or char in self.punctuation

    def strip_punctuation(self, word: str) -> str:
        """Remove leading/trailing punctuation, e.g. 'tresure,' -> 'tresure'."""
        return word.strip(self.punctuation)

    def word_pattern(self, word: str) -> Pattern[str]:
        """Whole-word pattern for a single token."""
        return re.compile(rf"\b{re.escape(word)}\b", self.flags)

    def phrase_pattern(self, phrase: str) -> Pattern[str]:
        """Literal substring pattern for a multi-word phrase."""
        return re.compile(re.escape(phrase), self.flags)

    def find(self, text: str, target: str, phrase: bool = False) -> Iterator[Tuple[int, int]]:
        pattern = self.phrase_pattern(target) if phrase else self.word_pattern(target)
        for match in pattern.finditer(text):
            yield match.start(), match.end()

    def expand(self, text: str, start: int, end: int) -> Tuple[int, int]:
        """Grow [start, end) outward to the nearest boundary on both sides."""
        while start > 0 and not self.is_boundary(text[start - 1]):
            start -= 1
        while end < len(text) and not self.is_boundary(text[end]):
            end += 1
        return start, end


DEFAULT_POLICY = BoundaryPolicy()
