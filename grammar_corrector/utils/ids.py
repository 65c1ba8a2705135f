import random
import string
from typing import Set


class CorrectionIds:
    """Generates short random identifiers for pending corrections.

    Spans move every time a correction is applied, so corrections are addressed by
    an id that never changes. Ids are unique until `reset`; the arbiter resets its
    allocator for every correction set it builds, so the used set stays small.
    """

    _alphabet = string.ascii_lowercase + string.digits

    def __init__(self, prefix: str = "err", length: int = 6):
        self.prefix = prefix
        self.length = length
        self._used: Set[str] = set()

    def generate(self) -> str:
        while True:
            new_id = f"{self.prefix}_" + "".join(random.choices(self._alphabet, k=self.length))
            if new_id not in self._used:
                self._used.add(new_id)
                return new_id

    def reset(self) -> None:
        self._used.clear()
