import logging
from typing import Dict, Iterable, List, Optional

from grammar_corrector.types import ErrorRecord

_logger = logging.getLogger(__name__)


def deduplicate_records(records: Iterable[ErrorRecord], logger: Optional[logging.Logger] = None) -> List[ErrorRecord]:
    """Collapse records reporting the same (original, corrected) pair, ignoring case.

    The first record seen for a pair wins and first-seen order is preserved.
    """
    log = logger or _logger
    unique: Dict[str, ErrorRecord] = {}
    for record in records:
        key = record.dedupe_key()
        if key in unique:
            log.debug(f"Dropping duplicate report '{record.original}' -> '{record.corrected}'")
            continue
        unique[key] = record
    return list(unique.values())
