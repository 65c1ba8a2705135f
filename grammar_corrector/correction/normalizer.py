import logging
from typing import Any, Iterable, List, Optional

from pydantic import ValidationError

from grammar_corrector.correction.schemas import RawErrorRecord
from grammar_corrector.types import ErrorRecord

_logger = logging.getLogger(__name__)


def _issue_text(issue: Any) -> str:
    if issue is None:
        return ""
    return str(issue).strip()


def normalize_record(item: Any, logger: Optional[logging.Logger] = None) -> Optional[ErrorRecord]:
    """Validate a single raw item; returns None when it cannot be used."""
    log = logger or _logger
    if not isinstance(item, dict):
        log.debug(f"Dropping non-object error entry: {item!r}")
        return None

    try:
        raw = RawErrorRecord.model_validate(item)
    except ValidationError as e:
        log.debug(f"Dropping malformed error entry {item!r}: {e.error_count()} validation error(s)")
        return None

    if not raw.original or not raw.corrected:
        log.debug(f"Dropping error entry with empty original/corrected: {item!r}")
        return None

    return ErrorRecord(original=raw.original, corrected=raw.corrected, issue=_issue_text(raw.issue))


def normalize_records(items: Iterable[Any], logger: Optional[logging.Logger] = None) -> List[ErrorRecord]:
    """Turn raw model output into ErrorRecords, silently discarding malformed entries.

    Whitespace around `original`/`corrected` is trimmed and any `start`/`end` the model
    sent is thrown away.
    """
    records = []
    for item in items:
        record = normalize_record(item, logger=logger)
        if record is not None:
            records.append(record)
    return records
