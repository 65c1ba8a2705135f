import json
import logging
from typing import Any, Iterator, List, Optional

_logger = logging.getLogger(__name__)


def _balanced_arrays(response: str) -> Iterator[str]:
    """Yield every balanced `[...]` substring, in order of its opening bracket.

    One pass with a stack of open positions, so unclosed brackets cost nothing
    extra. Brackets inside JSON string literals are ignored so that an `issue`
    such as "Missing ] here" does not end the array early. String state is only
    tracked inside an array; quotes in surrounding prose are ignored.
    """
    spans = []
    open_positions: List[int] = []
    in_string = False
    escaped = False
    for index, char in enumerate(response):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"' and open_positions:
            in_string = True
        elif char == "[":
            open_positions.append(index)
        elif char == "]" and open_positions:
            spans.append((open_positions.pop(), index + 1))

    spans.sort()
    for start, end in spans:
        yield response[start:end]


def _as_error_list(data: Any) -> Optional[List[Any]]:
    if isinstance(data, list):
        return data
    # Some models wrap the array despite being told not to
    if isinstance(data, dict) and isinstance(data.get("errors"), list):
        return data["errors"]
    return None


def extract_error_list(response: Optional[str], logger: Optional[logging.Logger] = None) -> List[Any]:
    """Pull the list of raw error objects out of a free-text model response.

    Tries each balanced bracketed array in turn, then the whole response. Any
    failure degrades to an empty list; this function never raises.
    """
    log = logger or _logger
    if not response or not isinstance(response, str):
        log.debug("Empty model response, no errors extracted")
        return []

    # A prose aside like "[1]" parses too; keep it only if no array of objects follows
    first_list = None
    for candidate in _balanced_arrays(response):
        try:
            data = json.loads(candidate)
        except (ValueError, RecursionError):
            continue
        errors = _as_error_list(data)
        if errors is None:
            continue
        if not errors or any(isinstance(item, dict) for item in errors):
            log.debug(f"Extracted {len(errors)} raw error(s) from bracketed array")
            return errors
        if first_list is None:
            first_list = errors

    if first_list is not None:
        return first_list

    try:
        data = json.loads(response)
    except (ValueError, RecursionError) as e:
        log.error(f"Failed to parse model response as JSON: {e}")
        log.debug(f"Raw response content: {response}")
        return []

    errors = _as_error_list(data)
    if errors is None:
        log.warning(f"Model response parsed to {type(data).__name__}, expected a list of errors")
        return []
    return errors
