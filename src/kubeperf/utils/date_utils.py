import re
from datetime import timedelta

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h)")
_UNIT_SECONDS = {"ms": 0.001, "s": 1, "m": 60, "h": 3600}


def parse_duration(value: str) -> timedelta:
    """
    Parses a Go-style duration string (e.g., '30s', '5m', '1h30m', '1.5h')
    into a timedelta.

    Raises:
        ValueError: If the string is empty or malformed.
    """
    if value is None:
        raise ValueError("Duration must not be empty.")

    text = str(value).strip().lower()
    if not text:
        raise ValueError("Duration must not be empty.")

    position = 0
    total = 0.0
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            break
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        position = match.end()

    if position != len(text):
        raise ValueError(f"Invalid duration '{value}'. Use a format like '30s', '5m', '1h' or '1h30m'.")

    return timedelta(seconds=total)


def format_duration(delta: timedelta) -> str:
    """Formats a timedelta the way parse_duration accepts it, e.g. '1h30m0s'."""
    total = int(delta.total_seconds())
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours:
        return f"{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{minutes}m{seconds}s"
    return f"{seconds}s"
