import re

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9\-_.]")
_REPEATED_HYPHENS = re.compile(r"-+")


def sanitize_filename(name: str) -> str:
    """
    Makes a string safe to embed in a file name.

    Characters outside [A-Za-z0-9-_.] become hyphens, runs of hyphens are
    collapsed and leading/trailing hyphens are removed.
    """
    sanitized = _UNSAFE_CHARS.sub("-", name or "")
    sanitized = _REPEATED_HYPHENS.sub("-", sanitized)
    return sanitized.strip("-")
