"""Pretty-printing of JSON payloads embedded in step and response text.

Step bodies and mock responses are free text that frequently, but not
always, holds JSON.  ``format_json()`` re-indents anything that parses and
returns plain text untouched; it never raises.
"""

from __future__ import annotations

import json
import logging

logger = logging.getLogger("tcxml_csv")

_JSON_BRACKETS = (("{", "}"), ("[", "]"))


def looks_like_json(text: str) -> bool:
    """Return True if *text* (already trimmed) is wrapped in ``{}`` or ``[]``."""
    return any(text.startswith(o) and text.endswith(c) for o, c in _JSON_BRACKETS)


def format_json(text: str | None, indent: int = 2) -> str:
    """Return *text* re-serialised as indented JSON, or unchanged.

    Parameters
    ----------
    text:
        Raw text.  Surrounding whitespace is ignored when detecting JSON.
    indent:
        Number of spaces per nesting level.

    Returns
    -------
    str
        Pretty-printed JSON when *text* is a JSON object or array.  Text
        that is not wrapped in brackets is returned exactly as given;
        bracketed text that fails to parse is returned trimmed.  Key order
        is preserved and non-ASCII characters are written as-is, so
        formatting an already formatted payload returns it unchanged.
    """
    if text is None:
        return ""
    trimmed = text.strip()
    if not looks_like_json(trimmed):
        return text

    try:
        return json.dumps(json.loads(trimmed), indent=indent, ensure_ascii=False)
    except (ValueError, RecursionError):
        logger.debug("tcxml_csv | json=unparsed | length=%d", len(trimmed))
        return trimmed
