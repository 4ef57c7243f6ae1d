import re
from typing import Any

_TAG_RE = re.compile(r"<[^>]*>")


def strip_tags(value: Any) -> str:
    """Remove every markup tag from ``value``, keeping the text between them.

    Anything shaped like ``<...>`` is dropped; non-string input yields an
    empty string. Applying it twice gives the same result as applying it
    once: a ``<`` that survives has no ``>`` after it.

    Args:
        value: Text to clean.

    Returns:
        str: Text without tags.
    """
    if not isinstance(value, str):
        return ""
    return _TAG_RE.sub("", value)
