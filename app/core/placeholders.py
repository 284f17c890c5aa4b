"""Blank/placeholder detection shared by context aggregation and prompt composition."""

import re
from typing import Any

# Values made only of formatting characters (stars, hashes, dashes, underscores, dots)
_FORMATTING_ONLY_RE = re.compile(r"^[\s*#\-_.]*$")

# Known stand-in tokens
_STAND_IN_RE = re.compile(r"^(TBD|TBC|TODO|N/A|null|undefined|none)$", re.IGNORECASE)


def is_blank_or_placeholder(value: Any) -> bool:
    """
    Check whether a value is empty or holds only placeholder content.

    "***", "# #", "", None, "TBD" are placeholders; "Acme Corp" is not.
    Numeric zero and False count as real values.
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return False
    if isinstance(value, (list, tuple, dict, set)) and not value:
        return True

    text = str(value).strip()
    if not text:
        return True
    if _FORMATTING_ONLY_RE.match(text):
        return True
    return bool(_STAND_IN_RE.match(text))


def has_value(value: Any) -> bool:
    """Inverse of is_blank_or_placeholder, for readable call sites."""
    return not is_blank_or_placeholder(value)
