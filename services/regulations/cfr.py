"""
CFR Part Extraction
===================

Helpers for the ``cfrPart`` value reported by the documents API,
e.g. ``"40 CFR 60, 61"``.

Version: 0.1.0
"""

import re
from typing import Any


CFR_PREFIX = "40 CFR"

_DIGITS = re.compile(r"\d+")


def cfr_part_text(cfr_part: Any) -> str:
    """
    Return the raw CFR string from a ``cfrPart`` value.

    Some API versions report ``{"label": ..., "value": "40 CFR 60"}``
    instead of a plain string.
    """
    if isinstance(cfr_part, dict):
        cfr_part = cfr_part.get("value")
    return cfr_part or ""


def extract_cfrs(cfr_string: str) -> list[int]:
    """
    Extract CFR part numbers from a ``40 CFR ...`` string.

    The prefix is stripped by length without checking that it is present,
    so a string that does not start with it loses its first characters
    and a string shorter than it yields an empty list.

    Args:
        cfr_string: The cfrPart value, e.g. "40 CFR 60, 61"

    Returns:
        Part numbers in order of appearance, e.g. [60, 61]
    """
    return [int(part) for part in _DIGITS.findall(cfr_string[len(CFR_PREFIX):])]
