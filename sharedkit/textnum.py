"""Regular-expression building blocks and number extraction from text."""

from __future__ import annotations

import math
import re
import struct

NUMBER_REGEX = r"(\d+(\.\d+)?)"
ZERO_OR_WHITE_SPACE = r"\s*"
END_OR_WHITE_SPACE = r"(?:\s|$)"
END_WHITE_SPACE_OR_BRACKETS = r"(?:\s|[(\[})\]},]|$)"
START_OR_WHITE_SPACE = r"(?:^|\s)"
START_WHITE_SPACE_OR_BRACKETS = r"(?:^|\s|[(\[})\]},])"

_NUMBER_PATTERN = re.compile(NUMBER_REGEX, re.ASCII)


def build_regex(*args: str) -> re.Pattern[str]:
    """Join the pattern parts and compile them; raises ``re.error`` if invalid."""
    return re.compile("".join(args), re.ASCII)


def _to_single_precision(value: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.inf


def text_to_float(text: str) -> float | None:
    """Return the first number in ``text`` at single precision, or None."""
    if not text:
        return None

    match = _NUMBER_PATTERN.search(text)
    if match is None:
        return None

    num = float(match.group(0))
    if math.isinf(num):
        return None

    return _to_single_precision(num)


def text_to_uint(text: str) -> int | None:
    """Return the first number in ``text`` truncated to an unsigned int, or None."""
    num = text_to_float(text)
    if num is None:
        return None
    return int(num)