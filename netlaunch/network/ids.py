"""Parsing of launch and campaign identifiers."""

from __future__ import annotations

import re

from netlaunch.exceptions import InvalidFormatError

MAX_ID = 2**64 - 1

_DIGITS = re.compile(r"[0-9]+")


def parse_id(text: str) -> int:
    """
    Parse a launch or campaign ID from user input.

    IDs are unsigned 64-bit integers greater than zero, written as plain
    ASCII decimal digits. Signs, whitespace and separators are rejected
    rather than stripped.

    Raises:
        InvalidFormatError: If the text is not a valid ID.
    """
    if not isinstance(text, str) or not _DIGITS.fullmatch(text):
        raise InvalidFormatError(
            f"error parsing ID: {text!r} is not a decimal number",
            value=text if isinstance(text, str) else repr(text),
        )

    value = int(text)
    if value == 0:
        raise InvalidFormatError("ID must be greater than 0", value=text)
    if value > MAX_ID:
        raise InvalidFormatError(
            f"error parsing ID: {text} is out of range", value=text,
        )
    return value
