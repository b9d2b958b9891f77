"""Small text helpers used when reading map files."""

from __future__ import annotations

_ATOI_SPACE = " \t\n\v\f\r"


def atoi(text: str) -> int:
    """Parse a leading decimal integer the way C's atoi does.

    Leading whitespace is skipped, one optional sign is accepted and digits
    are read until the first non-digit. Text without digits gives 0.
    """
    rest = text.lstrip(_ATOI_SPACE)
    sign = 1
    if rest[:1] in ("-", "+"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    digits = []
    for char in rest:
        if not ("0" <= char <= "9"):
            break
        digits.append(char)
    if not digits:
        return 0
    return sign * int("".join(digits))


def split_fields(text: str, sep: str) -> list[str]:
    """Split ``text`` on ``sep``, dropping empty fields."""
    return [part for part in text.split(sep) if part]


def trim(text: str, chars: str) -> str:
    """Remove every character found in ``chars`` from both ends of ``text``."""
    return text.strip(chars)