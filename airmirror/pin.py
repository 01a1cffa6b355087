"""Large ASCII-art rendering of a pairing PIN for the console."""

from __future__ import annotations

import re

_WIDTH = 10
_HEIGHT = 8

_DIGITS = (
    ("0821111380", "2114005113", "1110000111", "1110000111",
     "1110000111", "1110000111", "5113002114", "0751111470"),
    ("0002111000", "0021111000", "0000111000", "0000111000",
     "0000111000", "0000111000", "0000111000", "0011111110"),
    ("0811112800", "2114005113", "0000000111", "0000082114",
     "0862111470", "2114700000", "1117000000", "1111111111"),
    ("0821111380", "2114005113", "0000082114", "0000111170",
     "0000075130", "1110000111", "5113002114", "0751111470"),
    ("0000211110", "0001401110", "0021401110", "0214001110",
     "2110001110", "1111111111", "0000001110", "0000001110"),
    ("1111111110", "1110000000", "1110000000", "1112111380",
     "0000075113", "0000000111", "5113002114", "0711114700"),
    ("0821111380", "2114005113", "1110000000", "1112111380",
     "1114075113", "1110000111", "5113002114", "0751111470"),
    ("1111111111", "0000002114", "0000021140", "0000211400",
     "0002114000", "0021140000", "0211400000", "2114000000"),
    ("0831111280", "2114002114", "5113802114", "0751111170",
     "8214775138", "1110000111", "5113002114", "0751111470"),
    ("0821111380", "2114005113", "1110000111", "5113802111",
     "0751114111", "0000000111", "5113002114", "0751111470"),
)

_PIXELS = ' 8dbPYo".'

_PIN_TEXT = re.compile(r"[ \t\n\v\f\r]*\+?([0-9]*)")


def _pin_digits(pin: str) -> list[int]:
    match = _PIN_TEXT.fullmatch(pin)
    if match is None:
        raise ValueError(f"pin must be a decimal number: {pin!r}")
    value = int(match.group(1) or "0")
    digits = []
    for _ in pin:
        digits.append(value % 10)
        value //= 10
    digits.reverse()
    return digits


def render_pin(pin: str, margin: int, gap: int) -> str:
    """Render ``pin`` as eight lines of large digits.

    Each line starts with ``margin`` spaces, each digit is followed by
    ``gap`` spaces; the image is framed by blank lines.
    """
    digits = _pin_digits(pin)
    rows = []
    for row in range(_HEIGHT):
        pieces = [" " * margin]
        for digit in digits:
            pattern = _DIGITS[digit][row]
            pieces.append("".join(_PIXELS[int(cell)] for cell in pattern[:_WIDTH]))
            pieces.append(" " * gap)
        rows.append("".join(pieces))
    return "\n" + "\n".join(rows) + "\n\n"