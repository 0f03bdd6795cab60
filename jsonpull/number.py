"""A JSON number kept as its literal text."""

from __future__ import annotations

import math
import re
from typing import Optional

_INT = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_SPECIAL = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)
_HEX = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


class Number(str):
    """The literal text of a JSON number."""

    def __repr__(self) -> str:
        return f"Number({str.__repr__(self)})"

    def float64(self) -> float:
        """The number as a float; ValueError if invalid or out of range."""
        text = str(self)
        if _DECIMAL.fullmatch(text):
            value = float(text)
        elif _SPECIAL.fullmatch(text):
            return float(text)
        elif _HEX.fullmatch(text):
            try:
                value = float.fromhex(text)
            except OverflowError:
                value = math.inf
        else:
            raise ValueError(f'parsing "{text}": invalid syntax')
        if math.isinf(value):
            raise ValueError(f'parsing "{text}": value out of range')
        return value

    def int64(self) -> int:
        """The number as a signed 64-bit integer; ValueError otherwise."""
        text = str(self)
        if not _INT.fullmatch(text):
            raise ValueError(f'parsing "{text}": invalid syntax')
        value = int(text)
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise ValueError(f'parsing "{text}": value out of range')
        return value


def cast_json_number(value: object) -> Optional[str]:
    """The literal text if value is a Number, else None."""
    if isinstance(value, Number):
        return str(value)
    return None