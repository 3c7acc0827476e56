"""Parsing and formatting of resource quantities such as ``5G`` or ``10Ti``.

A quantity is a decimal number followed by an optional suffix: a binary
suffix (``Ki`` … ``Ei``), a decimal SI suffix (``n`` … ``E``) or a
decimal exponent (``e3``, ``E-6``).
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from fractions import Fraction


class QuantityError(ValueError):
    """Raised when a quantity string cannot be parsed."""


class Format(str, Enum):
    """The notation a quantity was written in; used when formatting it."""

    BINARY_SI = "BinarySI"
    DECIMAL_SI = "DecimalSI"
    DECIMAL_EXPONENT = "DecimalExponent"


_BINARY_POWERS = {"Ki": 1, "Mi": 2, "Gi": 3, "Ti": 4, "Pi": 5, "Ei": 6}
_DECIMAL_EXPONENTS = {
    "n": -9,
    "u": -6,
    "m": -3,
    "": 0,
    "k": 3,
    "M": 6,
    "G": 9,
    "T": 12,
    "P": 15,
    "E": 18,
}
_DECIMAL_SUFFIXES = {exp: suffix for suffix, exp in _DECIMAL_EXPONENTS.items()}

_NUMBER = re.compile(r"([+-]?)(\d+(?:\.\d*)?|\.\d+)(.*)\Z", re.DOTALL)
_EXPONENT = re.compile(r"[eE]([+-]?\d+)\Z")

_FORMAT_HELP = "quantities must match the regular expression '^([+-]?[0-9.]+)([eEinumkKMGTP]*[-+]?[0-9]*)$'"


@dataclass(frozen=True)
class Quantity:
    """An exact amount together with the notation used to print it."""

    value: Fraction
    format: Format

    def __str__(self) -> str:
        if self.format is Format.BINARY_SI and self.value.denominator == 1:
            n = self.value.numerator
            if n == 0:
                return "0"
            for suffix, power in sorted(_BINARY_POWERS.items(), key=lambda kv: -kv[1]):
                unit = 1024**power
                if n % unit == 0:
                    return f"{n // unit}{suffix}"
            return str(n)
        return self._decimal_string()

    def _decimal_string(self) -> str:
        sign = "-" if self.value < 0 else ""
        nanos = math.ceil(abs(self.value) * 10**9)
        if nanos == 0:
            return "0"
        for exp in range(18, -12, -3):
            unit = 10 ** (exp + 9)
            if nanos % unit == 0:
                mantissa = nanos // unit
                if self.format is Format.DECIMAL_EXPONENT:
                    suffix = f"e{exp}" if exp else ""
                else:
                    suffix = _DECIMAL_SUFFIXES[exp]
                return f"{sign}{mantissa}{suffix}"
        return f"{sign}{nanos}n"


def parse_quantity(text: str) -> Quantity:
    """Parse a quantity string, raising QuantityError if it is malformed."""
    if not isinstance(text, str) or not text:
        raise QuantityError(_FORMAT_HELP)
    match = _NUMBER.match(text)
    if match is None:
        raise QuantityError(_FORMAT_HELP)
    sign, digits, suffix = match.groups()
    try:
        amount = Fraction(Decimal(digits))
    except InvalidOperation as err:
        raise QuantityError(_FORMAT_HELP) from err
    if sign == "-":
        amount = -amount

    if suffix in _BINARY_POWERS:
        return Quantity(amount * 1024 ** _BINARY_POWERS[suffix], Format.BINARY_SI)
    if suffix in _DECIMAL_EXPONENTS:
        return Quantity(amount * Fraction(10) ** _DECIMAL_EXPONENTS[suffix], Format.DECIMAL_SI)
    exp_match = _EXPONENT.match(suffix)
    if exp_match is not None:
        exponent = int(exp_match.group(1))
        return Quantity(amount * Fraction(10) ** exponent, Format.DECIMAL_EXPONENT)
    raise QuantityError(f"unable to parse quantity's suffix: {text!r}")