"""Operand parsing and operator-driven reinterpretation.

An operand is parsed once and kept as a single canonical integer. The
evaluator asks for the view its operator works on: ``as_int32`` for the
arithmetic operators, ``as_uint32`` for shifts, logical operators and
rotations. A negative literal can therefore never slip into a bitwise
path through an implicit cast.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .config import INT32_MAX, INT32_MIN, OPERAND_RE, UINT32_MAX
from .logging_config import get_logger
from .types import (
    InvalidOperandForOperator,
    OperandOutOfRange,
    Operator,
    ParseError,
)

logger = get_logger("operands")


@dataclass(frozen=True)
class Operand:
    """A 32-bit integer operand, signed or unsigned depending on how it is read."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, (int, np.integer)):
            raise ParseError(f"Operand must be an integer, got {self.value!r}")
        # Normalise numpy scalars so equality and hashing behave like ints
        object.__setattr__(self, "value", int(self.value))
        if not INT32_MIN <= self.value <= UINT32_MAX:
            raise OperandOutOfRange(
                f"Operand {self.value} does not fit in 32 bits"
            )

    @property
    def is_negative(self) -> bool:
        return self.value < 0

    def as_int32(self) -> np.int32:
        """Signed view used by +, -, *, / and %."""
        if self.value > INT32_MAX:
            raise OperandOutOfRange(
                f"Operand {self.value} is outside the signed 32-bit range "
                f"[{INT32_MIN}, {INT32_MAX}]"
            )
        return np.int32(self.value)

    def as_uint32(self, operator: Operator | None = None) -> np.uint32:
        """Unsigned view used by shift, logical and rotation operators."""
        if self.is_negative:
            token = f" {operator.token!r}" if operator is not None else ""
            raise InvalidOperandForOperator(
                f"Negative numbers not accepted for bit related operator{token}: "
                f"{self.value}"
            )
        return np.uint32(self.value)

    def view_for(self, operator: Operator) -> np.int32 | np.uint32:
        """Reinterpret the operand as the representation ``operator`` requires."""
        if operator.is_bitwise:
            return self.as_uint32(operator)
        return self.as_int32()


def check_range(value: int, operator: Operator, name: str = "operand") -> None:
    """Check ``value`` fits the representation ``operator`` reads it as.

    Arithmetic operators take signed 32-bit values. Bitwise operators take
    unsigned 32-bit values; negative literals inside the signed range are let
    through so that operand validation reports them precisely.
    """
    if operator.is_bitwise:
        low, high = INT32_MIN, UINT32_MAX
    else:
        low, high = INT32_MIN, INT32_MAX
    if not low <= value <= high:
        raise OperandOutOfRange(
            f"Invalid {name}: {value} is out of range [{low}, {high}] "
            f"for operator {operator.token!r}"
        )


def parse_operand(text: str, operator: Operator | None = None, name: str = "operand") -> Operand:
    """Parse a base-10 operand string.

    Args:
        text: Operand text, an optional sign followed by decimal digits
        operator: Operator the operand feeds; selects the accepted range
        name: Label used in error messages (e.g. "operand1")

    Returns:
        Parsed Operand

    Raises:
        ParseError: if the text is not a plain base-10 integer
        OperandOutOfRange: if the magnitude does not fit the operator's range
    """
    if not isinstance(text, str) or not OPERAND_RE.fullmatch(text):
        raise ParseError(
            f"Invalid {name}: {text!r} is not a base-10 integer",
            "INVALID_OPERAND_TEXT",
        )
    try:
        value = int(text)
    except ValueError as e:
        # Only reachable for digit strings longer than int() accepts
        raise OperandOutOfRange(f"Invalid {name}: magnitude too large") from e

    if operator is not None:
        check_range(value, operator, name)
    elif not INT32_MIN <= value <= UINT32_MAX:
        raise OperandOutOfRange(f"Invalid {name}: {value} does not fit in 32 bits")

    logger.debug("Parsed %s %r as %d", name, text, value)
    return Operand(value)
