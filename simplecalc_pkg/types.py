"""Type definitions, result dataclasses and errors for consistent API responses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class CalcError(Exception):
    """Base class for every calculator failure."""

    def __init__(self, message: str, code: str = "CALC_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ParseError(CalcError):
    """Raised when an operand or operator string is malformed."""

    def __init__(self, message: str, code: str = "PARSE_ERROR"):
        super().__init__(message, code)


class UnsupportedOperator(ParseError):
    """Raised when an operator token is not one of the supported symbols."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Unsupported operator: {token!r}", "UNSUPPORTED_OPERATOR")


class OperandOutOfRange(ParseError):
    """Raised when an operand does not fit the representation its operator needs."""

    def __init__(self, message: str):
        super().__init__(message, "OUT_OF_RANGE")


class InvalidOperandForOperator(CalcError):
    """Raised when a negative operand is given to a bitwise or rotation operator."""

    def __init__(self, message: str):
        super().__init__(message, "INVALID_OPERAND")


class DivisionByZero(CalcError):
    def __init__(self, message: str = "Division by zero"):
        super().__init__(message, "DIVISION_BY_ZERO")


class ArithmeticOverflow(CalcError):
    def __init__(self, message: str):
        super().__init__(message, "OVERFLOW")


class ResultKind(Enum):
    SIGNED_INT32 = "int32"
    UNSIGNED_INT32 = "uint32"
    FLOAT64 = "float64"


class Operator(Enum):
    """Supported operators, keyed by their token."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    SHL = "<<"
    SHR = ">>"
    AND = "&"
    OR = "|"
    XOR = "^"
    ROTL = "<<<"
    ROTR = ">>>"

    @classmethod
    def parse(cls, token: str) -> Operator:
        """Map a token to its operator using an exact, case-sensitive match.

        Args:
            token: Operator symbol (e.g. "+", "<<<")

        Returns:
            The matching Operator

        Raises:
            UnsupportedOperator: if the token is not an exact supported symbol
        """
        operator = _OPERATORS_BY_TOKEN.get(token)
        if operator is None:
            raise UnsupportedOperator(token)
        return operator

    @property
    def token(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def is_bitwise(self) -> bool:
        """True for shift, logical and rotation operators (unsigned operands)."""
        return self in BITWISE_OPERATORS

    @property
    def result_kind(self) -> ResultKind:
        if self is Operator.DIV:
            return ResultKind.FLOAT64
        if self.is_bitwise:
            return ResultKind.UNSIGNED_INT32
        return ResultKind.SIGNED_INT32


_OPERATORS_BY_TOKEN = {op.value: op for op in Operator}

BITWISE_OPERATORS = frozenset(
    {
        Operator.SHL,
        Operator.SHR,
        Operator.AND,
        Operator.OR,
        Operator.XOR,
        Operator.ROTL,
        Operator.ROTR,
    }
)

_DESCRIPTIONS = {
    Operator.ADD: "addition",
    Operator.SUB: "subtraction",
    Operator.MUL: "multiplication",
    Operator.DIV: "divide",
    Operator.MOD: "modulo",
    Operator.SHL: "left shift",
    Operator.SHR: "right shift",
    Operator.AND: "and",
    Operator.OR: "or",
    Operator.XOR: "xor",
    Operator.ROTL: "rotate left",
    Operator.ROTR: "rotate right",
}


@dataclass(frozen=True)
class Value:
    """A computed number tagged with the representation that produced it."""

    kind: ResultKind
    number: int | float

    def format(self, precision: int = 2) -> str:
        """Render integers in decimal and floats with fixed fraction digits."""
        if self.kind is ResultKind.FLOAT64:
            # negative zero (0 / -5, -1 / 1000) prints as 0.00
            number = round(float(self.number), int(precision)) + 0.0
            return f"{number:.{int(precision)}f}"
        return str(int(self.number))


@dataclass
class CalcResult:
    """Outcome of one calculation."""

    ok: bool
    operand1: int | None = None
    operator: str | None = None
    operand2: int | None = None
    value: Value | None = None
    error: str | None = None
    code: str | None = None

    @classmethod
    def failure(cls, err: CalcError, **fields: Any) -> CalcResult:
        return cls(ok=False, error=err.message, code=err.code, **fields)

    def to_dict(self, precision: int = 2) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.operand1 is not None:
            result_dict["operand1"] = self.operand1
        if self.operator is not None:
            result_dict["operator"] = self.operator
        if self.operand2 is not None:
            result_dict["operand2"] = self.operand2
        if self.value is not None:
            result_dict["type"] = self.value.kind.value
            result_dict["result"] = self.value.number
            result_dict["formatted"] = self.value.format(precision)
        if self.error is not None:
            result_dict["error"] = self.error
        if self.code is not None:
            result_dict["code"] = self.code
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"CalcResult(ok=False, code={self.code!r}, error={self.error!r})"
        parts = [f"ok={self.ok}"]
        if self.value is not None:
            parts.append(f"type={self.value.kind.value!r}")
            parts.append(f"result={self.value.number!r}")
        return f"CalcResult({', '.join(parts)})"
