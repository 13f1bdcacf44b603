"""Operator dispatch and fixed-width evaluation.

Arithmetic operators work on signed 32-bit operands and are accumulated in
64 bits so overflow is detected before narrowing. Shift, logical and
rotation operators work on unsigned 32-bit operands.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from .config import INT32_MAX, INT32_MIN, ROTATION_MASK, WORD_BITS
from .logging_config import CALC_CODE_ATTR, get_logger
from .operands import Operand
from .types import (
    ArithmeticOverflow,
    CalcError,
    CalcResult,
    DivisionByZero,
    Operator,
    ResultKind,
    Value,
)

logger = get_logger("evaluator")


def _narrow_int32(wide: np.int64, description: str) -> np.int32:
    if wide < INT32_MIN or wide > INT32_MAX:
        raise ArithmeticOverflow(
            f"Arithmetic overflow: {description} = {int(wide)} is outside "
            f"[{INT32_MIN}, {INT32_MAX}]"
        )
    return np.int32(wide)


def add(a: np.int32, b: np.int32) -> np.int32:
    return _narrow_int32(np.int64(a) + np.int64(b), f"{a} + {b}")


def subtract(a: np.int32, b: np.int32) -> np.int32:
    return _narrow_int32(np.int64(a) - np.int64(b), f"{a} - {b}")


def multiply(a: np.int32, b: np.int32) -> np.int32:
    # |a * b| <= 2**62, so the int64 product is exact
    return _narrow_int32(np.int64(a) * np.int64(b), f"{a} * {b}")


def divide(a: np.int32, b: np.int32) -> np.float64:
    if b == 0:
        raise DivisionByZero(f"Division by zero: {a} / 0")
    return np.float64(a) / np.float64(b)


def modulo(a: np.int32, b: np.int32) -> np.int32:
    """Truncating remainder; the sign follows the dividend."""
    if b == 0:
        raise DivisionByZero(f"Division by zero: {a} % 0")
    # fmod truncates like C; INT32_MIN % -1 is 0 in 64 bits
    return np.int32(np.fmod(np.int64(a), np.int64(b)))


def _shift_count(count: np.uint32) -> np.uint32:
    return np.uint32(int(count) & ROTATION_MASK)


def shift_left(a: np.uint32, b: np.uint32) -> np.uint32:
    return np.uint32(a << _shift_count(b))


def shift_right(a: np.uint32, b: np.uint32) -> np.uint32:
    """Logical shift; uint32 zero-fills."""
    return np.uint32(a >> _shift_count(b))


def bitwise_and(a: np.uint32, b: np.uint32) -> np.uint32:
    return np.uint32(a & b)


def bitwise_or(a: np.uint32, b: np.uint32) -> np.uint32:
    return np.uint32(a | b)


def bitwise_xor(a: np.uint32, b: np.uint32) -> np.uint32:
    return np.uint32(a ^ b)


def rotate_left(value: np.uint32, count: np.uint32) -> np.uint32:
    """Rotate the 32-bit pattern of ``value`` left by ``count mod 32``."""
    value = np.uint32(value)
    shift = _shift_count(count)
    if shift == 0:
        return np.uint32(value)
    back = np.uint32(WORD_BITS - int(shift))
    return np.uint32((value << shift) | (value >> back))


def rotate_right(value: np.uint32, count: np.uint32) -> np.uint32:
    """Rotate the 32-bit pattern of ``value`` right by ``count mod 32``."""
    value = np.uint32(value)
    shift = _shift_count(count)
    if shift == 0:
        return np.uint32(value)
    back = np.uint32(WORD_BITS - int(shift))
    return np.uint32((value >> shift) | (value << back))


OPERATIONS: dict[Operator, Callable] = {
    Operator.ADD: add,
    Operator.SUB: subtract,
    Operator.MUL: multiply,
    Operator.DIV: divide,
    Operator.MOD: modulo,
    Operator.SHL: shift_left,
    Operator.SHR: shift_right,
    Operator.AND: bitwise_and,
    Operator.OR: bitwise_or,
    Operator.XOR: bitwise_xor,
    Operator.ROTL: rotate_left,
    Operator.ROTR: rotate_right,
}


def validate_operands(operand1: Operand, operator: Operator, operand2: Operand) -> None:
    """Reject negative operands for shift, logical and rotation operators.

    Raises:
        InvalidOperandForOperator: if either operand is negative for a bitwise operator
    """
    if operator.is_bitwise:
        operand1.as_uint32(operator)
        operand2.as_uint32(operator)


def compute(operand1: Operand, operator: Operator, operand2: Operand) -> Value:
    """Evaluate one operation, raising a CalcError on failure.

    Args:
        operand1: Left operand
        operator: Operator to apply
        operand2: Right operand

    Returns:
        Value tagged with the operator's result kind
    """
    validate_operands(operand1, operator, operand2)
    a = operand1.view_for(operator)
    b = operand2.view_for(operator)
    raw = OPERATIONS[operator](a, b)

    kind = operator.result_kind
    if kind is ResultKind.FLOAT64:
        return Value(kind, float(raw))
    return Value(kind, int(raw))


def _coerce_operand(operand: Operand | int) -> Operand:
    if isinstance(operand, Operand):
        return operand
    return Operand(operand)


def evaluate(
    operand1: Operand | int, operator: Operator | str, operand2: Operand | int
) -> CalcResult:
    """Evaluate ``operand1 operator operand2`` without raising or printing.

    Args:
        operand1: Left operand (Operand or plain int)
        operator: Operator or its token
        operand2: Right operand (Operand or plain int)

    Returns:
        CalcResult with the tagged value, or with an error message and code

    Example:
        >>> evaluate(10, "+", 5).value.number
        15
        >>> evaluate(7, "/", 0).code
        'DIVISION_BY_ZERO'
    """
    token = operator.token if isinstance(operator, Operator) else operator
    fields = {
        "operand1": operand1.value if isinstance(operand1, Operand) else operand1,
        "operator": token,
        "operand2": operand2.value if isinstance(operand2, Operand) else operand2,
    }
    try:
        op = operator if isinstance(operator, Operator) else Operator.parse(operator)
        left = _coerce_operand(operand1)
        right = _coerce_operand(operand2)
        value = compute(left, op, right)
    except CalcError as e:
        logger.debug(
            "Evaluation of %r failed: %s", fields, e.message, extra={CALC_CODE_ATTR: e.code}
        )
        return CalcResult.failure(e, **fields)

    logger.debug("Evaluated %s %s %s -> %r", left.value, op.token, right.value, value)
    return CalcResult(ok=True, value=value, **fields)
