"""Public API for simplecalc - returns structured objects without side effects."""

from __future__ import annotations

from .evaluator import evaluate
from .logging_config import get_logger
from .operands import parse_operand
from .types import CalcResult, Operator, ParseError

logger = get_logger("api")


def calculate(operand1: str, operator: str, operand2: str) -> CalcResult:
    """Parse and evaluate a calculation given as three strings.

    The operator is parsed first because it decides whether the operands are
    read as signed or unsigned 32-bit values.

    Args:
        operand1: Left operand text (e.g. "10")
        operator: Operator token (e.g. "+", "<<<")
        operand2: Right operand text (e.g. "5")

    Returns:
        CalcResult with the value or an error message and code

    Example:
        >>> from simplecalc_pkg.api import calculate
        >>> calculate("10", "+", "5").value.format()
        '15'
        >>> calculate("10", "/", "3").value.format()
        '3.33'
        >>> calculate("-1", "&", "1").code
        'INVALID_OPERAND'
    """
    try:
        op = Operator.parse(operator)
        left = parse_operand(operand1, op, "operand1")
        right = parse_operand(operand2, op, "operand2")
    except ParseError as e:
        logger.debug("Rejected input %r %r %r: %s", operand1, operator, operand2, e)
        return CalcResult.failure(e, operator=operator)
    return evaluate(left, op, right)


def validate_operator(token: str) -> tuple[bool, str | None]:
    """Check an operator token without evaluating anything.

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> from simplecalc_pkg.api import validate_operator
        >>> validate_operator("<<<")
        (True, None)
        >>> validate_operator("**")
        (False, "Unsupported operator: '**'")
    """
    try:
        Operator.parse(token)
    except ParseError as e:
        return False, str(e)
    return True, None


def supported_operators() -> list[tuple[str, str]]:
    """Return (token, description) pairs in usage order."""
    return [(op.token, op.description) for op in Operator]
