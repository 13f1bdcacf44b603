"""simplecalc package: 32-bit arithmetic and bitwise calculator components."""

__all__ = [
    "api",
    "cli",
    "config",
    "evaluator",
    "logging_config",
    "operands",
    "types",
]

# Public API exports

__api_exports__ = [
    "calculate",
    "evaluate",
    "validate_operator",
    "supported_operators",
]
