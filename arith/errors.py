"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from ArithUserError.

Programming errors and bugs should NOT inherit from ArithUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations


class ArithUserError(Exception):
    """
    Base class for all user-facing errors in arith.

    These errors indicate problems with the input the user can fix:
    malformed expressions, arithmetic faults, broken configuration.
    """
    pass


class ConfigError(ArithUserError):
    """Invalid or unreadable configuration file."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        prefix = f"{path}: " if path else ""
        super().__init__(prefix + message)


class ExpressionTooDeep(ArithUserError):
    """Nesting of the expression exceeds the interpreter's recursion limit."""

    def __init__(self) -> None:
        super().__init__("Expression is nested too deeply to evaluate.")


__all__ = ["ArithUserError", "ConfigError", "ExpressionTooDeep"]
