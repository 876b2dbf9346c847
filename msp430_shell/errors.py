"""
Exception hierarchy for the MSP430 debug shell.

Every error the command front end can report is a ShellError. The
dispatcher catches them, logs the message and keeps the reader loop alive;
nothing here is fatal to the process.
"""

from __future__ import annotations
from typing import Optional

__all__ = [
    'ShellError', 'CommandError', 'UnknownCommandError', 'UnknownOptionError',
    'ExpressionError', 'ExpressionSyntaxError', 'UnbalancedExpressionError',
    'ParenMismatchError', 'StackOverflowError', 'DivideByZeroError',
    'UnknownSymbolError', 'IllegalCharacterError', 'MalformedExpressionError',
]


class ShellError(Exception):
    """Base class for recoverable command-line errors."""


class CommandError(ShellError):
    """A command handler refused its arguments."""


class UnknownCommandError(ShellError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f'unknown command: {name} (try "help")')


class UnknownOptionError(ShellError):
    def __init__(self, name: str, prefix: str = "opt"):
        self.name = name
        super().__init__(f"{prefix}: no such option: {name}")


# ──────────────────────────────────────────────
# Expression errors
# ──────────────────────────────────────────────

class ExpressionError(ShellError):
    """Raised when an address expression can't be evaluated.

    ``expression`` is filled in by addr_exp() with the full text that was
    being evaluated, so callers can report both the detail and the input.
    """

    def __init__(self, message: str, expression: Optional[str] = None):
        self.expression = expression
        super().__init__(message)


class ExpressionSyntaxError(ExpressionError):
    """Two operands or two binary operators in a row."""


class UnbalancedExpressionError(ExpressionError):
    """Expression ends on an operator."""


class ParenMismatchError(ExpressionError):
    pass


class StackOverflowError(ExpressionError):
    """Operand or operator stack exceeded its fixed capacity."""


class DivideByZeroError(ExpressionError):
    pass


class UnknownSymbolError(ExpressionError):
    def __init__(self, name: str, expression: Optional[str] = None):
        self.name = name
        super().__init__(f"can't parse token: {name}", expression)


class IllegalCharacterError(ExpressionError):
    def __init__(self, char: str, expression: Optional[str] = None):
        self.char = char
        super().__init__(f"illegal character in expression: {char}", expression)


class MalformedExpressionError(ExpressionError):
    """Evaluation did not leave exactly one value behind."""
