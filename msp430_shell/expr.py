"""
Address expression evaluator for the MSP430 debug shell.

Turns text like ``main+0x10`` or ``(__stack - 4) * 2`` into an integer.

Grammar:
  operand:   decimal (123), hex with a 0x prefix (0x1F) or a symbol name
              made of ASCII letters, digits and . _ $ :
  operators: binary + - * / %, unary -, parentheses
  Whitespace separates tokens and is otherwise ignored.

How the evaluation works (operator precedence, no recursion):
  Two fixed-capacity stacks are kept, one for values and one for pending
  operators. ``last_operator`` remembers what the previous token was:

      START  expression start (acts like an open parenthesis)
      op     an operator symbol (+ - * / % ( or N for unary minus)
      )      a closing parenthesis
      None   an operand

  An operand is only accepted where one is expected (after START or an
  operator). A '-' seen where an operand is expected becomes unary 'N'.
  Before a binary operator is pushed, operators of equal or higher
  precedence are popped and applied. ')' applies everything back to the
  matching '('. At the end all pending operators are applied and exactly
  one value must remain.

All arithmetic is 32-bit two's complement with wraparound; division and
modulo truncate toward zero.
"""

from __future__ import annotations
import logging
import string
from typing import Callable, Dict, List, Optional

from .config import (EXPR_STACK_SIZE, EXPR_TOKEN_BUF_SIZE, SYMBOL_PUNCTUATION,
                     WHITESPACE, WORD_MASK, WORD_SIGN)
from .errors import (ExpressionError, ExpressionSyntaxError, UnbalancedExpressionError,
                     ParenMismatchError, StackOverflowError, DivideByZeroError,
                     UnknownSymbolError, IllegalCharacterError, MalformedExpressionError)

__all__ = ['SymbolResolver', 'ExpressionState', 'addr_exp', 'wrap32',
           'c_div', 'c_mod', 'parse_number']

log = logging.getLogger(__name__)

SymbolResolver = Callable[[str], Optional[int]]

OPERATOR_CHARS = "+-*/%()"
UNARY_MINUS = "N"
START = "START"

_ULONG_MAX = (1 << 64) - 1
_LONG_MAX = (1 << 63) - 1


# ──────────────────────────────────────────────
# Machine-word arithmetic
# ──────────────────────────────────────────────

def wrap32(value: int) -> int:
    """Truncate to a signed 32-bit word."""
    value &= WORD_MASK
    return value - (WORD_MASK + 1) if value & WORD_SIGN else value


def c_div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def c_mod(a: int, b: int) -> int:
    """Remainder whose sign follows the dividend."""
    return a - b * c_div(a, b)


def _divide(a: int, b: int) -> int:
    if not b:
        raise DivideByZeroError("divide by zero")
    return c_div(a, b)


def _modulo(a: int, b: int) -> int:
    if not b:
        raise DivideByZeroError("divide by zero")
    return c_mod(a, b)


_BINARY_OPS: Dict[str, Callable[[int, int], int]] = {
    '+': lambda a, b: a + b,
    '-': lambda a, b: a - b,
    '*': lambda a, b: a * b,
    '/': _divide,
    '%': _modulo,
}


# ──────────────────────────────────────────────
# Number parsing
# ──────────────────────────────────────────────

def _leading_digits(text: str, digits: str) -> str:
    end = 0
    while end < len(text) and text[end] in digits:
        end += 1
    return text[:end]


def parse_number(text: str) -> int:
    """Parse a numeric token the way the C library would.

    ``0x`` introduces hex; anything else starting with a digit is decimal.
    Only the leading run of valid digits counts ("12ab" is 12), and values
    too large for a machine long saturate before being cut down to a word.
    """
    if text.startswith("0x"):
        body = text[2:]
        if body[:2] in ("0x", "0X") and body[2:3] and body[2] in string.hexdigits:
            body = body[2:]
        digits = _leading_digits(body, string.hexdigits)
        value = min(int(digits, 16), _ULONG_MAX) if digits else 0
    else:
        digits = _leading_digits(text, string.digits)
        value = min(int(digits), _LONG_MAX) if digits else 0
    return wrap32(value)


def _is_symbol_char(ch: str) -> bool:
    return (ch.isascii() and ch.isalnum()) or ch in SYMBOL_PUNCTUATION


# ──────────────────────────────────────────────
# Evaluation state
# ──────────────────────────────────────────────

class ExpressionState:
    """Operand/operator stacks for one evaluation. Not reusable."""

    def __init__(self, resolve_symbol: Optional[SymbolResolver] = None,
                 stack_size: int = EXPR_STACK_SIZE):
        self.resolve_symbol = resolve_symbol
        self.stack_size = stack_size
        self.last_operator: Optional[str] = START
        self.data_stack: List[int] = []
        self.op_stack: List[str] = []

    def _expects_operand(self) -> bool:
        return self.last_operator is not None and self.last_operator != ')'

    # ── Operands ────────────────────────────

    def push_data(self, text: str):
        if not self._expects_operand():
            raise ExpressionSyntaxError(f"syntax error at token {text}")

        if text[0] in string.digits:
            value = parse_number(text)
        else:
            value = None
            if self.resolve_symbol is not None:
                value = self.resolve_symbol(text)
            if value is None:
                raise UnknownSymbolError(text)
            value = wrap32(value)

        if len(self.data_stack) + 1 > self.stack_size:
            raise StackOverflowError(f"data stack overflow at token {text}")

        self.data_stack.append(value)
        self.last_operator = None

    # ── Operators ───────────────────────────

    def apply_top(self):
        """Pop one operator, apply it to its operands, push the result."""
        op = self.op_stack.pop()
        rhs = self.data_stack.pop()

        if op == UNARY_MINUS:
            result = -rhs
        else:
            lhs = self.data_stack.pop()
            result = _BINARY_OPS[op](lhs, rhs)

        self.data_stack.append(wrap32(result))

    def _can_push(self, op: str) -> bool:
        if not self.op_stack or op == '(':
            return True

        top = self.op_stack[-1]
        if top == '(' or op == UNARY_MINUS:
            return True
        if op in "*/%":
            return top in "+-"
        return False

    def push_operator(self, op: str):
        """Push one operator, reducing whatever it outranks first.

        A ')' with no '(' on the stack is reported as a parenthesis
        mismatch before any pending operator is applied, so ``1/0)`` is a
        mismatch rather than a divide by zero.
        """
        if op == '(':
            if not self._expects_operand():
                raise ExpressionSyntaxError(f"syntax error at operator {op}")
        elif op == '-':
            if self._expects_operand():
                op = UNARY_MINUS
        elif op == ')':
            if '(' not in self.op_stack:
                raise ParenMismatchError("parenthesis mismatch: )")
            if self._expects_operand():
                raise ExpressionSyntaxError(f"syntax error at operator {op}")
        elif self._expects_operand():
            raise ExpressionSyntaxError(f"syntax error at operator {op}")

        if op == ')':
            while self.op_stack[-1] != '(':
                self.apply_top()
            self.op_stack.pop()
        else:
            while not self._can_push(op):
                self.apply_top()

            if len(self.op_stack) + 1 > self.stack_size:
                raise StackOverflowError(f"operator stack overflow: {op}")
            self.op_stack.append(op)

        self.last_operator = op

    # ── End of input ────────────────────────

    def finish(self) -> int:
        if self._expects_operand():
            if self.last_operator == '(':
                raise ParenMismatchError("parenthesis mismatch: (")
            raise UnbalancedExpressionError("syntax error at end of expression")

        while self.op_stack:
            if self.op_stack[-1] == '(':
                raise ParenMismatchError("parenthesis mismatch: (")
            self.apply_top()

        if len(self.data_stack) != 1:
            raise MalformedExpressionError(
                f"no data: stack size is {len(self.data_stack)}")

        return self.data_stack[0]


# ──────────────────────────────────────────────
# Public entry point
# ──────────────────────────────────────────────

def addr_exp(text: str, resolve_symbol: Optional[SymbolResolver] = None) -> int:
    """Evaluate an address expression.

    Args:
        text: Expression text. Evaluation stops at a NUL character.
        resolve_symbol: Called with each symbol name; returns its value or
            None if the name is unknown.

    Returns:
        The result as a signed 32-bit integer.

    Raises:
        ExpressionError (one of its subclasses) with ``expression`` set to
        ``text``.
    """
    state = ExpressionState(resolve_symbol)
    token: List[str] = []

    try:
        for ch in text:
            if ch == "\0":
                break

            if ch in OPERATOR_CHARS:
                is_operator = True
            elif ch in WHITESPACE:
                is_operator = False
            elif _is_symbol_char(ch):
                # Characters past the token buffer are dropped
                if len(token) + 1 < EXPR_TOKEN_BUF_SIZE:
                    token.append(ch)
                continue
            else:
                raise IllegalCharacterError(ch)

            if token:
                state.push_data("".join(token))
                token = []

            if is_operator:
                state.push_operator(ch)

        if token:
            state.push_data("".join(token))

        result = state.finish()
    except ExpressionError as e:
        e.expression = text
        raise

    log.debug("expression %r = %d", text, result)
    return result
