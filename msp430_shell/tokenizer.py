"""
Argument tokenizer for the MSP430 debug shell.

Splits one argument at a time off the front of a command line. Commands
call get_arg() repeatedly on the same cursor, so each handler consumes
exactly as much of its argument text as it needs and can hand the raw
remainder to something else (the expression evaluator, for instance).

Quoting rules:
  - Outside quotes, whitespace ends the argument and '"' opens a quote.
  - Inside quotes, whitespace is kept and '"' closes the quote.
  - Inside quotes, '\\' starts an escape:
        \\\\  →  backslash          \\n  →  newline
        \\r  →  carriage return    \\t  →  tab
        \\NNN  octal byte (first digit 0-3, always two more characters)
        \\xHH  hex byte (always two more characters)
    Any other escaped character stands for itself.
  - An unterminated quote simply runs to the end of the line.

Escaped bytes are returned as the code point of the byte value (0..255).
"""

from __future__ import annotations
import enum
from typing import List, Optional

from .config import WHITESPACE

__all__ = ['ArgCursor', 'QuoteState', 'get_arg', 'split_args']


class QuoteState(enum.Enum):
    BARE = "bare"
    QUOTED = "quoted"
    ESCAPE = "escape"
    OCTAL_1 = "octal1"
    OCTAL_2 = "octal2"
    HEX_1 = "hex1"
    HEX_2 = "hex2"


_SIMPLE_ESCAPES = {
    "\\": "\\",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


class ArgCursor:
    """Mutable view over the unconsumed part of a command line."""

    __slots__ = ('text', 'pos')

    def __init__(self, text: str, pos: int = 0):
        self.text = text
        self.pos = pos

    def rest(self) -> str:
        """Remaining raw (undecoded) text."""
        return self.text[self.pos:]

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def skip_whitespace(self):
        while self.pos < len(self.text) and self.text[self.pos] in WHITESPACE:
            self.pos += 1

    def get_arg(self) -> Optional[str]:
        return get_arg(self)

    def __repr__(self):
        return f"ArgCursor({self.rest()!r})"


def _hex_digit(ch: str) -> int:
    """Digit value as the hex escape decoder sees it; -1 if not alphanumeric."""
    if "0" <= ch <= "9":
        return ord(ch) - ord("0")
    if "A" <= ch <= "Z":
        return ord(ch) - ord("A") + 10
    if "a" <= ch <= "z":
        return ord(ch) - ord("a") + 10
    return -1


def get_arg(cursor: Optional[ArgCursor]) -> Optional[str]:
    """Extract the next argument from ``cursor``.

    Returns None when only whitespace (or nothing) is left. On return the
    cursor sits past the argument and any whitespace that follows it.
    """
    if cursor is None:
        return None

    cursor.skip_whitespace()
    if cursor.at_end():
        return None

    text = cursor.text
    out: List[str] = []
    state = QuoteState.BARE
    qval = 0
    pos = cursor.pos

    while pos < len(text):
        ch = text[pos]

        if state is QuoteState.BARE:
            if ch in WHITESPACE:
                break
            if ch == '"':
                state = QuoteState.QUOTED
            else:
                out.append(ch)

        elif state is QuoteState.QUOTED:
            if ch == '"':
                state = QuoteState.BARE
            elif ch == "\\":
                state = QuoteState.ESCAPE
            else:
                out.append(ch)

        elif state is QuoteState.ESCAPE:
            state = QuoteState.QUOTED
            if ch in _SIMPLE_ESCAPES:
                out.append(_SIMPLE_ESCAPES[ch])
            elif "0" <= ch <= "3":
                state = QuoteState.OCTAL_1
                qval = ord(ch) - ord("0")
            elif ch == "x":
                state = QuoteState.HEX_1
                qval = 0
            else:
                out.append(ch)

        elif state in (QuoteState.OCTAL_1, QuoteState.OCTAL_2):
            if "0" <= ch <= "7":
                qval = (qval << 3) | (ord(ch) - ord("0"))
            if state is QuoteState.OCTAL_2:
                out.append(chr(qval & 0xFF))
                state = QuoteState.QUOTED
            else:
                state = QuoteState.OCTAL_2

        else:  # HEX_1 / HEX_2
            digit = _hex_digit(ch)
            if digit >= 0:
                qval = (qval << 4) | digit
            if state is QuoteState.HEX_2:
                out.append(chr(qval & 0xFF))
                state = QuoteState.QUOTED
            else:
                state = QuoteState.HEX_2

        pos += 1

    cursor.pos = pos
    cursor.skip_whitespace()
    return "".join(out)


def split_args(text: str) -> List[str]:
    """Tokenize a whole line into a list of arguments."""
    cursor = ArgCursor(text)
    args = []
    while True:
        arg = get_arg(cursor)
        if arg is None:
            return args
        args.append(arg)
