"""Parsing and display of option values."""

from __future__ import annotations
from typing import Optional

from .config import OPTION_NAME_WIDTH, TEXT_OPTION_SIZE, WORD_MASK
from .expr import SymbolResolver, addr_exp
from .registry import Option, OptionType

__all__ = ['parse_boolean', 'parse_option', 'format_option', 'format_numeric']


def parse_boolean(word: str) -> bool:
    """True for a leading non-zero digit, 't', 'y' or "on"; False otherwise."""
    if not word:
        return False
    first = word[0]
    return (("1" <= first <= "9")
            or first == "t" or first == "y"
            or word.startswith("on"))


def parse_option(option: Option, word: str,
                 resolve_symbol: Optional[SymbolResolver] = None):
    """Store ``word`` into ``option`` according to its type.

    Booleans never fail (unrecognised text is false) and text values are
    silently truncated to the option buffer. Numeric values go through the
    expression evaluator and raise ExpressionError on bad input, leaving
    the option unchanged.
    """
    if option.type is OptionType.BOOLEAN:
        option.value = parse_boolean(word)
    elif option.type is OptionType.NUMERIC:
        option.value = addr_exp(word, resolve_symbol)
    else:
        option.value = word[:TEXT_OPTION_SIZE - 1]


def format_numeric(value: int) -> str:
    """``0x<hex> (<decimal>)``, hex shown as an unsigned word."""
    return f"0x{value & WORD_MASK:x} ({value})"


def format_option(option: Option) -> str:
    if option.type is OptionType.BOOLEAN:
        text = "true" if option.value else "false"
    elif option.type is OptionType.NUMERIC:
        text = format_numeric(option.value)
    else:
        text = option.value
    return f"{option.name:>{OPTION_NAME_WIDTH}} = {text}"
