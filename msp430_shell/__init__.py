"""
MSP430 Debug Shell
==================
Command and expression front end for an interactive MSP430 debugger.

Architecture:
    ┌────────────┐    ┌───────────┐    ┌──────────┐    ┌────────────┐
    │ line /     │───>│ Tokenizer │───>│ Registry │───>│  Command   │
    │ script     │    │ (get_arg) │    │ lookup   │    │  handler   │
    └────────────┘    └───────────┘    └──────────┘    └─────┬──────┘
                                                             │ get_arg / addr_exp
                                                             v
                                       ┌──────────────┐    ┌──────────────┐
                                       │ Symbol table │<───│ Expression   │
                                       │ (resolver)   │    │ evaluator    │
                                       └──────────────┘    └──────────────┘

    - tokenizer.py: quote/escape aware argument splitter over a cursor
    - registry.py:  ordered, case-insensitive command and option registries
    - engine.py:    dispatch, script files, interactivity, modify prompt
    - expr.py:      operator-precedence evaluator with bounded stacks
    - options.py:   boolean / numeric / text option parsing and display
    - commands.py:  help, opt, read, =
    - reader.py:    interactive prompt loop
"""

__version__ = "0.2.0"

from typing import IO, Dict, Optional, Union

from .commands import register_builtins
from .engine import CommandEngine
from .errors import *
from .expr import addr_exp
from .reader import reader_loop
from .registry import Command, Option, OptionType
from .symbols import SymbolTable
from .tokenizer import ArgCursor, get_arg, split_args


def create_engine(symbols: Optional[Union[SymbolTable, Dict[str, int]]] = None, *,
                  stdout: Optional[IO[str]] = None,
                  stdin: Optional[IO[str]] = None) -> CommandEngine:
    """Build an engine with the built-in commands registered.

    Args:
        symbols: SymbolTable or plain dict used to resolve names in
            expressions. An empty table is created if omitted.
        stdout / stdin: Streams for command output and prompts
            (default: the process streams).
    """
    if symbols is None:
        symbols = SymbolTable()
    elif isinstance(symbols, dict):
        symbols = SymbolTable(symbols)

    engine = CommandEngine(resolve_symbol=symbols.get, stdout=stdout, stdin=stdin)
    register_builtins(engine)
    return engine
