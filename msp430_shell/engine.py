"""
Command engine for the MSP430 debug shell.

The engine owns everything that used to be process-wide state in a
debugger front end: the command and option registries, the symbol lookup
hook, the "is this call interactive?" flag and the unsaved-modification
flags. Construct one at startup, register commands on it, then feed it
lines.

Dispatch of one line:
  1. Trailing whitespace is stripped.
  2. The first argument is the command name (looked up case-insensitively).
  3. The handler runs with the interactivity flag set for the duration of
     the call and restored afterwards, even if the handler raises.
  4. A ShellError from the handler is logged; the line still counts as
     processed so that a reader loop or script keeps going. Only an
     unknown command makes process_command() return False.
"""

from __future__ import annotations
import contextlib
import logging
import sys
from typing import IO, Iterator, Optional

from .config import MAX_READ_DEPTH, MODIFY_PROMPT, WHITESPACE
from .errors import (CommandError, ExpressionError, ShellError,
                     UnknownCommandError)
from .expr import SymbolResolver, addr_exp
from .registry import (Command, CommandRegistry, Option, OptionRegistry)
from .tokenizer import ArgCursor, get_arg

__all__ = ['CommandEngine']

log = logging.getLogger(__name__)


class CommandEngine:
    """Registries plus dispatch for one debugger session.

    Usage:
        engine = CommandEngine(resolve_symbol=symbols.get)
        register_builtins(engine)
        engine.process_command("opt color on")
        engine.evaluate("main + 4")
    """

    def __init__(self, resolve_symbol: Optional[SymbolResolver] = None,
                 stdout: Optional[IO[str]] = None,
                 stdin: Optional[IO[str]] = None):
        self.commands = CommandRegistry()
        self.options = OptionRegistry()
        self.resolve_symbol = resolve_symbol
        self._stdout = stdout
        self._stdin = stdin
        self._interactive = True
        self._modify_flags = 0
        self._read_depth = 0

    # ══════════════════════════════════════════════
    # Streams
    # ══════════════════════════════════════════════

    @property
    def stdout(self) -> IO[str]:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stdin(self) -> IO[str]:
        return self._stdin if self._stdin is not None else sys.stdin

    def write(self, text: str):
        self.stdout.write(text)

    # ══════════════════════════════════════════════
    # Registration
    # ══════════════════════════════════════════════

    def register_command(self, command: Command) -> Command:
        return self.commands.register(command)

    def register_option(self, option: Option) -> Option:
        return self.options.register(option)

    def find_command(self, name: str) -> Optional[Command]:
        return self.commands.find(name)

    def find_option(self, name: str) -> Optional[Option]:
        return self.options.find(name)

    # ══════════════════════════════════════════════
    # Interactivity context
    # ══════════════════════════════════════════════

    def is_interactive(self) -> bool:
        return self._interactive

    @contextlib.contextmanager
    def interactive_scope(self, interactive: bool) -> Iterator[None]:
        old = self._interactive
        self._interactive = interactive
        try:
            yield
        finally:
            self._interactive = old

    # ══════════════════════════════════════════════
    # Dispatch
    # ══════════════════════════════════════════════

    def report(self, error: ShellError):
        """Log an error the way the command line shows it to the user."""
        log.error("%s", error)
        if isinstance(error, ExpressionError) and error.expression is not None:
            log.error("bad address expression: %s", error.expression)

    def process_command(self, line: str, interactive: bool = True) -> bool:
        """Run one command line. Returns False only for an unknown command."""
        cursor = ArgCursor(line.rstrip(WHITESPACE))
        name = get_arg(cursor)
        if name is None:
            return True

        command = self.find_command(name)
        if command is None:
            self.report(UnknownCommandError(name))
            return False

        log.debug("dispatch %s %r (interactive=%s)", command.name, cursor.rest(),
                  interactive)
        with self.interactive_scope(interactive):
            try:
                command.handler(self, cursor)
            except ShellError as e:
                self.report(e)
        return True

    def process_file(self, filename: str) -> bool:
        """Run every command in a script file, stopping at the first failure.

        Lines whose first non-blank character is '#' are comments. Commands
        run non-interactively so they never block on a prompt. Bytes are
        decoded as Latin-1 so each one reaches the tokenizer unchanged.
        """
        if self._read_depth >= MAX_READ_DEPTH:
            raise CommandError(f"read: nesting too deep: {filename}")

        try:
            f = open(filename, "r", encoding="latin-1")
        except OSError as e:
            log.error("read: can't open %s: %s", filename, e.strerror or e)
            return False

        self._read_depth += 1
        try:
            with f:
                for line_no, line in enumerate(f, start=1):
                    text = line.lstrip(WHITESPACE)
                    if text.startswith("#"):
                        continue

                    if not self.process_command(text, interactive=False):
                        log.error("read: error processing %s (line %d)",
                                  filename, line_no)
                        return False
        finally:
            self._read_depth -= 1

        return True

    def evaluate(self, text: str) -> int:
        """Evaluate an address expression against this session's symbols."""
        return addr_exp(text, self.resolve_symbol)

    # ══════════════════════════════════════════════
    # Unsaved-modification tracking
    # ══════════════════════════════════════════════

    def modify_set(self, flags: int):
        self._modify_flags |= flags

    def modify_clear(self, flags: int):
        self._modify_flags &= ~flags

    def modified(self, flags: int) -> bool:
        return bool(self._modify_flags & flags)

    def modify_prompt(self, flags: int) -> bool:
        """Ask before discarding unsaved changes.

        Returns True if the pending action should be aborted. Only asks when
        the current call is interactive and one of ``flags`` is set.
        """
        if not (self._interactive and self._modify_flags & flags):
            return False

        while True:
            self.write(MODIFY_PROMPT)
            self.stdout.flush()

            answer = self.stdin.readline()
            if not answer:
                self.write("\n")
                return True

            first = answer[0].upper()
            if first == "Y":
                return False
            if first == "N":
                return True

            self.write('Please answer "y" or "n".\n')

    # ══════════════════════════════════════════════
    # Terminal colour
    # ══════════════════════════════════════════════

    def colorize(self, code: str) -> int:
        """Emit an ANSI escape (``ESC [`` + code) if the color option is on.

        Returns the number of characters written.
        """
        option = self.find_option("color")
        if option is None or not option.value:
            return 0

        text = "\x1b[" + code
        self.write(text)
        return len(text)
