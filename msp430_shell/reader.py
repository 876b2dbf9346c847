"""Interactive read-dispatch loop."""

from __future__ import annotations
from typing import Callable

from .commands import show_overview
from .config import MODIFY_ALL, PROMPT
from .engine import CommandEngine

__all__ = ['reader_loop']


def reader_loop(engine: CommandEngine, read_line: Callable[[str], str] = input):
    """Prompt for commands until end of input.

    ``read_line`` is called with the prompt and must raise EOFError at end
    of input (the builtin input() does). Ctrl+C at the prompt just starts
    a new line. Before quitting, unsaved modifications are confirmed; a
    "no" answer resumes the loop.
    """
    engine.write("\n")
    show_overview(engine)
    engine.write("\n")

    while True:
        while True:
            try:
                line = read_line(PROMPT)
            except EOFError:
                break
            except KeyboardInterrupt:
                engine.write("\n")
                continue

            engine.process_command(line, interactive=True)

        if not engine.modify_prompt(MODIFY_ALL):
            break

    engine.write("\n")
