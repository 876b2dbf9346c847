"""
Built-in commands: help, opt, read and =.

Also registers the ``color`` option used by CommandEngine.colorize().
"""

from __future__ import annotations
from typing import Iterable, List

from .config import HELP_INDENT, HELP_LINE_WIDTH, HELP_MAX_NAMES
from .engine import CommandEngine
from .errors import CommandError, ExpressionError, UnknownOptionError
from .options import format_numeric, format_option, parse_option
from .registry import Command, Option, OptionType
from .tokenizer import ArgCursor, get_arg

__all__ = ['register_builtins', 'name_list', 'show_overview']


# ──────────────────────────────────────────────
# help
# ──────────────────────────────────────────────

def name_list(names: Iterable[str]) -> List[str]:
    """Lay names out in columns, sorted case-insensitively, column-major."""
    names = list(names)[:HELP_MAX_NAMES]
    if not names:
        return []

    names.sort(key=str.lower)
    width = max(len(n) for n in names) + 2
    cols = max(1, HELP_LINE_WIDTH // width)
    rows = (len(names) + cols - 1) // cols

    lines = []
    for i in range(rows):
        line = HELP_INDENT
        for j in range(cols):
            k = j * rows + i
            if k >= len(names):
                break
            line += names[k].ljust(width)
        lines.append(line)
    return lines


def show_overview(engine: CommandEngine):
    engine.write("Available commands:\n")
    for line in name_list(engine.commands.names()):
        engine.write(line + "\n")
    engine.write("\n")

    engine.write("Available options:\n")
    for line in name_list(engine.options.names()):
        engine.write(line + "\n")
    engine.write("\n")

    engine.write('Type "help <topic>" for more information.\n')
    engine.write("Press Ctrl+D to quit.\n")


def cmd_help(engine: CommandEngine, cursor: ArgCursor):
    topic = get_arg(cursor)
    if topic is None:
        show_overview(engine)
        return

    command = engine.find_command(topic)
    option = engine.find_option(topic)

    if command is not None:
        engine.write(f"COMMAND: {command.name}\n")
        engine.write(command.help)
        if option is not None:
            engine.write("\n")

    if option is not None:
        engine.write(f"OPTION: {option.name} ({option.type.type_text()})\n")
        engine.write(option.help)

    if command is None and option is None:
        raise CommandError(f"help: unknown command: {topic}")


# ──────────────────────────────────────────────
# opt
# ──────────────────────────────────────────────

def cmd_opt(engine: CommandEngine, cursor: ArgCursor):
    opt_text = get_arg(cursor)
    option = None

    if opt_text is not None:
        option = engine.find_option(opt_text)
        if option is None:
            raise UnknownOptionError(opt_text)

    # The value is the raw remainder of the line, quotes and all
    value_text = cursor.rest()
    if value_text:
        try:
            parse_option(option, value_text, engine.resolve_symbol)
        except ExpressionError as e:
            engine.report(e)
            raise CommandError(f"opt: can't parse option: {value_text}") from e
    elif option is not None:
        engine.write(format_option(option) + "\n")
    else:
        for o in engine.options:
            engine.write(format_option(o) + "\n")


# ──────────────────────────────────────────────
# read / =
# ──────────────────────────────────────────────

def cmd_read(engine: CommandEngine, cursor: ArgCursor):
    filename = get_arg(cursor)
    if filename is None:
        raise CommandError("read: filename must be specified")

    engine.process_file(filename)


def cmd_eval(engine: CommandEngine, cursor: ArgCursor):
    text = cursor.rest()
    if not text:
        raise CommandError("=: expression required")

    engine.write(format_numeric(engine.evaluate(text)) + "\n")


BUILTIN_COMMANDS = [
    Command("help", cmd_help,
            "help [command]\n"
            "    Without arguments, displays a list of commands. With a command\n"
            "    name as an argument, displays help for that command.\n"),
    Command("opt", cmd_opt,
            "opt [name] [value]\n"
            "    Query or set option variables. With no arguments, displays all\n"
            "    available options.\n"),
    Command("read", cmd_read,
            "read <filename>\n"
            "    Read commands from a file and evaluate them.\n"),
    Command("=", cmd_eval,
            "= <expression>\n"
            "    Evaluate an address expression and show the result in hex and\n"
            "    decimal.\n"),
]


def register_builtins(engine: CommandEngine):
    """Register the built-in commands and the color option on ``engine``."""
    engine.register_option(Option("color", OptionType.BOOLEAN,
                                  "Colorize disassembly output.\n"))
    for command in BUILTIN_COMMANDS:
        engine.register_command(Command(command.name, command.handler, command.help))
