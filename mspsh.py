#!/usr/bin/env python3
"""
mspsh: MSP430 debug shell command line

Usage:
    python mspsh.py [script ...] [-c COMMAND]... [-D NAME=VALUE]...
                    [--verbose] [--quiet] [--log-file FILE]

Scripts run first (one command per line, '#' starts a comment line), then
each -c command. With neither, an interactive prompt is started.

Examples:
    python mspsh.py                                  # interactive
    python mspsh.py setup.cmd
    python mspsh.py -D main=0x4400 -c "= main + 0x10"
    python mspsh.py -c "opt color on" -c "opt"
"""

import argparse
import logging
import sys
from pathlib import Path

from msp430_shell import __version__, create_engine, reader_loop
from msp430_shell.errors import ExpressionError, ShellError
from msp430_shell.symbols import SymbolTable


def setup_logging(args):
    """Diagnostics go to stderr as bare messages; -v adds level names."""
    if args.quiet:
        level = logging.ERROR
    elif args.verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    handlers = []

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(
        '%(levelname)s: %(message)s' if args.verbose else '%(message)s'
    ))
    handlers.append(console)

    if args.log_file:
        log_path = Path(args.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        handlers.append(file_handler)

    logging.basicConfig(level=logging.DEBUG if args.log_file else level,
                        handlers=handlers, force=True)


def parse_define(engine, symbols: SymbolTable, text: str):
    """Apply one -D NAME=VALUE. VALUE may be any address expression."""
    name, sep, value = text.partition("=")
    name = name.strip()
    if not sep or not name:
        raise ShellError(f"bad symbol definition (expected NAME=VALUE): {text}")
    symbols.set(name, engine.evaluate(value))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="mspsh",
        description="Command and expression shell for MSP430 debugging",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("scripts", nargs="*", metavar="script",
                        help="Command files to run before anything else")
    parser.add_argument("-c", "--command", action="append", default=[],
                        dest="commands", metavar="COMMAND",
                        help="Run COMMAND (may be given more than once)")
    parser.add_argument("-D", "--define", action="append", default=[],
                        metavar="NAME=VALUE",
                        help="Define a symbol for use in expressions")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Trace dispatch and evaluation on stderr")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Only show errors")
    parser.add_argument("--log-file", help="Also write a timestamped log to FILE")
    parser.add_argument("--version", action="version",
                        version=f"mspsh {__version__}")

    args = parser.parse_args(argv)
    setup_logging(args)

    symbols = SymbolTable()
    engine = create_engine(symbols)

    try:
        for define in args.define:
            parse_define(engine, symbols, define)

        for script in args.scripts:
            if not engine.process_file(script):
                return 1

        for command in args.commands:
            if not engine.process_command(command, interactive=False):
                return 1

        if not args.scripts and not args.commands:
            reader_loop(engine)

    except ExpressionError as e:
        engine.report(e)
        return 1
    except ShellError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Internal error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
