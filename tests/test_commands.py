"""Built-in command tests: help, opt, read and =."""

import io

from msp430_shell import create_engine
from msp430_shell.commands import name_list
from msp430_shell.config import HELP_MAX_NAMES
from msp430_shell.registry import Option, OptionType


def _engine(symbols=None):
    out = io.StringIO()
    engine = create_engine(symbols or {"main": 0x4400}, stdout=out)
    return engine, out


# ─── help ─────────────────────

class TestNameList:
    def test_single_row(self):
        assert name_list(["read", "help", "opt", "="]) == [
            "    =     help  opt   read  "
        ]

    def test_column_major(self):
        names = [c * 20 for c in "abcde"]
        pad = "  "
        assert name_list(names) == [
            "    " + "a" * 20 + pad + "c" * 20 + pad + "e" * 20 + pad,
            "    " + "b" * 20 + pad + "d" * 20 + pad,
        ]

    def test_sorted_case_insensitively(self):
        lines = name_list(["beta", "Alpha", "gamma"])
        assert lines[0].split() == ["Alpha", "beta", "gamma"]

    def test_empty(self):
        assert name_list([]) == []

    def test_capped(self):
        names = [f"n{i:03d}" for i in range(200)]
        words = " ".join(name_list(names)).split()
        assert len(words) == HELP_MAX_NAMES


class TestHelp:
    def test_overview(self):
        engine, out = _engine()
        engine.process_command("help")
        text = out.getvalue()
        assert text.startswith("Available commands:\n")
        assert "\nAvailable options:\n    color  \n\n" in text
        assert text.endswith('Type "help <topic>" for more information.\n'
                             "Press Ctrl+D to quit.\n")

    def test_command_topic(self):
        engine, out = _engine()
        engine.process_command("help READ")
        assert out.getvalue() == ("COMMAND: read\n"
                                  "read <filename>\n"
                                  "    Read commands from a file and evaluate them.\n")

    def test_option_topic(self):
        engine, out = _engine()
        engine.process_command("help color")
        assert out.getvalue() == ("OPTION: color (boolean)\n"
                                  "Colorize disassembly output.\n")

    def test_command_and_option_with_same_name(self):
        engine, out = _engine()
        engine.register_option(Option("read", OptionType.TEXT, "Read option.\n"))
        engine.process_command("help read")
        assert out.getvalue() == ("COMMAND: read\n"
                                  "read <filename>\n"
                                  "    Read commands from a file and evaluate them.\n"
                                  "\n"
                                  "OPTION: read (text)\n"
                                  "Read option.\n")

    def test_unknown_topic(self, caplog):
        engine, out = _engine()
        assert engine.process_command("help zzz") is True
        assert "help: unknown command: zzz" in caplog.text
        assert out.getvalue() == ""


# ─── opt ─────────────────────

class TestOpt:
    def test_list_all_in_registry_order(self):
        engine, out = _engine()
        engine.register_option(Option("addr", OptionType.NUMERIC))
        engine.process_command("opt")
        assert out.getvalue() == (f"{'addr':>32} = 0x0 (0)\n"
                                  f"{'color':>32} = false\n")

    def test_set_and_show(self):
        engine, out = _engine()
        engine.process_command("opt COLOR yes")
        assert engine.find_option("color").value is True
        engine.process_command("opt color")
        assert out.getvalue() == f"{'color':>32} = true\n"

    def test_numeric_uses_symbols(self):
        engine, out = _engine()
        addr = engine.register_option(Option("addr", OptionType.NUMERIC))
        engine.process_command("opt addr main + 2")
        assert addr.value == 0x4402

    def test_numeric_parse_failure(self, caplog):
        engine, out = _engine()
        addr = engine.register_option(Option("addr", OptionType.NUMERIC, value=7))
        assert engine.process_command("opt addr 1+") is True
        assert addr.value == 7
        assert "syntax error at end of expression" in caplog.text
        assert "bad address expression: 1+" in caplog.text
        assert "opt: can't parse option: 1+" in caplog.text

    def test_text_takes_raw_remainder(self):
        engine, out = _engine()
        prog = engine.register_option(Option("prog", OptionType.TEXT))
        engine.process_command('opt prog "a b"  c')
        assert prog.value == '"a b"  c'

    def test_unknown_option(self, caplog):
        engine, out = _engine()
        engine.process_command("opt nosuch 1")
        assert "opt: no such option: nosuch" in caplog.text


# ─── read / = ─────────────────────

class TestRead:
    def test_requires_filename(self, caplog):
        engine, out = _engine()
        engine.process_command("read")
        assert "read: filename must be specified" in caplog.text

    def test_runs_script(self, tmp_path):
        engine, out = _engine()
        script = tmp_path / "colors.cmd"
        script.write_text("# turn colour on\nopt color on\n= main\n")
        engine.process_command(f'read "{script}"')
        assert engine.find_option("color").value is True
        assert out.getvalue() == "0x4400 (17408)\n"

    def test_failure_does_not_fail_the_read_line(self, tmp_path, caplog):
        engine, out = _engine()
        script = tmp_path / "bad.cmd"
        script.write_text("nonsense\n")
        assert engine.process_command(f"read {script}") is True
        assert "unknown command: nonsense" in caplog.text
        assert "(line 1)" in caplog.text


class TestEval:
    def test_prints_hex_and_decimal(self):
        engine, out = _engine()
        engine.process_command("= 2+3*4")
        engine.process_command("= -1")
        assert out.getvalue() == "0xe (14)\n0xffffffff (-1)\n"

    def test_requires_expression(self, caplog):
        engine, out = _engine()
        engine.process_command("=")
        assert "=: expression required" in caplog.text
