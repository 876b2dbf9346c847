"""Command-line entry point tests."""

import logging

import pytest

from mspsh import main


@pytest.fixture(autouse=True)
def restore_logging():
    """main() reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestMain:
    def test_command(self, capsys):
        assert main(["-c", "= 1+1"]) == 0
        assert capsys.readouterr().out == "0x2 (2)\n"

    def test_define_symbol(self, capsys):
        assert main(["-D", "main=0x4400", "-c", "= main+1"]) == 0
        assert capsys.readouterr().out == "0x4401 (17409)\n"

    def test_define_with_expression_value(self, capsys):
        assert main(["-D", "base=0x200", "-D", "top=base*2", "-c", "= top"]) == 0
        assert capsys.readouterr().out == "0x400 (1024)\n"

    def test_bad_define(self, capsys):
        assert main(["-D", "novalue", "-c", "= 1"]) == 1
        assert "NAME=VALUE" in capsys.readouterr().err

    def test_bad_define_expression(self, capsys):
        assert main(["-D", "x=1+", "-c", "= 1"]) == 1
        err = capsys.readouterr().err
        assert "syntax error at end of expression" in err
        assert "bad address expression: 1+" in err

    def test_unknown_command_fails(self, capsys):
        assert main(["-c", "bogus"]) == 1
        assert 'unknown command: bogus (try "help")' in capsys.readouterr().err

    def test_script(self, tmp_path, capsys):
        script = tmp_path / "run.cmd"
        script.write_text("# comment\n= 0x10\n")
        assert main([str(script), "-c", "= 2"]) == 0
        assert capsys.readouterr().out == "0x10 (16)\n0x2 (2)\n"

    def test_failing_script_stops(self, tmp_path, capsys):
        script = tmp_path / "run.cmd"
        script.write_text("\n\nnope\n= 1\n")
        assert main([str(script), "-c", "= 2"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "(line 3)" in captured.err

    def test_log_file(self, tmp_path, capsys):
        log_file = tmp_path / "logs" / "mspsh.log"
        assert main(["--log-file", str(log_file), "-c", "bogus"]) == 1
        assert "unknown command: bogus" in log_file.read_text()
