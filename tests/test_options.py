"""Option value parsing and display."""

import pytest

from msp430_shell.config import TEXT_OPTION_SIZE
from msp430_shell.errors import ExpressionError
from msp430_shell.options import format_option, parse_boolean, parse_option
from msp430_shell.registry import Option, OptionType


class TestBoolean:
    @pytest.mark.parametrize("word", ["1", "9", "42", "true", "t", "yes", "y", "on", "onward"])
    def test_truthy(self, word):
        assert parse_boolean(word) is True

    @pytest.mark.parametrize("word", ["0", "01", "false", "no", "off", "o", "", "True", "YES", "ON"])
    def test_falsy(self, word):
        assert parse_boolean(word) is False

    def test_parse_into_option(self):
        opt = Option("color", OptionType.BOOLEAN)
        parse_option(opt, "on")
        assert opt.value is True
        parse_option(opt, "garbage")
        assert opt.value is False


class TestNumeric:
    def test_expression_value(self):
        opt = Option("addr", OptionType.NUMERIC)
        parse_option(opt, "main + 0x10", {"main": 0x4400}.get)
        assert opt.value == 0x4410

    def test_bad_expression_leaves_value(self):
        opt = Option("addr", OptionType.NUMERIC, value=5)
        with pytest.raises(ExpressionError):
            parse_option(opt, "1+")
        assert opt.value == 5


class TestText:
    def test_copied_verbatim(self):
        opt = Option("prog", OptionType.TEXT)
        parse_option(opt, '"quoted" text')
        assert opt.value == '"quoted" text'

    def test_silently_truncated(self):
        opt = Option("prog", OptionType.TEXT)
        parse_option(opt, "x" * 500)
        assert opt.value == "x" * (TEXT_OPTION_SIZE - 1)


class TestFormat:
    def test_boolean(self):
        opt = Option("color", OptionType.BOOLEAN, value=True)
        assert format_option(opt) == " " * 27 + "color = true"

    def test_numeric_shows_hex_and_decimal(self):
        assert format_option(Option("n", OptionType.NUMERIC, value=255)).endswith("n = 0xff (255)")
        assert format_option(Option("n", OptionType.NUMERIC, value=-1)).endswith("n = 0xffffffff (-1)")

    def test_text(self):
        opt = Option("prog", OptionType.TEXT, value="fw.elf")
        assert format_option(opt) == f"{'prog':>32} = fw.elf"
