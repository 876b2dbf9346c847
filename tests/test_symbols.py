"""Symbol table used as the expression evaluator's name resolver."""

from msp430_shell import addr_exp
from msp430_shell.symbols import SymbolTable


def test_get_set_delete():
    table = SymbolTable({"main": 0x4400})
    assert table.get("main") == 0x4400
    assert table.get("Main") is None
    table.set("isr", 0xFFE0)
    assert table.get("isr") == 0xFFE0
    assert table.delete("isr") is True
    assert table.delete("isr") is False
    assert table.get("isr") is None


def test_get_is_a_resolver():
    table = SymbolTable({"main": 0x4400})
    assert addr_exp("main + 0x10", table.get) == 0x4410
