"""
In-process symbol table.

The shell only needs one capability from a symbol table: look a name up
and get its address back, or None. SymbolTable.get has exactly that shape
and can be handed to the engine or to addr_exp() directly. Names are
case-sensitive.
"""

from __future__ import annotations
from typing import Dict, Optional


class SymbolTable:
    """Name → address map."""

    def __init__(self, symbols: Optional[Dict[str, int]] = None):
        self._symbols: Dict[str, int] = dict(symbols or {})

    def get(self, name: str) -> Optional[int]:
        return self._symbols.get(name)

    def set(self, name: str, value: int):
        self._symbols[name] = value

    def delete(self, name: str) -> bool:
        return self._symbols.pop(name, None) is not None
