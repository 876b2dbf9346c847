"""
Command and option registries.

Both registries are ordered collections looked up by case-insensitive
exact name match. Registration prepends, so the most recently registered
entry comes first both in listings and in lookups: registering a second
entry under an existing name shadows the first one. No uniqueness check
is made.
"""

from __future__ import annotations
import enum
from dataclasses import dataclass, field
from typing import Callable, Generic, Iterator, List, Optional, TypeVar, Union

from .config import TEXT_OPTION_SIZE

__all__ = ['OptionType', 'Command', 'Option', 'Registry',
           'CommandRegistry', 'OptionRegistry']


class OptionType(enum.Enum):
    BOOLEAN = "boolean"
    NUMERIC = "numeric"
    TEXT = "text"

    def type_text(self) -> str:
        return self.value


OptionValue = Union[bool, int, str]

_DEFAULTS = {
    OptionType.BOOLEAN: False,
    OptionType.NUMERIC: 0,
    OptionType.TEXT: "",
}


@dataclass
class Command:
    """A named command.

    ``handler`` is called as ``handler(engine, cursor)`` with the cursor
    positioned on the first argument. It raises ShellError to report
    failure.
    """
    name: str
    handler: Callable
    help: str = ""


@dataclass
class Option:
    """A named, typed option variable.

    The value's kind is fixed by ``type``: booleans hold bool, numerics an
    int, text options a str of at most TEXT_OPTION_SIZE - 1 characters.
    """
    name: str
    type: OptionType
    help: str = ""
    value: Optional[OptionValue] = field(default=None)

    def __post_init__(self):
        if self.value is None:
            self.value = _DEFAULTS[self.type]
        elif self.type is OptionType.BOOLEAN:
            self.value = bool(self.value)
        elif self.type is OptionType.NUMERIC:
            self.value = int(self.value)
        else:
            self.value = str(self.value)[:TEXT_OPTION_SIZE - 1]


T = TypeVar('T', Command, Option)


class Registry(Generic[T]):
    """Ordered name → entry collection with first-hit lookup."""

    def __init__(self):
        self._entries: List[T] = []

    def register(self, entry: T) -> T:
        self._entries.insert(0, entry)
        return entry

    def find(self, name: str) -> Optional[T]:
        wanted = name.lower()
        for entry in self._entries:
            if entry.name.lower() == wanted:
                return entry
        return None

    def names(self) -> List[str]:
        return [entry.name for entry in self._entries]

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)


class CommandRegistry(Registry[Command]):
    def add(self, name: str, handler: Callable, help: str = "") -> Command:
        return self.register(Command(name, handler, help))


class OptionRegistry(Registry[Option]):
    def add(self, name: str, type: OptionType, help: str = "",
            value: Optional[OptionValue] = None) -> Option:
        return self.register(Option(name, type, help, value))
