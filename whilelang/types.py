"""Runtime values for the While interpreter.

Every evaluation step produces exactly one of three values: an `Integer`,
a `Boolean`, or `Unit` (the result of a statement). Values are checked where
they are consumed; there is no implicit conversion between them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

I32_MIN = -2 ** 31
I32_MAX = 2 ** 31 - 1


@dataclass(frozen=True)
class Integer:
    value: int

    def __repr__(self) -> str:
        return f"Integer({self.value})"


@dataclass(frozen=True)
class Boolean:
    value: bool

    def __repr__(self) -> str:
        return f"Boolean({self.value})"


class UnitVal:
    """Marker object for the value of a statement."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'Unit'


Unit = UnitVal()

Value = Union[Integer, Boolean, UnitVal]


def type_name(value: Value) -> str:
    if isinstance(value, Integer):
        return 'Arith'
    if isinstance(value, Boolean):
        return 'Bool'
    return 'Statement'


def fits_i32(value: int) -> bool:
    return I32_MIN <= value <= I32_MAX
