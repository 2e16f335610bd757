"""Append-only reading histories with kind-specific numeric semantics."""

from __future__ import annotations

import math
import operator
import re
import struct
from dataclasses import dataclass
from functools import reduce
from typing import Callable, Generic, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar("T", int, float)

_INT_PATTERN = re.compile(r"[+-]?\d+")
_FLOAT_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def _to_float32(value: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError as exc:
        raise ValueError(f"{value!r} does not fit a 32-bit float") from exc


def _parse_int32(text: str) -> int:
    candidate = text.strip()
    if not _INT_PATTERN.fullmatch(candidate):
        raise ValueError(f"{text!r} is not an integer")
    value = int(candidate)
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError(f"{text!r} does not fit a 32-bit integer")
    return value


def _parse_float32(text: str) -> float:
    candidate = text.strip()
    if not _FLOAT_PATTERN.fullmatch(candidate):
        raise ValueError(f"{text!r} is not a decimal number")
    return _to_float32(float(candidate))


def _truncating_mean(total: int, count: int) -> int:
    quotient = abs(total) // count
    return quotient if total >= 0 else -quotient


def _float32_add(total: float, value: float) -> float:
    try:
        return _to_float32(total + value)
    except ValueError:
        return math.copysign(math.inf, total + value)


def _float32_mean(total: float, count: int) -> float:
    return _to_float32(total / count)


@dataclass(frozen=True)
class NumericType(Generic[T]):
    """Arithmetic rules for the values held by a history."""

    name: str
    zero: T
    parse: Callable[[str], T]
    add: Callable[[T, T], T]
    divide: Callable[[T, int], T]


INT32: NumericType[int] = NumericType("int32", 0, _parse_int32, operator.add, _truncating_mean)
FLOAT32: NumericType[float] = NumericType("float32", 0.0, _parse_float32, _float32_add, _float32_mean)


class ReadingHistory(Generic[T]):
    """Ordered sequence of readings; duplicates allowed, no upper bound."""

    def __init__(self, numeric: NumericType[T]) -> None:
        self.numeric = numeric
        self._values: List[T] = []

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[T]:
        return iter(self._values)

    def values(self) -> Tuple[T, ...]:
        return tuple(self._values)

    def append(self, value: T) -> None:
        self._values.append(value)

    def is_empty(self) -> bool:
        return not self._values

    def mean(self) -> T:
        """Return the arithmetic mean, or the numeric zero when empty.

        Integer histories truncate toward zero; floating histories keep the
        fractional part, with every partial sum rounded to 32-bit precision.
        """
        if not self._values:
            return self.numeric.zero
        total = reduce(self.numeric.add, self._values, self.numeric.zero)
        return self.numeric.divide(total, len(self._values))

    def remove_smallest(self) -> Optional[T]:
        """Drop the earliest minimum-valued reading when two or more exist.

        Returns the removed value, or ``None`` when the history was left
        untouched.
        """
        if len(self._values) < 2:
            return None
        index = min(range(len(self._values)), key=self._values.__getitem__)
        return self._values.pop(index)
