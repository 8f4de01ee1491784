"""Argument and state checks shared by the engine modules."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

from .errors import ArgumentError, InitializationError

T = TypeVar("T")


def require(value: T | None, name: str) -> T:
    if value is None:
        raise ArgumentError(f"{name} must not be None")
    return value


def state(condition: bool, message: str) -> None:
    if not condition:
        raise InitializationError(message)


def non_empty(values: Iterable[T] | None, name: str) -> tuple[T, ...]:
    """Return ``values`` as a tuple; reject None, an empty iterable, or None members."""

    if values is None:
        raise ArgumentError(f"{name} must not be None")
    result = tuple(values)
    if not result:
        raise ArgumentError(f"{name} must not be empty")
    for value in result:
        if value is None:
            raise ArgumentError(f"{name} must not contain None")
    return result


def non_empty_set(values: Iterable[T] | None, name: str) -> frozenset[T]:
    return frozenset(non_empty(values, name))
