"""
Authorizer contracts.

An authorizer decides whether a single permission value is granted. Each
authorizer declares the permission type it handles; the registry uses that
type to route a permission value to the right authorizer.

Authorizers that can also produce a filter (``FilterAuthorizer``) may be used
for data bindings, where every item of a container is its own permission.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")
F = TypeVar("F")


class Authorizer(ABC, Generic[T]):
    """Grant/deny decision for permission values of one type."""

    @property
    @abstractmethod
    def permission_type(self) -> type[T]:
        """The type of permission values this authorizer evaluates."""

    @abstractmethod
    def is_granted(self, permission: T) -> bool:
        ...


class FilterAuthorizer(Authorizer[T], Generic[T, F]):
    """Authorizer that can additionally express itself as a container filter."""

    @abstractmethod
    def as_filter(self) -> F:
        """Return a filter the data container understands (e.g. a predicate)."""


class InMemoryAuthorizer(FilterAuthorizer[T, Callable[[T], bool]]):
    """
    Filter-capable authorizer whose filter is its own ``is_granted``.

    Suitable for containers that filter items in memory, such as
    ``authbind.toolkit.ListContainer``.
    """

    def as_filter(self) -> Callable[[T], bool]:
        return self.is_granted

    @classmethod
    def of(cls, permission_type: type[T], predicate: Callable[[T], bool]) -> InMemoryAuthorizer[T]:
        """Build an authorizer from a permission type and a predicate."""
        return _PredicateAuthorizer(permission_type, predicate)


class _PredicateAuthorizer(InMemoryAuthorizer[T]):
    def __init__(self, permission_type: type[T], predicate: Callable[[T], bool]) -> None:
        self._permission_type = permission_type
        self._predicate = predicate

    @property
    def permission_type(self) -> type[T]:
        return self._permission_type

    def is_granted(self, permission: T) -> bool:
        return bool(self._predicate(permission))

    def __repr__(self) -> str:
        name = getattr(self._permission_type, "__qualname__", repr(self._permission_type))
        return f"InMemoryAuthorizer({name})"


def supports_filter(authorizer: Any) -> bool:
    return isinstance(authorizer, FilterAuthorizer)
