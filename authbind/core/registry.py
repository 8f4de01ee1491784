"""
Authorizer registry: maps a permission's runtime type to exactly one authorizer.

Resolution works in two phases:

1. Exact lookup in the resolved table (registered types plus every type
   resolved so far).
2. Otherwise a scan over the registered authorizers:
     - requested type is an interface (abstract class or protocol): an
       authorizer matches when its declared type is a subclass of it;
     - requested type is concrete: an authorizer matches when its declared
       type is the requested type or one of its ancestors.
   Zero matches -> ResolutionError, two or more -> ConflictError, exactly one
   is memoized under the requested type.

The registry is immutable after construction except for that memo table and
may be shared by many sessions.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import inspect
import logging
import threading
from typing import Any

from . import checks
from .authorizer import Authorizer
from .errors import ArgumentError, ConflictError, ResolutionError

logger = logging.getLogger(__name__)


def _is_interface(permission_type: type) -> bool:
    if getattr(permission_type, "_is_protocol", False):
        return True
    return inspect.isabstract(permission_type)


def _is_subclass(candidate: type, parent: type) -> bool:
    try:
        return issubclass(candidate, parent)
    except TypeError as exc:
        # Non runtime-checkable protocols refuse issubclass().
        raise ArgumentError(f"cannot match authorizers against {parent!r}: {exc}") from exc


class AuthorizerRegistry:
    """
    Index of authorizers keyed by declared permission type.

    Usage:
        registry = AuthorizerRegistry({role_authorizer, clearance_authorizer})
        registry.resolve(type(permission)).is_granted(permission)
    """

    def __init__(self, authorizers: Iterable[Authorizer[Any]]) -> None:
        registered: dict[type, Authorizer[Any]] = {}
        for authorizer in checks.non_empty(authorizers, "authorizers"):
            permission_type = authorizer.permission_type
            if permission_type is None:
                raise ArgumentError(f"{authorizer!r} declares no permission type")
            if not isinstance(permission_type, type):
                raise ArgumentError(f"{authorizer!r} declares {permission_type!r}, which is not a type")

            already_registered = registered.get(permission_type)
            if already_registered is authorizer:
                continue
            if already_registered is not None:
                raise ConflictError(already_registered, authorizer, permission_type)
            registered[permission_type] = authorizer

        self._registered = registered
        self._resolved: dict[type, Authorizer[Any]] = dict(registered)
        self._lock = threading.Lock()

    @property
    def registered(self) -> Mapping[type, Authorizer[Any]]:
        """Authorizers keyed by their declared permission type (no resolved entries)."""
        return dict(self._registered)

    def resolve(self, permission_type: type) -> Authorizer[Any]:
        """Return the single authorizer responsible for ``permission_type``."""

        checks.require(permission_type, "permission_type")
        if not isinstance(permission_type, type):
            raise ArgumentError(f"permission_type must be a type, got {permission_type!r}")

        authorizer = self._resolved.get(permission_type)
        if authorizer is not None:
            return authorizer

        interface = _is_interface(permission_type)
        match: Authorizer[Any] | None = None
        for declared_type, candidate in self._registered.items():
            if interface:
                matches = _is_subclass(declared_type, permission_type)
            else:
                matches = _is_subclass(permission_type, declared_type)
            if not matches:
                continue
            if match is not None:
                raise ConflictError(match, candidate, permission_type)
            match = candidate

        if match is None:
            raise ResolutionError(permission_type)

        with self._lock:
            # Another session may have resolved the same type meanwhile; both
            # computed the same answer, so keeping the first is fine.
            match = self._resolved.setdefault(permission_type, match)
        logger.debug("Resolved authorizer permission_type=%s authorizer=%r", permission_type.__qualname__, match)
        return match

    def is_granted(self, permission: Any) -> bool:
        """Evaluate a single permission value with its resolved authorizer."""
        checks.require(permission, "permission")
        return bool(self.resolve(type(permission)).is_granted(permission))

    def all_granted(self, permissions: Iterable[Any] | None) -> bool:
        """
        Conjunction over ``permissions``.

        ``None`` means "no permissions bound" and is vacuously granted.
        """

        if permissions is None:
            return True
        return all(self.is_granted(permission) for permission in permissions)
