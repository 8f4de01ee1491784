"""Error kinds raised by the authorization engine.

All of them signal programming defects (misconfiguration, misuse of the
engine, out-of-band visibility changes). None of them are retried.
"""

from __future__ import annotations

from typing import Any


class AuthorizationError(Exception):
    """Base class for every error raised by authbind."""


class InitializationError(AuthorizationError, RuntimeError):
    """Raised when the engine is started twice or used before start()."""


class ArgumentError(AuthorizationError, ValueError):
    """Raised for missing, empty or malformed required arguments."""


class ConflictError(AuthorizationError):
    """Raised when two authorizers match the same permission type."""

    def __init__(self, first: Any, second: Any, permission_type: type) -> None:
        super().__init__(
            f"conflicting authorizers: {first!r} and {second!r} both match {permission_type!r}"
        )
        self.first = first
        self.second = second
        self.permission_type = permission_type


class ResolutionError(AuthorizationError, LookupError):
    """Raised when no registered authorizer matches a permission type."""

    def __init__(self, permission_type: type) -> None:
        super().__init__(f"no authorizer found for {permission_type!r}")
        self.permission_type = permission_type


class IntegrityError(AuthorizationError, TypeError):
    """Raised when a data container holds an item of the wrong type."""

    def __init__(self, item_type: type, item: Any) -> None:
        super().__init__(
            f"item of type {type(item)!r} found in container declared for {item_type!r}"
        )
        self.item_type = item_type
        self.item = item


class TamperError(AuthorizationError, RuntimeError):
    """
    Raised when a bound component's visibility was changed behind the engine's back.

    Visibility of bound components must only be changed through apply().
    """

    def __init__(self, component: Any, expected: bool, observed: bool) -> None:
        super().__init__(
            f"visibility of {component!r} was changed outside of the authorization engine "
            f"(expected {expected}, found {observed}); use apply() instead of setting it directly"
        )
        self.component = component
        self.expected = expected
        self.observed = observed
