"""
Authorizer resolution and errors.

The session-bound parts (``state``, ``binders``, ``engine``) are imported from
their modules directly, or via the top-level ``authbind`` package.
"""

from .authorizer import Authorizer, FilterAuthorizer, InMemoryAuthorizer
from .errors import (
    ArgumentError,
    AuthorizationError,
    ConflictError,
    InitializationError,
    IntegrityError,
    ResolutionError,
    TamperError,
)
from .registry import AuthorizerRegistry

__all__ = [
    "Authorizer",
    "FilterAuthorizer",
    "InMemoryAuthorizer",
    "AuthorizerRegistry",
    "AuthorizationError",
    "ArgumentError",
    "ConflictError",
    "InitializationError",
    "IntegrityError",
    "ResolutionError",
    "TamperError",
]
