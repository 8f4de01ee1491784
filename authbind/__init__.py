"""
Session-scoped authorization for UI components, views and data containers.

Bind entities to permissions, then re-apply whenever the user's grants change.
See ``authbind.core.engine.Authorization`` for the entry point.
"""

from .core import (
    ArgumentError,
    AuthorizationError,
    Authorizer,
    AuthorizerRegistry,
    ConflictError,
    FilterAuthorizer,
    InMemoryAuthorizer,
    InitializationError,
    IntegrityError,
    ResolutionError,
    TamperError,
)
from .core.engine import ApplyEngine, Authorization
from .core.state import AuthorizationState
from .main import create_authorization
from .session import SessionInitNotifier, UISession, session_scope
from .toolkit import Button, ListContainer, Navigator
from .views import AuthorizedView, ParseError

__all__ = [
    "ApplyEngine",
    "ArgumentError",
    "AuthorizedView",
    "Authorization",
    "AuthorizationError",
    "AuthorizationState",
    "Authorizer",
    "AuthorizerRegistry",
    "Button",
    "ConflictError",
    "FilterAuthorizer",
    "InMemoryAuthorizer",
    "InitializationError",
    "IntegrityError",
    "ListContainer",
    "Navigator",
    "ParseError",
    "ResolutionError",
    "SessionInitNotifier",
    "TamperError",
    "UISession",
    "create_authorization",
    "session_scope",
]
