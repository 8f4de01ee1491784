"""
Pytest fixtures for the test suite.

Most tests run inside a freshly opened session of a started ``Authorization``
whose authorizers read the mutable ``user`` fixture, so a test can change the
user's grants and re-apply.
"""
from __future__ import annotations

import pytest

from authbind.core.authorizer import InMemoryAuthorizer
from authbind.core.engine import Authorization
from authbind.session import SessionInitNotifier, session_scope
from grants import Clearance, User


@pytest.fixture
def user():
    return User(roles={"user"})


@pytest.fixture
def role_authorizer(user):
    return InMemoryAuthorizer.of(str, lambda role: role in user.roles)


@pytest.fixture
def clearance_authorizer(user):
    return InMemoryAuthorizer.of(Clearance, lambda clearance: user.clearance.value >= clearance.value)


@pytest.fixture
def authorizers(role_authorizer, clearance_authorizer):
    return {role_authorizer, clearance_authorizer}


@pytest.fixture
def notifier():
    return SessionInitNotifier()


@pytest.fixture
def authorization(notifier, authorizers):
    """A started engine with the role and clearance authorizers."""
    authorization = Authorization(notifier)
    authorization.start(authorizers)
    return authorization


@pytest.fixture
def session(notifier, authorization):
    """Open a session after start() and make it current for the test."""
    with session_scope(notifier.open_session()) as session:
        yield session
