"""Tests for the session-scoped AuthorizationState."""

import pytest

from authbind.core.authorizer import Authorizer
from authbind.core.errors import ArgumentError, InitializationError, IntegrityError, TamperError
from authbind.core.registry import AuthorizerRegistry
from authbind.core.state import STATE_ATTRIBUTE, AuthorizationState
from authbind.session import UISession
from authbind.toolkit import Button, ListContainer
from grants import Clearance


class RoleOnlyAuthorizer(Authorizer):
    """Plain authorizer without filter support."""

    @property
    def permission_type(self):
        return str

    def is_granted(self, permission):
        return permission == "user"


@pytest.fixture
def state(authorizers):
    return AuthorizationState(AuthorizerRegistry(authorizers))


def test_bind_evaluates_immediately(state):
    granted = Button("granted")
    denied = Button("denied")

    state.bind_component(granted, frozenset({"user", Clearance.NON}))
    state.bind_component(denied, frozenset({"user", Clearance.SECRET}))

    assert granted.visible is True
    assert denied.visible is False
    assert state.shadow_visibility(granted) is True
    assert state.shadow_visibility(denied) is False


def test_rebind_replaces_permissions(state):
    button = Button()
    state.bind_component(button, frozenset({"admin"}))
    assert button.visible is False

    state.bind_component(button, frozenset({"user"}))
    assert button.visible is True
    assert state.permissions_for(button) == frozenset({"user"})


def test_bind_is_idempotent(state):
    button = Button()
    state.bind_component(button, frozenset({"user", Clearance.SECRET}))
    first = button.visible
    state.bind_component(button, frozenset({"user", Clearance.SECRET}))
    assert button.visible is first


def test_unbind_keeps_visibility_and_drops_shadow(state):
    button = Button()
    state.bind_component(button, frozenset({"admin"}))

    assert state.unbind_component(button) is True
    assert button.visible is False
    assert state.shadow_visibility(button) is None
    assert state.unbind_component(button) is False


def test_apply_updates_visibility_and_shadow(state, user):
    button = Button()
    state.bind_component(button, frozenset({"user", Clearance.SECRET}))

    user.clearance = Clearance.SECRET
    state.apply_components(state.components_to_permissions)

    assert button.visible is True
    assert state.shadow_visibility(button) is True


def test_tampering_fails_before_any_mutation(state, user):
    first = Button("first")
    tampered = Button("tampered")
    state.bind_component(first, frozenset({Clearance.SECRET}))
    state.bind_component(tampered, frozenset({"user"}))

    tampered.visible = False
    user.clearance = Clearance.SECRET

    with pytest.raises(TamperError) as excinfo:
        state.apply_components(state.components_to_permissions)

    assert excinfo.value.component is tampered
    assert excinfo.value.expected is True
    assert excinfo.value.observed is False
    # nothing in the batch was re-evaluated
    assert first.visible is False


def test_unbound_component_in_batch_is_vacuously_granted(state):
    stray = Button(visible=False)
    state.apply_components({stray: None})
    assert stray.visible is True
    assert state.shadow_visibility(stray) is None


def test_view_binding(state, user):
    view = object()
    assert state.is_view_granted(view) is True

    state.bind_view(view, frozenset({"admin"}))
    assert state.is_view_granted(view) is False

    user.roles.add("admin")
    assert state.is_view_granted(view) is True

    assert state.unbind_view(view) is True
    assert state.unbind_view(view) is False


def test_bind_data_filters_immediately(state, user):
    container = ListContainer([Clearance.NON, Clearance.SECRET, Clearance.TOP_SECRET])

    state.bind_data(Clearance, container, integrity_check=True)
    assert container.visible_items() == [Clearance.NON]

    user.clearance = Clearance.SECRET
    state.apply_data()
    assert container.visible_items() == [Clearance.NON, Clearance.SECRET]


def test_bind_data_integrity_check(state):
    container = ListContainer([Clearance.NON, "user"])
    with pytest.raises(IntegrityError) as excinfo:
        state.bind_data(Clearance, container, integrity_check=True)
    assert excinfo.value.item == "user"
    assert state.data_bindings == {}


def test_bind_data_without_integrity_check(state):
    container = ListContainer(["user", "admin"])
    state.bind_data(str, container, integrity_check=False)
    assert container.visible_items() == ["user"]


def test_bind_data_requires_filter_authorizer():
    state = AuthorizationState(AuthorizerRegistry([RoleOnlyAuthorizer()]))
    with pytest.raises(ArgumentError, match="FilterAuthorizer"):
        state.bind_data(str, ListContainer(["user"]), integrity_check=True)


def test_bind_data_requires_type(state):
    with pytest.raises(ArgumentError):
        state.bind_data("str", ListContainer(), integrity_check=False)


def test_unbind_data(state):
    container = ListContainer(["user"])
    state.bind_data(str, container, integrity_check=True)
    assert state.unbind_data(container) is True
    assert state.unbind_data(container) is False


def test_state_is_attached_to_session(authorizers):
    session = UISession()
    with pytest.raises(InitializationError):
        AuthorizationState.for_session(session)

    state = AuthorizationState.init(session, AuthorizerRegistry(authorizers))
    assert session.attributes[STATE_ATTRIBUTE] is state
    assert AuthorizationState.for_session(session) is state


def test_view_change_listener_registered_once(state):
    class RecordingNavigator:
        def __init__(self):
            self.listeners = []

        def add_view_change_listener(self, listener):
            self.listeners.append(listener)

    navigator = RecordingNavigator()
    state.ensure_view_change_listener(navigator)
    state.ensure_view_change_listener(navigator)
    state.ensure_view_change_listener(None)
    assert len(navigator.listeners) == 1
