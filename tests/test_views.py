"""Tests for AuthorizedView."""

import logging

import pytest

from authbind.core.errors import ArgumentError
from authbind.session import SessionInitNotifier, session_scope
from authbind.toolkit import Navigator
from authbind.views import AuthorizedView, ParseError


class OrderView(AuthorizedView[int]):
    def __init__(self, allowed_orders):
        super().__init__()
        self.allowed_orders = allowed_orders
        self.shown = []
        self.refused = []

    def parse(self, parameters):
        if parameters == "none":
            return None
        try:
            return int(parameters)
        except ValueError as e:
            raise ParseError(f"not an order id: {parameters!r}") from e

    def check_authorization(self, value):
        return value in self.allowed_orders

    def on_successful_authorization(self, value):
        self.shown.append(value)

    def on_failed_authorization(self, value):
        self.refused.append(value)


class PlainView:
    def __init__(self):
        self.entered = 0

    def enter(self, parameters):
        self.entered += 1


@pytest.fixture
def navigator():
    navigator = Navigator()
    navigator.add_view("denied", PlainView())
    navigator.add_view("bad", PlainView())
    return navigator


@pytest.fixture
def order_view(navigator):
    view = OrderView(allowed_orders={1, 2})
    view.permission_denied_location = "denied"
    view.bad_params_location = "bad"
    navigator.add_view("order", view)
    with session_scope(SessionInitNotifier().open_session(navigator)):
        yield view


def test_granted_value_is_shown(navigator, order_view):
    navigator.navigate_to("order/2")
    assert order_view.shown == [2]
    assert navigator.get_state() == "order/2"


def test_denied_value_redirects(navigator, order_view):
    navigator.navigate_to("order/9")
    assert order_view.refused == [9]
    assert order_view.shown == []
    assert navigator.get_state() == "denied"


def test_unparsable_parameters_redirect(navigator, order_view, caplog):
    with caplog.at_level(logging.WARNING, logger="authbind.views"):
        navigator.navigate_to("order/abc")
    assert navigator.get_state() == "bad"
    assert "not an order id" in caplog.text


def test_parse_returning_none_is_rejected(navigator, order_view):
    with pytest.raises(ArgumentError, match="must not return None"):
        navigator.navigate_to("order/none")


def test_permission_denied_location_must_not_be_empty():
    view = OrderView(allowed_orders=set())
    with pytest.raises(ArgumentError):
        view.permission_denied_location = ""


def test_redirect_needs_navigator():
    view = OrderView(allowed_orders=set())
    with session_scope(SessionInitNotifier().open_session()):
        with pytest.raises(ArgumentError, match="needs a navigator"):
            view.enter("5")
