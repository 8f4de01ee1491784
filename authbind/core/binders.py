"""Fluent builders returned by ``Authorization.bind_*``."""

from __future__ import annotations

from typing import Any

from authbind.host import Component, View

from . import checks
from .state import AuthorizationState


class ComponentBind:
    """
    Binds one or more components to the permissions passed to ``to()``.

    Calling ``to()`` again on the same builder replaces the previous binding.
    """

    def __init__(self, components: tuple[Component, ...], state: AuthorizationState) -> None:
        self._components = checks.non_empty(components, "components")
        self._state = state

    def to(self, *permissions: Any) -> None:
        required = checks.non_empty_set(permissions, "permissions")
        for component in self._components:
            self._state.bind_component(component, required)


class ViewBind:
    """Binds one or more views; entering a bound view requires all permissions."""

    def __init__(self, views: tuple[View, ...], state: AuthorizationState) -> None:
        self._views = checks.non_empty(views, "views")
        self._state = state

    def to(self, *permissions: Any) -> None:
        required = checks.non_empty_set(permissions, "permissions")
        for view in self._views:
            self._state.bind_view(view, required)
