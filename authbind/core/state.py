"""
Session-scoped authorization state.

Holds the bindings of one session (components, views, data containers) and,
for every bound component, the visibility this module itself last wrote (the
"shadow" value). Any difference between a component's observed visibility and
its shadow at apply time means something outside the engine changed it, and
the whole apply fails with TamperError.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from authbind.host import Component, DataContainer, NavigatorFacade, View
from authbind.session import UISession, get_current_session

from .authorizer import FilterAuthorizer, supports_filter
from .errors import ArgumentError, InitializationError, IntegrityError, TamperError
from .registry import AuthorizerRegistry

logger = logging.getLogger(__name__)

STATE_ATTRIBUTE = "authbind.authorization_state"

Permissions = frozenset[Any]


class AuthorizationState:
    """
    Bindings and shadow visibility for one session.

    Not thread-safe: the host is expected to serialize access per session.
    """

    def __init__(self, registry: AuthorizerRegistry) -> None:
        self._registry = registry
        self._components: dict[Component, Permissions] = {}
        self._shadow: dict[Component, bool] = {}
        self._views: dict[View, Permissions] = {}
        self._data: dict[DataContainer, type] = {}
        self._view_listener_registered = False

    # ---- Session attachment ------------------------------------------------------------

    @classmethod
    def init(
        cls, session: UISession, registry: AuthorizerRegistry, key: str = STATE_ATTRIBUTE
    ) -> AuthorizationState:
        """Create a fresh state and attach it to ``session`` under ``key``."""
        state = cls(registry)
        session.attributes[key] = state
        logger.debug("Authorization state initialized session_id=%s", session.session_id)
        return state

    @classmethod
    def for_session(cls, session: UISession, key: str = STATE_ATTRIBUTE) -> AuthorizationState:
        state = session.attributes.get(key)
        if state is None:
            raise InitializationError(
                f"session {session.session_id} has no authorization state; "
                "was it opened before Authorization.start()?"
            )
        return state

    @classmethod
    def current(cls, key: str = STATE_ATTRIBUTE) -> AuthorizationState:
        return cls.for_session(get_current_session(), key)

    @property
    def registry(self) -> AuthorizerRegistry:
        return self._registry

    # ---- Components ----------------------------------------------------------------

    @property
    def components_to_permissions(self) -> dict[Component, Permissions]:
        return dict(self._components)

    def permissions_for(self, component: Component) -> Permissions | None:
        return self._components.get(component)

    def shadow_visibility(self, component: Component) -> bool | None:
        return self._shadow.get(component)

    def bind_component(self, component: Component, permissions: Permissions) -> None:
        """Replace the component's permissions and evaluate them right away."""
        visible = self._registry.all_granted(permissions)
        self._components[component] = permissions
        component.visible = visible
        self._shadow[component] = visible
        logger.debug("Bound component=%r permissions=%d visible=%s", component, len(permissions), visible)

    def unbind_component(self, component: Component) -> bool:
        """Forget the component's binding; its visibility is left as it is."""
        self._shadow.pop(component, None)
        return self._components.pop(component, None) is not None

    def apply_components(self, components_to_permissions: Mapping[Component, Permissions | None]) -> None:
        """
        Re-evaluate the given components.

        Every bound component in the batch is checked against its shadow value
        before anything is changed. A ``None`` permission set means the
        component is not bound and is treated as having no requirements.
        """

        for component in components_to_permissions:
            expected = self._shadow.get(component)
            if expected is None:
                continue
            observed = bool(component.visible)
            if observed != expected:
                logger.warning("Visibility tampering detected component=%r expected=%s", component, expected)
                raise TamperError(component, expected, observed)

        for component, permissions in components_to_permissions.items():
            visible = self._registry.all_granted(permissions)
            component.visible = visible
            if component in self._components:
                self._shadow[component] = visible

        logger.debug("Applied components count=%d", len(components_to_permissions))

    # ---- Views --------------------------------------------------------------------

    @property
    def views_to_permissions(self) -> dict[View, Permissions]:
        return dict(self._views)

    def bind_view(self, view: View, permissions: Permissions) -> None:
        self._views[view] = permissions

    def unbind_view(self, view: View) -> bool:
        return self._views.pop(view, None) is not None

    def is_view_granted(self, view: View) -> bool:
        """Views without a binding are always granted."""
        return self._registry.all_granted(self._views.get(view))

    def ensure_view_change_listener(self, navigator: NavigatorFacade | None) -> None:
        """Register the view access check on ``navigator`` once per session."""
        if self._view_listener_registered or navigator is None:
            return
        navigator.add_view_change_listener(self.is_view_granted)
        self._view_listener_registered = True

    # ---- Data -----------------------------------------------------------------------

    @property
    def data_bindings(self) -> dict[DataContainer, type]:
        return dict(self._data)

    def bind_data(self, item_type: type, container: DataContainer, integrity_check: bool) -> None:
        if not isinstance(item_type, type):
            raise ArgumentError(f"item_type must be a type, got {item_type!r}")

        if integrity_check:
            for item in container.items:
                if not isinstance(item, item_type):
                    raise IntegrityError(item_type, item)

        authorizer = self._filter_authorizer(item_type)
        self._data[container] = item_type
        container.set_filter(authorizer.as_filter())
        logger.debug("Bound data container=%r item_type=%s", container, item_type.__qualname__)

    def unbind_data(self, container: DataContainer) -> bool:
        return self._data.pop(container, None) is not None

    def apply_data(self) -> None:
        """Push a freshly derived filter into every bound container."""
        for container, item_type in self._data.items():
            container.set_filter(self._filter_authorizer(item_type).as_filter())

    def _filter_authorizer(self, item_type: type) -> FilterAuthorizer[Any, Any]:
        authorizer = self._registry.resolve(item_type)
        if not supports_filter(authorizer):
            raise ArgumentError(
                f"{authorizer!r} cannot filter items of {item_type!r}; data bindings need a FilterAuthorizer"
            )
        return authorizer
