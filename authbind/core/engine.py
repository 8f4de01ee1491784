"""
Apply engine and the public ``Authorization`` facade.

``Authorization`` is created once by the hosting application and has an
explicit lifecycle: it must be started exactly once, and every other
operation fails with InitializationError until it has been. Starting it
subscribes to the session notifier so that each new session gets its own
``AuthorizationState``.

Usage:
    authorization = Authorization(notifier)
    authorization.start({role_authorizer, clearance_authorizer})

    with session_scope(notifier.open_session(navigator)):
        authorization.bind_component(button).to("user", Clearance.SECRET)
        ...
        authorization.apply_all()
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
import logging
from typing import Any, Union

from authbind.config import EngineConfig
from authbind.host import Component, DataContainer, NavigatorFacade, View
from authbind.session import SessionInitNotifier, UISession, current_session

from . import checks
from .authorizer import Authorizer
from .binders import ComponentBind, ViewBind
from .errors import ArgumentError, InitializationError
from .registry import AuthorizerRegistry
from .state import STATE_ATTRIBUTE, AuthorizationState, Permissions

logger = logging.getLogger(__name__)

NOT_INITIALIZED_ERROR_MESSAGE = "Authorization.start() must be called before this method"

AuthorizerSource = Union[Iterable[Authorizer[Any]], Callable[[], Iterable[Authorizer[Any]]]]
NavigatorSupplier = Callable[[], Union[NavigatorFacade, None]]


def _session_navigator() -> NavigatorFacade | None:
    session = current_session()
    return session.navigator if session is not None else None


class ApplyEngine:
    """Runs one apply cycle: components, then data, then the current view."""

    def __init__(self, navigator_supplier: NavigatorSupplier, reset_location: str = "") -> None:
        self._navigator_supplier = navigator_supplier
        self._reset_location = reset_location

    def apply_all(self, state: AuthorizationState) -> None:
        self._apply(state.components_to_permissions, state)

    def apply(self, state: AuthorizationState, components: Iterable[Component], strict: bool = False) -> None:
        """
        Apply only ``components``.

        A component without a binding is treated as having no permissions
        (and therefore granted) unless ``strict`` is set, in which case it is
        rejected before anything is evaluated.
        """

        bound = state.components_to_permissions
        components = tuple(components)
        if strict:
            unbound = [component for component in components if component not in bound]
            if unbound:
                raise ArgumentError(f"cannot apply unbound components: {unbound!r}")

        reduced: dict[Component, Permissions | None] = {component: bound.get(component) for component in components}
        self._apply(reduced, state)

    def _apply(self, components_to_permissions: Mapping[Component, Permissions | None], state: AuthorizationState) -> None:
        state.apply_components(components_to_permissions)
        state.apply_data()
        self.reevaluate_current_view()

    def reevaluate_current_view(self) -> None:
        """
        Navigate away from the current location and straight back.

        Re-entering the view makes the navigator run its view-change
        listeners again, so a view the user may no longer see is left.
        Nothing happens while the navigator has no current location, since
        there is no view to re-check. The navigator must accept
        ``reset_location`` (for ``authbind.toolkit.Navigator``, a view has to
        be registered under that name).
        """

        navigator = self._navigator_supplier()
        if navigator is None:
            return

        location = navigator.get_state()
        if location is None:
            return
        logger.debug("Re-evaluating view access location=%s", location)
        navigator.navigate_to(self._reset_location)
        navigator.navigate_to(location)


class Authorization:
    """Entry point for binding entities to permissions and applying them."""

    def __init__(
        self,
        notifier: SessionInitNotifier,
        navigator_supplier: NavigatorSupplier | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self._notifier = checks.require(notifier, "notifier")
        self._config = config or EngineConfig()
        self._navigator_supplier = navigator_supplier or _session_navigator
        self._engine = ApplyEngine(self._navigator_supplier, self._config.reset_location)
        self._started = False
        # Each engine keeps its own state in a session, so several engines can
        # share one notifier.
        self._state_key = f"{STATE_ATTRIBUTE}.{id(self)}"

    @property
    def started(self) -> bool:
        return self._started

    @property
    def config(self) -> EngineConfig:
        return self._config

    def start(self, authorizers: AuthorizerSource) -> None:
        """
        Start the engine with a fixed set of authorizers or a supplier of them.

        A fixed set yields one registry shared by every session. A supplier
        (any zero-argument callable) is called for each new session and gets
        a registry of its own.
        """

        checks.require(authorizers, "authorizers")
        if self._started:
            raise InitializationError("start() cannot be called more than once")

        if callable(authorizers):
            supplier = authorizers

            def registry_for_session() -> AuthorizerRegistry:
                return AuthorizerRegistry(supplier())

        else:
            shared = AuthorizerRegistry(authorizers)

            def registry_for_session() -> AuthorizerRegistry:
                return shared

        def on_session_init(session: UISession) -> None:
            AuthorizationState.init(session, registry_for_session(), self._state_key)

        self._notifier.add_session_init_listener(on_session_init)
        self._started = True
        logger.info("Authorization started per_session_authorizers=%s", callable(authorizers))

    def current_state(self) -> AuthorizationState:
        checks.state(self._started, NOT_INITIALIZED_ERROR_MESSAGE)
        return AuthorizationState.current(self._state_key)

    def state_for(self, session: UISession) -> AuthorizationState:
        """This engine's state in ``session``, which need not be the current one."""
        checks.state(self._started, NOT_INITIALIZED_ERROR_MESSAGE)
        return AuthorizationState.for_session(session, self._state_key)

    # ---- Binding ------------------------------------------------------------------------

    def bind_component(self, component: Component) -> ComponentBind:
        checks.require(component, "component")
        return self.bind_components(component)

    def bind_components(self, *components: Component) -> ComponentBind:
        return ComponentBind(components, self.current_state())

    def bind_view(self, view: View) -> ViewBind:
        checks.require(view, "view")
        return self.bind_views(view)

    def bind_views(self, *views: View) -> ViewBind:
        state = self.current_state()
        state.ensure_view_change_listener(self._navigator_supplier())
        return ViewBind(views, state)

    def bind_data(self, item_type: type, container: DataContainer, integrity_check: bool | None = None) -> None:
        """
        Filter ``container`` so only items granted by the authorizer for ``item_type`` remain.

        Every item is its own permission. ``integrity_check`` defaults to the
        engine configuration.
        """

        state = self.current_state()
        checks.require(item_type, "item_type")
        checks.require(container, "container")
        if integrity_check is None:
            integrity_check = self._config.integrity_check
        state.bind_data(item_type, container, integrity_check)

    # ---- Unbinding ----------------------------------------------------------------------

    def unbind_component(self, component: Component) -> bool:
        checks.require(component, "component")
        return self.current_state().unbind_component(component)

    def unbind_components(self, *components: Component) -> None:
        state = self.current_state()
        for component in checks.non_empty(components, "components"):
            state.unbind_component(component)

    def unbind_view(self, view: View) -> bool:
        checks.require(view, "view")
        return self.current_state().unbind_view(view)

    def unbind_views(self, *views: View) -> None:
        state = self.current_state()
        for view in checks.non_empty(views, "views"):
            state.unbind_view(view)

    def unbind_data(self, container: DataContainer) -> bool:
        state = self.current_state()
        checks.require(container, "container")
        return state.unbind_data(container)

    # ---- Applying -----------------------------------------------------------------------

    def apply_all(self) -> None:
        self._engine.apply_all(self.current_state())

    def apply(self, *components: Component) -> None:
        state = self.current_state()
        self._engine.apply(
            state,
            checks.non_empty(components, "components"),
            strict=self._config.strict_subset_apply,
        )
