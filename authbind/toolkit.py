"""
Minimal in-memory host primitives.

These satisfy the contracts in ``authbind.host`` without any UI framework and
are what the test-suite binds against. Real applications adapt their own
toolkit's widgets instead.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
import logging
from typing import Generic, TypeVar

from authbind.host import View, ViewChangeListener

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Button:
    """A component with nothing but a caption and a visibility flag."""

    def __init__(self, caption: str = "", visible: bool = True) -> None:
        self.caption = caption
        self.visible = visible

    def __repr__(self) -> str:
        return f"Button({self.caption!r}, visible={self.visible})"


class ListContainer(Generic[T]):
    """List-backed data container filtered by a predicate."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: list[T] = list(items)
        self._filter: Callable[[T], bool] | None = None

    @property
    def items(self) -> tuple[T, ...]:
        """All items, regardless of the filter."""
        return tuple(self._items)

    @property
    def item_filter(self) -> Callable[[T], bool] | None:
        return self._filter

    def add_item(self, item: T) -> None:
        self._items.append(item)

    def set_filter(self, item_filter: Callable[[T], bool] | None) -> None:
        self._filter = item_filter

    def visible_items(self) -> list[T]:
        if self._filter is None:
            return list(self._items)
        return [item for item in self._items if self._filter(item)]

    def __iter__(self) -> Iterator[T]:
        return iter(self.visible_items())

    def __len__(self) -> int:
        return len(self.visible_items())


class Navigator:
    """
    Location-based navigator.

    A location is ``"<view name>"`` or ``"<view name>/<parameters>"``. Before
    a view is entered every registered view-change listener is consulted; any
    listener returning False cancels the navigation and leaves the current
    location unchanged.
    """

    def __init__(self) -> None:
        self._views: dict[str, View] = {}
        self._listeners: list[ViewChangeListener] = []
        self._state: str | None = None
        self.current_view: View | None = None

    def add_view(self, name: str, view: View) -> None:
        self._views[name] = view

    def add_view_change_listener(self, listener: ViewChangeListener) -> None:
        self._listeners.append(listener)

    def get_state(self) -> str | None:
        return self._state

    def navigate_to(self, location: str) -> None:
        name, _, parameters = location.partition("/")
        view = self._views.get(name)
        if view is None:
            raise ValueError(f"no view registered for location {location!r}")

        for listener in self._listeners:
            if not listener(view):
                logger.debug("Navigation vetoed location=%s", location)
                return

        self._state = location
        self.current_view = view
        view.enter(parameters)
