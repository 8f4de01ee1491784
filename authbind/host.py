"""
Contracts the engine expects from the host UI toolkit.

The engine never creates or destroys these objects; it only reads and writes
the few attributes listed here. ``authbind.toolkit`` has small in-memory
implementations.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Component(Protocol):
    """Anything with a readable and writable ``visible`` flag."""

    visible: bool


@runtime_checkable
class View(Protocol):
    """A navigable view, entered with the parameter part of its location."""

    def enter(self, parameters: str) -> None: ...


@runtime_checkable
class DataContainer(Protocol):
    """Holds items of one declared type and accepts a filter over them."""

    @property
    def items(self) -> Iterable[Any]: ...

    def set_filter(self, item_filter: Any) -> None: ...


ViewChangeListener = Callable[[View], bool]
"""Called before a view is entered; returning False vetoes the navigation."""


@runtime_checkable
class NavigatorFacade(Protocol):
    def get_state(self) -> str | None: ...

    def navigate_to(self, location: str) -> None: ...

    def add_view_change_listener(self, listener: ViewChangeListener) -> None: ...
