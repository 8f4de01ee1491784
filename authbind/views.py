"""
Views that authorize the value they are navigated to.

``AuthorizedView`` turns the parameter part of a location (``"order/42"`` ->
``"42"``) into a typed value, asks ``check_authorization`` about that value
and either shows it or redirects to a permission-denied location.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from typing import Generic, TypeVar

from authbind.core.errors import ArgumentError
from authbind.session import get_current_session

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ParseError(Exception):
    """Raised by ``AuthorizedView.parse`` for parameters it cannot understand."""


class AuthorizedView(ABC, Generic[T]):
    def __init__(self) -> None:
        self._permission_denied_location = ""
        self._bad_params_location = ""

    @property
    def permission_denied_location(self) -> str:
        return self._permission_denied_location

    @permission_denied_location.setter
    def permission_denied_location(self, location: str) -> None:
        if not location:
            raise ArgumentError("permission_denied_location must not be empty")
        self._permission_denied_location = location

    @property
    def bad_params_location(self) -> str:
        return self._bad_params_location

    @bad_params_location.setter
    def bad_params_location(self, location: str) -> None:
        self._bad_params_location = location

    @abstractmethod
    def parse(self, parameters: str) -> T:
        """Convert navigation parameters; raise ParseError when they are invalid."""

    @abstractmethod
    def check_authorization(self, value: T) -> bool: ...

    @abstractmethod
    def on_successful_authorization(self, value: T) -> None: ...

    def on_failed_authorization(self, value: T) -> None:
        pass

    def on_parse_error(self, error: ParseError) -> None:
        logger.warning("Could not parse view parameters: %s", error)

    def enter(self, parameters: str) -> None:
        try:
            value = self.parse(parameters)
        except ParseError as e:
            self.on_parse_error(e)
            self._navigate_to(self._bad_params_location)
            return

        if value is None:
            raise ArgumentError("AuthorizedView.parse() must not return None, raise ParseError instead")

        if self.check_authorization(value):
            self.on_successful_authorization(value)
        else:
            self.on_failed_authorization(value)
            self._navigate_to(self._permission_denied_location)

    def _navigate_to(self, location: str) -> None:
        navigator = get_current_session().navigator
        if navigator is None:
            raise ArgumentError(f"{type(self).__name__} needs a navigator to redirect to {location!r}")
        navigator.navigate_to(location)
