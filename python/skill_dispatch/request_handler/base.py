"""Request handler and interceptor base classes.

This module provides the capability interface every request handler
implements: ``can_handle`` decides whether the handler applies to an
input, ``handle`` processes it.

Example:
    >>> from skill_dispatch.request_handler import RequestHandler
    >>> from skill_dispatch.predicates import is_request_type
    >>>
    >>> class LaunchHandler(RequestHandler):
    ...     handler_name = "launch"
    ...
    ...     def can_handle(self, handler_input: HandlerInput) -> bool:
    ...         return is_request_type("LaunchRequest")(handler_input)
    ...
    ...     def handle(self, handler_input: HandlerInput) -> Any:
    ...         return {"speech": "Welcome!"}
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from skill_dispatch.types import HandlerInput


class RequestHandler(ABC):
    """Abstract base class for request handlers.

    Class Attributes:
        handler_name: Identifier used in logs. Falls back to the class name.
    """

    handler_name: str = ""

    @abstractmethod
    def can_handle(self, handler_input: HandlerInput) -> bool:
        """Return True if this handler can process the input.

        Called by ``RequestMapper`` during resolution, possibly from
        several threads at once. Implementations should not mutate
        shared state. Exceptions raised here reach the mapper's caller
        unchanged.

        Args:
            handler_input: The per-request context.

        Returns:
            True if the handler applies.
        """
        ...

    @abstractmethod
    def handle(self, handler_input: HandlerInput) -> Any:
        """Process the input and return a response.

        Args:
            handler_input: The per-request context.

        Returns:
            Handler-specific response object.
        """
        ...

    @property
    def name(self) -> str:
        """Return the handler name.

        Returns:
            The handler_name class attribute, or the class name if not set.
        """
        return self.handler_name or self.__class__.__name__

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class RequestInterceptor(ABC):
    """Runs before the handler of the chain it belongs to."""

    @abstractmethod
    def process(self, handler_input: HandlerInput) -> None:
        """Inspect or enrich the input before the handler runs."""
        ...


class ResponseInterceptor(ABC):
    """Runs after the handler of the chain it belongs to."""

    @abstractmethod
    def process(self, handler_input: HandlerInput, response: Any) -> None:
        """Inspect the handler's response."""
        ...


__all__ = ["RequestHandler", "RequestInterceptor", "ResponseInterceptor"]
