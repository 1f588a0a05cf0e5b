"""Request handler assembled from plain functions.

Useful when a handler is just a predicate and a function:

Example:
    >>> from skill_dispatch.predicates import is_intent_name
    >>>
    >>> help_handler = FunctionRequestHandler(
    ...     can_handle_func=is_intent_name("AMAZON.HelpIntent"),
    ...     handle_func=lambda handler_input: {"speech": "Try saying hello."},
    ...     handler_name="help",
    ... )
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ..exceptions import MapperConfigurationError
from .base import RequestHandler

if TYPE_CHECKING:
    from skill_dispatch.types import HandlerInput


class FunctionRequestHandler(RequestHandler):
    """RequestHandler that delegates to a predicate and a handle function.

    Args:
        can_handle_func: Predicate taking a HandlerInput.
        handle_func: Function taking a HandlerInput and returning a response.
        handler_name: Optional name used in logs.

    Raises:
        MapperConfigurationError: If either function is not callable.
    """

    def __init__(
        self,
        can_handle_func: Callable[[HandlerInput], bool],
        handle_func: Callable[[HandlerInput], Any],
        handler_name: str = "",
    ) -> None:
        if not callable(can_handle_func):
            raise MapperConfigurationError("can_handle_func must be callable")
        if not callable(handle_func):
            raise MapperConfigurationError("handle_func must be callable")

        self._can_handle_func = can_handle_func
        self._handle_func = handle_func
        self.handler_name = handler_name or getattr(handle_func, "__name__", "")

    def can_handle(self, handler_input: HandlerInput) -> bool:
        return bool(self._can_handle_func(handler_input))

    def handle(self, handler_input: HandlerInput) -> Any:
        return self._handle_func(handler_input)
