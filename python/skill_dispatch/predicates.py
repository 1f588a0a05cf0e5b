"""Predicate helpers for writing ``can_handle`` checks.

Example:
    >>> from skill_dispatch.predicates import is_intent_name, is_request_type
    >>>
    >>> class StopHandler(RequestHandler):
    ...     def can_handle(self, handler_input):
    ...         return is_intent_name("AMAZON.StopIntent")(handler_input)
"""

from __future__ import annotations

from collections.abc import Callable

from .types import HandlerInput, IntentRequest


def get_request_type(handler_input: HandlerInput) -> str:
    """Return the discriminant of the request inside ``handler_input``."""
    return handler_input.request.object_type


def get_intent_name(handler_input: HandlerInput) -> str:
    """Return the intent name of an intent request.

    Raises:
        TypeError: If the request is not an IntentRequest.
    """
    request = handler_input.request
    if not isinstance(request, IntentRequest):
        raise TypeError(
            f"Expected IntentRequest, got {request.object_type}"
        )
    return request.intent.name


def is_request_type(request_type: str) -> Callable[[HandlerInput], bool]:
    """Build a predicate matching requests with the given discriminant.

    Args:
        request_type: Request discriminant, e.g. "LaunchRequest".

    Returns:
        A predicate taking a HandlerInput.

    Example:
        >>> predicate = is_request_type("LaunchRequest")
        >>> predicate(launch_input)
        True
    """

    def can_handle_wrapper(handler_input: HandlerInput) -> bool:
        return get_request_type(handler_input) == request_type

    return can_handle_wrapper


def is_intent_name(name: str) -> Callable[[HandlerInput], bool]:
    """Build a predicate matching intent requests with the given intent name.

    Non-intent requests never match.

    Args:
        name: Intent name, e.g. "AMAZON.HelpIntent".

    Returns:
        A predicate taking a HandlerInput.
    """

    def can_handle_wrapper(handler_input: HandlerInput) -> bool:
        request = handler_input.request
        return isinstance(request, IntentRequest) and request.intent.name == name

    return can_handle_wrapper


__all__ = [
    "get_intent_name",
    "get_request_type",
    "is_intent_name",
    "is_request_type",
]
