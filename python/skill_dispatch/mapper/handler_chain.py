"""Request handler chain: a handler bundled with its interceptors.

A chain pairs exactly one request handler with zero or more request
interceptors (run before the handler) and zero or more response
interceptors (run after it). Running the interceptors is the
dispatcher's job; the chain only carries them and exposes the
handler's ``can_handle`` check.

Example:
    >>> chain = (
    ...     RequestHandlerChain.builder()
    ...     .with_request_handler(LaunchHandler())
    ...     .add_request_interceptor(LogRequestInterceptor())
    ...     .build()
    ... )
    >>> chain.can_handle(handler_input)
    True
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from ..exceptions import MapperConfigurationError

if TYPE_CHECKING:
    from ..request_handler.base import RequestHandler, RequestInterceptor, ResponseInterceptor
    from ..types import HandlerInput


class RequestHandlerChain:
    """Immutable association of one handler with its interceptors.

    Attributes:
        request_handler: The wrapped handler.
        request_interceptors: Interceptors run before the handler, in order.
        response_interceptors: Interceptors run after the handler, in order.

    Raises:
        MapperConfigurationError: If no handler is supplied, or the handler
            has no callable ``can_handle``.
    """

    __slots__ = ("_request_handler", "_request_interceptors", "_response_interceptors")

    def __init__(
        self,
        request_handler: RequestHandler,
        request_interceptors: Iterable[RequestInterceptor] | None = None,
        response_interceptors: Iterable[ResponseInterceptor] | None = None,
    ) -> None:
        if request_handler is None:
            raise MapperConfigurationError("No request handler provided for the handler chain")
        if not callable(getattr(request_handler, "can_handle", None)):
            raise MapperConfigurationError(
                f"Request handler {request_handler!r} does not implement can_handle()"
            )

        self._request_handler = request_handler
        self._request_interceptors: tuple[RequestInterceptor, ...] = tuple(
            request_interceptors or ()
        )
        self._response_interceptors: tuple[ResponseInterceptor, ...] = tuple(
            response_interceptors or ()
        )

    @classmethod
    def builder(cls) -> RequestHandlerChainBuilder:
        """Return a builder for incremental chain construction."""
        return RequestHandlerChainBuilder()

    @property
    def request_handler(self) -> RequestHandler:
        return self._request_handler

    @property
    def request_interceptors(self) -> tuple[RequestInterceptor, ...]:
        return self._request_interceptors

    @property
    def response_interceptors(self) -> tuple[ResponseInterceptor, ...]:
        return self._response_interceptors

    @property
    def handler_name(self) -> str:
        """Name of the wrapped handler, for logs.

        Falls back to the class name unless the handler exposes a
        non-empty string ``name``.
        """
        handler = self._request_handler
        name = getattr(handler, "name", None)
        if isinstance(name, str) and name:
            return name
        return handler.__class__.__name__

    def can_handle(self, handler_input: HandlerInput) -> bool:
        """Delegate to the wrapped handler's ``can_handle``.

        Args:
            handler_input: The per-request context, passed through as-is.

        Returns:
            The handler's answer.
        """
        return self._request_handler.can_handle(handler_input)

    def info(self) -> dict[str, Any]:
        """Describe the chain for debugging."""
        return {
            "handler": self.handler_name,
            "request_interceptors": [i.__class__.__name__ for i in self._request_interceptors],
            "response_interceptors": [i.__class__.__name__ for i in self._response_interceptors],
        }

    def __repr__(self) -> str:
        return (
            f"RequestHandlerChain(handler={self.handler_name!r}, "
            f"request_interceptors={len(self._request_interceptors)}, "
            f"response_interceptors={len(self._response_interceptors)})"
        )


class RequestHandlerChainBuilder:
    """Accumulates chain parts until ``build()`` is called.

    Example:
        >>> chain = (
        ...     RequestHandlerChain.builder()
        ...     .with_request_handler(handler)
        ...     .with_response_interceptors([AuditInterceptor()])
        ...     .build()
        ... )
    """

    def __init__(self) -> None:
        self._request_handler: RequestHandler | None = None
        self._request_interceptors: list[RequestInterceptor] = []
        self._response_interceptors: list[ResponseInterceptor] = []

    def with_request_handler(self, request_handler: RequestHandler) -> RequestHandlerChainBuilder:
        self._request_handler = request_handler
        return self

    def with_request_interceptors(
        self, interceptors: Iterable[RequestInterceptor]
    ) -> RequestHandlerChainBuilder:
        """Replace the request interceptors collected so far."""
        self._request_interceptors = list(interceptors)
        return self

    def add_request_interceptor(
        self, interceptor: RequestInterceptor
    ) -> RequestHandlerChainBuilder:
        self._request_interceptors.append(interceptor)
        return self

    def with_response_interceptors(
        self, interceptors: Iterable[ResponseInterceptor]
    ) -> RequestHandlerChainBuilder:
        """Replace the response interceptors collected so far."""
        self._response_interceptors = list(interceptors)
        return self

    def add_response_interceptor(
        self, interceptor: ResponseInterceptor
    ) -> RequestHandlerChainBuilder:
        self._response_interceptors.append(interceptor)
        return self

    def build(self) -> RequestHandlerChain:
        """Create the chain.

        Raises:
            MapperConfigurationError: If no handler was supplied.
        """
        return RequestHandlerChain(
            self._request_handler,  # type: ignore[arg-type]
            self._request_interceptors,
            self._response_interceptors,
        )
