"""Request Mapper - Registration-Ordered Handler Chain Resolution.

The RequestMapper selects the request handler chain responsible for an
incoming HandlerInput by asking each registered chain, in order, whether
it can handle the input.

Resolution Contract:
1. Chains are tried in registration order (not sorted by specificity)
2. The first chain whose can_handle() returns True is returned
3. Chains after the first match are never evaluated
4. Return None if no chain can handle the input (not an error)
5. Exceptions raised by a can_handle() propagate to the caller unchanged

Registration order is part of the configuration. When two chains can
both handle an input, the one registered first wins.

Usage:
    mapper = (
        RequestMapper.builder()
        .with_request_handler_chains([launch_chain, help_chain])
        .add_request_handler_chain(fallback_chain)
        .build()
    )

    chain = mapper.get_request_handler_chain(handler_input)
    if chain is None:
        # Route to a default handler or report "request not handled"
        ...
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from ..exceptions import MapperConfigurationError
from ..logging import TRACE, is_enabled_for, log_debug, log_info, log_trace
from .handler_chain import RequestHandlerChain

if TYPE_CHECKING:
    from ..types import HandlerInput


class RequestMapper:
    """Immutable, registration-ordered collection of request handler chains.

    A built mapper holds no per-request state, so any number of threads
    may resolve concurrently without coordination.

    Prefer ``RequestMapper.builder()``; constructing directly requires an
    explicit (possibly empty) iterable of chains.

    Raises:
        MapperConfigurationError: If ``request_handler_chains`` is None or
            contains anything other than RequestHandlerChain instances.
    """

    __slots__ = ("_chains",)

    def __init__(self, request_handler_chains: Iterable[RequestHandlerChain]) -> None:
        if request_handler_chains is None:
            raise MapperConfigurationError("No request handler chains provided to the mapper")

        chains = tuple(request_handler_chains)
        for position, chain in enumerate(chains):
            if not isinstance(chain, RequestHandlerChain):
                raise MapperConfigurationError(
                    f"Request handler chain at position {position} must be a "
                    f"RequestHandlerChain, got {type(chain).__name__}"
                )

        self._chains: tuple[RequestHandlerChain, ...] = chains

    @classmethod
    def builder(cls) -> RequestMapperBuilder:
        """Return a builder accumulating chains until ``build()``."""
        return RequestMapperBuilder()

    @property
    def request_handler_chains(self) -> tuple[RequestHandlerChain, ...]:
        """Registered chains in registration order."""
        return self._chains

    def get_request_handler_chain(
        self, handler_input: HandlerInput
    ) -> RequestHandlerChain | None:
        """Resolve the chain responsible for ``handler_input``.

        Args:
            handler_input: Per-request context. The same instance is passed
                to every evaluated ``can_handle``.

        Returns:
            The first chain, in registration order, that can handle the
            input, or None when no chain matches.
        """
        for position, chain in enumerate(self._chains):
            if is_enabled_for(TRACE):
                log_trace(
                    "RequestMapper: Evaluating request handler chain",
                    {"position": position, "handler_name": chain.handler_name},
                )
            if chain.can_handle(handler_input):
                if is_enabled_for(logging.DEBUG):
                    log_debug(
                        f"RequestMapper: Resolved request to '{chain.handler_name}'",
                        {"position": position, "handler_name": chain.handler_name},
                    )
                return chain

        log_debug(
            "RequestMapper: No request handler chain can handle the request",
            {"chains_evaluated": len(self._chains)},
        )
        return None

    resolve = get_request_handler_chain

    def chain_info(self) -> list[dict[str, Any]]:
        """Get chain info for debugging.

        Returns:
            List of chain info dicts in registration order.
        """
        return [{"position": i, **chain.info()} for i, chain in enumerate(self._chains)]

    def __len__(self) -> int:
        """Return number of registered chains."""
        return len(self._chains)

    def __repr__(self) -> str:
        return f"RequestMapper(chains={len(self._chains)})"


class RequestMapperBuilder:
    """Accumulates request handler chains for a RequestMapper.

    Bulk and single additions compose: the final order is the order in
    which the operations were applied. Nothing is validated until
    ``build()``.

    Example:
        >>> builder = RequestMapper.builder()
        >>> builder = builder.with_request_handler_chains([])   # explicit empty set
        >>> mapper = builder.build()
        >>> len(mapper)
        0
    """

    def __init__(self) -> None:
        self._chains: list[Any] | None = None

    def with_request_handler_chains(
        self, request_handler_chains: Iterable[RequestHandlerChain] | None
    ) -> RequestMapperBuilder:
        """Append a collection of chains, keeping their order.

        Passing an empty collection marks the collection as supplied.
        Passing None leaves the builder unchanged.
        """
        if request_handler_chains is None:
            return self
        if self._chains is None:
            self._chains = []
        self._chains.extend(request_handler_chains)
        return self

    def add_request_handler_chain(
        self, request_handler_chain: RequestHandlerChain
    ) -> RequestMapperBuilder:
        """Append a single chain."""
        if self._chains is None:
            self._chains = []
        self._chains.append(request_handler_chain)
        return self

    def build(self) -> RequestMapper:
        """Create the immutable mapper.

        Raises:
            MapperConfigurationError: If no chain collection was ever
                supplied, or a supplied element is not a chain.
        """
        if self._chains is None:
            raise MapperConfigurationError(
                "No request handler chains provided; supply a collection "
                "(it may be empty) before calling build()"
            )

        mapper = RequestMapper(self._chains)
        if is_enabled_for(logging.INFO):
            log_info(
                f"RequestMapper: Built mapper with {len(mapper)} request handler chain(s)",
                {"handlers": ",".join(c.handler_name for c in mapper.request_handler_chains)},
            )
        return mapper
