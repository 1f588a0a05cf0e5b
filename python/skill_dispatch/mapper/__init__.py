"""Request handler chain resolution.

This package provides the mapper that decides which registered handler
chain processes a request:

- RequestHandlerChain: one handler plus its request/response interceptors
- RequestMapper: registration-ordered, first-match resolution

Both are built once through their builders and then used read-only.

    mapper = (
        RequestMapper.builder()
        .add_request_handler_chain(RequestHandlerChain(LaunchHandler()))
        .add_request_handler_chain(RequestHandlerChain(HelpHandler()))
        .build()
    )
    chain = mapper.get_request_handler_chain(handler_input)
"""

from __future__ import annotations

from .handler_chain import RequestHandlerChain, RequestHandlerChainBuilder
from .request_mapper import RequestMapper, RequestMapperBuilder

__all__ = [
    "RequestHandlerChain",
    "RequestHandlerChainBuilder",
    "RequestMapper",
    "RequestMapperBuilder",
]
