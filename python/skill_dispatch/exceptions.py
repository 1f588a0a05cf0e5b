"""Custom exceptions for the skill_dispatch package.

This module provides a hierarchy of exceptions for error handling
in request handler resolution.

Note:
    A resolution miss is not an error. ``RequestMapper`` returns ``None``
    when no chain can handle an input, and exceptions raised by a
    handler's ``can_handle`` propagate to the caller unchanged.
"""

from __future__ import annotations


class DispatchError(Exception):
    """Base exception for all skill_dispatch errors.

    Example:
        >>> try:
        ...     mapper = RequestMapper.builder().build()
        ... except DispatchError as e:
        ...     print(f"Dispatch error: {e}")
    """

    pass


class MapperConfigurationError(DispatchError, ValueError):
    """Raised when a mapper or handler chain is configured incorrectly.

    Configuration errors are raised at build time, never deferred to the
    first resolution.

    Common causes:
    - ``RequestMapper.builder().build()`` with no chain collection supplied
    - A handler chain built without a request handler
    - Non-chain objects supplied as handler chains

    Example:
        >>> try:
        ...     RequestHandlerChain.builder().build()
        ... except MapperConfigurationError as e:
        ...     print(f"Bad configuration: {e}")
    """

    pass


class HandlerDiscoveryError(MapperConfigurationError):
    """Raised when a declarative handler configuration cannot be loaded.

    Example:
        >>> try:
        ...     mapper = mapper_from_yaml(Path("config/handlers.yaml"))
        ... except HandlerDiscoveryError as e:
        ...     print(f"Discovery failed: {e}")
    """

    pass


__all__ = [
    "DispatchError",
    "MapperConfigurationError",
    "HandlerDiscoveryError",
]
