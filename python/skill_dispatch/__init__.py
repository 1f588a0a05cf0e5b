"""
Skill Dispatch

This package resolves an incoming skill request to the single registered
request handler chain responsible for it.

Example:
    >>> from skill_dispatch import (
    ...     HandlerInput, RequestEnvelope, IntentRequest, Intent,
    ...     RequestHandlerChain, RequestMapper, FunctionRequestHandler,
    ...     is_intent_name,
    ... )
    >>> hello = FunctionRequestHandler(
    ...     can_handle_func=is_intent_name("HelloIntent"),
    ...     handle_func=lambda handler_input: "Hello!",
    ... )
    >>> mapper = (
    ...     RequestMapper.builder()
    ...     .add_request_handler_chain(RequestHandlerChain(hello))
    ...     .build()
    ... )
    >>> handler_input = HandlerInput(
    ...     request_envelope=RequestEnvelope(
    ...         request=IntentRequest(intent=Intent(name="HelloIntent"))
    ...     )
    ... )
    >>> mapper.get_request_handler_chain(handler_input).request_handler is hello
    True

    >>> # Use structured logging
    >>> from skill_dispatch import log_info
    >>> log_info("Request received", {"request_id": "r-1"})
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _dist_version

from skill_dispatch.config import DispatchConfig
from skill_dispatch.discovery import mapper_from_config, mapper_from_yaml
from skill_dispatch.exceptions import (
    DispatchError,
    HandlerDiscoveryError,
    MapperConfigurationError,
)
from skill_dispatch.logging import (
    configure_logging,
    log_debug,
    log_error,
    log_info,
    log_trace,
    log_warn,
)
from skill_dispatch.mapper import (
    RequestHandlerChain,
    RequestHandlerChainBuilder,
    RequestMapper,
    RequestMapperBuilder,
)
from skill_dispatch.predicates import (
    get_intent_name,
    get_request_type,
    is_intent_name,
    is_request_type,
)
from skill_dispatch.request_handler import (
    FunctionRequestHandler,
    RequestHandler,
    RequestInterceptor,
    ResponseInterceptor,
)
from skill_dispatch.types import (
    HandlerInput,
    Intent,
    IntentRequest,
    LaunchRequest,
    LogContext,
    Request,
    RequestEnvelope,
    SessionEndedRequest,
    SkillDisabledRequest,
    SkillEnabledRequest,
    Slot,
)

try:
    __version__ = _dist_version("skill-dispatch")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "version",
    # Configuration
    "DispatchConfig",
    "configure_logging",
    # Exceptions
    "DispatchError",
    "MapperConfigurationError",
    "HandlerDiscoveryError",
    # Logging
    "log_error",
    "log_warn",
    "log_info",
    "log_debug",
    "log_trace",
    # Mapper
    "RequestHandlerChain",
    "RequestHandlerChainBuilder",
    "RequestMapper",
    "RequestMapperBuilder",
    "mapper_from_config",
    "mapper_from_yaml",
    # Handlers
    "RequestHandler",
    "RequestInterceptor",
    "ResponseInterceptor",
    "FunctionRequestHandler",
    # Predicates
    "is_request_type",
    "is_intent_name",
    "get_request_type",
    "get_intent_name",
    # Types
    "HandlerInput",
    "Intent",
    "IntentRequest",
    "LaunchRequest",
    "LogContext",
    "Request",
    "RequestEnvelope",
    "SessionEndedRequest",
    "SkillDisabledRequest",
    "SkillEnabledRequest",
    "Slot",
]


def version() -> str:
    """Return the package version.

    Returns:
        The version string (e.g., "0.1.0")
    """
    return __version__
