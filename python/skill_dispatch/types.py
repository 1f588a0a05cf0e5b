"""Pydantic models for skill_dispatch.

This module provides type-safe data models for inbound requests and the
per-request ``HandlerInput`` context, using Pydantic v2 for validation.

Requests are immutable once constructed and are identified by their
``type`` discriminant. ``IntentRequest`` additionally carries a named
sub-intent in ``intent.name``.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field


class IntentConfirmationStatus(str, Enum):
    """Confirmation state of an intent or slot."""

    NONE = "NONE"
    DENIED = "DENIED"
    CONFIRMED = "CONFIRMED"


class DialogState(str, Enum):
    """Dialog progress of a multi-turn intent request."""

    STARTED = "STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class SessionEndedReason(str, Enum):
    """Why the session ended."""

    USER_INITIATED = "USER_INITIATED"
    ERROR = "ERROR"
    EXCEEDED_MAX_REPROMPTS = "EXCEEDED_MAX_REPROMPTS"


class Slot(BaseModel):
    """A named slot value captured for an intent."""

    name: str = Field(description="Slot name as declared in the interaction model.")
    value: str | None = Field(default=None, description="Spoken value, if any.")
    confirmation_status: IntentConfirmationStatus = Field(
        default=IntentConfirmationStatus.NONE,
    )

    model_config = {"frozen": True}


class Intent(BaseModel):
    """The named sub-intent carried by an ``IntentRequest``.

    Example:
        >>> intent = Intent(name="OrderPizzaIntent")
        >>> intent.name
        'OrderPizzaIntent'
    """

    name: str = Field(description="Intent name, e.g. 'AMAZON.HelpIntent'.")
    slots: dict[str, Slot] = Field(default_factory=dict)
    confirmation_status: IntentConfirmationStatus = Field(
        default=IntentConfirmationStatus.NONE,
    )

    model_config = {"frozen": True}


class Request(BaseModel):
    """Fields shared by every request kind.

    Concrete request kinds subclass this and pin ``type`` to a literal,
    which acts as the discriminant.
    """

    request_id: str | None = Field(default=None, description="Unique request identifier.")
    timestamp: datetime | None = Field(default=None, description="When the request was sent.")
    locale: str | None = Field(default=None, description="Locale of the request, e.g. 'en-US'.")

    model_config = {"frozen": True}

    @property
    def object_type(self) -> str:
        """Return the request discriminant."""
        return getattr(self, "type", self.__class__.__name__)


class LaunchRequest(Request):
    """Sent when the user invokes the skill without a specific intent."""

    type: Literal["LaunchRequest"] = "LaunchRequest"


class IntentRequest(Request):
    """Sent when the user speaks a command that maps to an intent.

    Example:
        >>> request = IntentRequest(intent=Intent(name="HelloWorldIntent"))
        >>> request.object_type
        'IntentRequest'
    """

    type: Literal["IntentRequest"] = "IntentRequest"
    intent: Intent = Field(description="The intent being requested.")
    dialog_state: DialogState | None = Field(default=None)


class SessionEndedError(BaseModel):
    """Error details attached to a ``SessionEndedRequest``."""

    type: str
    message: str

    model_config = {"frozen": True}


class SessionEndedRequest(Request):
    """Sent when the current session ends."""

    type: Literal["SessionEndedRequest"] = "SessionEndedRequest"
    reason: SessionEndedReason = Field(default=SessionEndedReason.USER_INITIATED)
    error: SessionEndedError | None = Field(default=None)


class SkillEnabledRequest(Request):
    """Skill event sent when a customer enables the skill."""

    type: Literal["AlexaSkillEvent.SkillEnabled"] = "AlexaSkillEvent.SkillEnabled"
    event_creation_time: datetime | None = Field(default=None)


class SkillDisabledRequest(Request):
    """Skill event sent when a customer disables the skill."""

    type: Literal["AlexaSkillEvent.SkillDisabled"] = "AlexaSkillEvent.SkillDisabled"
    event_creation_time: datetime | None = Field(default=None)


AnyRequest = Annotated[
    Union[
        LaunchRequest,
        IntentRequest,
        SessionEndedRequest,
        SkillEnabledRequest,
        SkillDisabledRequest,
    ],
    Field(discriminator="type"),
]


class Session(BaseModel):
    """Session information sent with in-session requests."""

    session_id: str
    new: bool = False
    attributes: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}


class RequestEnvelope(BaseModel):
    """Parsed request envelope handed over by the transport layer.

    Example:
        >>> envelope = RequestEnvelope(request=LaunchRequest(request_id="r-1"))
        >>> envelope.request.object_type
        'LaunchRequest'
    """

    version: str = Field(default="1.0")
    session: Session | None = Field(default=None)
    context: dict[str, Any] = Field(default_factory=dict)
    request: AnyRequest

    model_config = {"frozen": True}


class HandlerInput(BaseModel):
    """Per-request context passed to predicates, handlers and interceptors.

    The mapper hands the same instance to every ``can_handle`` it
    evaluates during one resolution, so predicates may rely on identity.

    Example:
        >>> handler_input = HandlerInput(
        ...     request_envelope=RequestEnvelope(request=LaunchRequest())
        ... )
        >>> handler_input.request.object_type
        'LaunchRequest'
    """

    request_envelope: RequestEnvelope = Field(description="The inbound request envelope.")
    attributes: dict[str, Any] = Field(
        default_factory=dict,
        description="Request-scoped attributes shared between interceptors and handlers.",
    )
    context: Any = Field(default=None, description="Opaque ambient context from the caller.")

    model_config = {"arbitrary_types_allowed": True}

    @property
    def request(self) -> Request:
        """Return the request carried by the envelope."""
        return self.request_envelope.request


class LogContext(BaseModel):
    """Structured logging context.

    Fields set to None are omitted from log records.

    Example:
        >>> ctx = LogContext.for_input(handler_input, handler_name="HelpHandler")
        >>> log_info("Handling request", ctx)
    """

    correlation_id: str | None = Field(default=None)
    request_id: str | None = Field(default=None)
    request_type: str | None = Field(default=None)
    intent_name: str | None = Field(default=None)
    handler_name: str | None = Field(default=None)
    operation: str | None = Field(default=None)

    @classmethod
    def for_input(cls, handler_input: HandlerInput, **extra: str | None) -> LogContext:
        """Build a context describing the request inside ``handler_input``.

        Meant for handlers and interceptors. The mapper never inspects
        the request when logging.
        """
        request = handler_input.request
        intent = getattr(request, "intent", None)
        return cls(
            request_id=request.request_id,
            request_type=request.object_type,
            intent_name=intent.name if intent is not None else None,
            **extra,
        )


__all__ = [
    "AnyRequest",
    "DialogState",
    "HandlerInput",
    "Intent",
    "IntentConfirmationStatus",
    "IntentRequest",
    "LaunchRequest",
    "LogContext",
    "Request",
    "RequestEnvelope",
    "Session",
    "SessionEndedError",
    "SessionEndedReason",
    "SessionEndedRequest",
    "SkillDisabledRequest",
    "SkillEnabledRequest",
    "Slot",
]
