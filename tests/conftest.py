"""pytest configuration and fixtures for skill_dispatch tests.

This module provides shared fixtures for testing request resolution,
including sample requests, handler inputs and recording fake handlers.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from uuid import uuid4

import pytest

from skill_dispatch import (
    HandlerInput,
    Intent,
    IntentRequest,
    LaunchRequest,
    SkillEnabledRequest,
)
from skill_dispatch.logging import LOGGER_NAME, TRACE
from tests.handlers.fakes import RecordingHandler, make_input


@pytest.fixture
def intent_input() -> HandlerInput:
    """Provide an IntentRequest input carrying 'FooIntent'."""
    return make_input(
        IntentRequest(request_id=str(uuid4()), intent=Intent(name="FooIntent"))
    )


@pytest.fixture
def event_input() -> HandlerInput:
    """Provide a SkillEnabled event input."""
    return make_input(SkillEnabledRequest(request_id=str(uuid4())))


@pytest.fixture
def launch_input() -> HandlerInput:
    """Provide a LaunchRequest input."""
    return make_input(LaunchRequest(request_id=str(uuid4())))


@pytest.fixture
def always_false() -> RecordingHandler:
    """Provide a handler whose can_handle always returns False."""
    return RecordingHandler(result=False, handler_name="always_false")


@pytest.fixture
def always_true() -> RecordingHandler:
    """Provide a handler whose can_handle always returns True."""
    return RecordingHandler(result=True, handler_name="always_true")


@pytest.fixture
def trace_logging() -> Generator[None, None, None]:
    """Enable TRACE on the package logger for the duration of a test."""
    logger = logging.getLogger(LOGGER_NAME)
    previous = logger.level
    logger.setLevel(TRACE)
    yield
    logger.setLevel(previous)
