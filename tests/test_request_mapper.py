"""Request mapper tests.

These tests verify:
- Build-time validation (missing vs. explicitly empty chain collections)
- First-match resolution in registration order
- Short-circuiting after the first match
- Identity of the HandlerInput passed to every predicate
- Propagation of predicate failures
"""

from __future__ import annotations

import logging
import threading

import pytest

from skill_dispatch import (
    FunctionRequestHandler,
    HandlerInput,
    Intent,
    IntentRequest,
    LaunchRequest,
    MapperConfigurationError,
    RequestHandlerChain,
    RequestMapper,
    SessionEndedRequest,
    SkillEnabledRequest,
    is_intent_name,
)
from tests.handlers.fakes import (
    DuckTypedHandler,
    ExplodingHandler,
    RecordingHandler,
    make_input,
)


def _is_skill_enabled(handler_input: HandlerInput) -> bool:
    return isinstance(handler_input.request, SkillEnabledRequest)


# =============================================================================
# Builder validation
# =============================================================================


class TestRequestMapperBuilder:
    """Tests for RequestMapper construction."""

    def test_no_handler_chains_raises(self):
        """Test build() without ever supplying a collection fails."""
        with pytest.raises(MapperConfigurationError):
            RequestMapper.builder().build()

    def test_configuration_error_is_value_error(self):
        """Test the configuration error can be caught as ValueError."""
        with pytest.raises(ValueError):
            RequestMapper.builder().build()

    def test_none_collection_is_not_a_collection(self):
        """Test passing None does not count as supplying a collection."""
        with pytest.raises(MapperConfigurationError):
            RequestMapper.builder().with_request_handler_chains(None).build()

    def test_duck_typed_handler_builds_with_logging_enabled(self, caplog, launch_input):
        """Test a handler whose name is not a string still builds and resolves."""
        chain = RequestHandlerChain(DuckTypedHandler())

        with caplog.at_level(logging.DEBUG, logger="skill_dispatch"):
            mapper = RequestMapper.builder().add_request_handler_chain(chain).build()
            resolved = mapper.get_request_handler_chain(launch_input)

        assert resolved is chain
        built = [r for r in caplog.records if "Built mapper" in r.getMessage()]
        assert built[-1].fields == {"handlers": "DuckTypedHandler"}
        assert caplog.records[-1].fields["handler_name"] == "DuckTypedHandler"

    def test_empty_handler_chains_builds(self):
        """Test an explicitly empty collection is valid."""
        mapper = RequestMapper.builder().with_request_handler_chains([]).build()

        assert len(mapper) == 0
        assert mapper.request_handler_chains == ()

    def test_empty_mapper_resolves_nothing(self, intent_input, event_input, launch_input):
        """Test an empty mapper returns None for every input."""
        mapper = RequestMapper.builder().with_request_handler_chains([]).build()

        for handler_input in (intent_input, event_input, launch_input):
            assert mapper.get_request_handler_chain(handler_input) is None

    def test_direct_construction_requires_collection(self):
        """Test RequestMapper(None) fails like the builder does."""
        with pytest.raises(MapperConfigurationError):
            RequestMapper(None)  # type: ignore[arg-type]

    def test_non_chain_element_rejected(self, always_true):
        """Test handlers must be wrapped in a chain."""
        with pytest.raises(MapperConfigurationError, match="position 1"):
            (
                RequestMapper.builder()
                .add_request_handler_chain(RequestHandlerChain(always_true))
                .add_request_handler_chain(always_true)  # type: ignore[arg-type]
                .build()
            )

    def test_bulk_and_single_additions_concatenate(self):
        """Test final order follows the order operations were applied."""
        first, second, third, fourth = (
            RequestHandlerChain(RecordingHandler(handler_name=n)) for n in "abcd"
        )

        mapper = (
            RequestMapper.builder()
            .add_request_handler_chain(first)
            .with_request_handler_chains([second, third])
            .add_request_handler_chain(fourth)
            .build()
        )

        assert mapper.request_handler_chains == (first, second, third, fourth)

    def test_mapper_is_isolated_from_source_list(self, always_true):
        """Test mutating the supplied list after build has no effect."""
        chains = [RequestHandlerChain(always_true)]
        mapper = RequestMapper.builder().with_request_handler_chains(chains).build()

        chains.append(RequestHandlerChain(RecordingHandler()))

        assert len(mapper) == 1

    def test_chain_info(self, always_false, always_true):
        """Test chain_info describes chains in registration order."""
        mapper = (
            RequestMapper.builder()
            .with_request_handler_chains(
                [RequestHandlerChain(always_false), RequestHandlerChain(always_true)]
            )
            .build()
        )

        info = mapper.chain_info()

        assert [entry["position"] for entry in info] == [0, 1]
        assert [entry["handler"] for entry in info] == ["always_false", "always_true"]


# =============================================================================
# Resolution
# =============================================================================


class TestRequestMapperResolution:
    """Tests for get_request_handler_chain()."""

    def test_no_handler_registered_for_intent(self, intent_input, always_false):
        """Test a single non-matching chain yields None for an intent."""
        mapper = (
            RequestMapper.builder()
            .add_request_handler_chain(RequestHandlerChain(always_false))
            .build()
        )

        assert mapper.get_request_handler_chain(intent_input) is None
        assert isinstance(always_false.seen_inputs[0].request, IntentRequest)

    def test_no_handler_registered_for_event(self, event_input, always_false):
        """Test a single non-matching chain yields None for a skill event."""
        mapper = (
            RequestMapper.builder()
            .add_request_handler_chain(RequestHandlerChain(always_false))
            .build()
        )

        assert mapper.get_request_handler_chain(event_input) is None
        assert isinstance(always_false.seen_inputs[0].request, SkillEnabledRequest)

    def test_handler_registered_for_intent(self, intent_input, always_true):
        """Test a matching chain is returned for an intent."""
        mapper = (
            RequestMapper.builder()
            .add_request_handler_chain(RequestHandlerChain(always_true))
            .build()
        )

        chain = mapper.get_request_handler_chain(intent_input)

        assert chain is not None
        assert chain.request_handler is always_true
        assert isinstance(always_true.seen_inputs[0].request, IntentRequest)

    def test_handler_matching_discriminant(self, event_input, intent_input):
        """Test a chain matching one request kind only picks that kind."""
        handler = RecordingHandler(result=_is_skill_enabled, handler_name="enabled")
        chain = RequestHandlerChain(handler)
        mapper = RequestMapper.builder().with_request_handler_chains([chain]).build()

        assert mapper.get_request_handler_chain(event_input) is chain
        assert mapper.get_request_handler_chain(intent_input) is None

    def test_second_chain_matches(self, launch_input):
        """Test the second chain is returned when only it matches."""
        first = RecordingHandler(result=False, handler_name="first")
        second = RecordingHandler(result=True, handler_name="second")
        second_chain = RequestHandlerChain(second)
        mapper = (
            RequestMapper.builder()
            .with_request_handler_chains([RequestHandlerChain(first), second_chain])
            .build()
        )

        assert mapper.get_request_handler_chain(launch_input) is second_chain
        assert first.can_handle_calls == 1
        assert first.answers == [False]
        assert second.can_handle_calls == 1

    def test_add_request_handler_chain_by_intent_name(self):
        """Test an incrementally added intent handler resolves by identity."""
        handler = FunctionRequestHandler(
            can_handle_func=is_intent_name("fooIntent"),
            handle_func=lambda handler_input: "foo",
        )
        mapper = (
            RequestMapper.builder()
            .add_request_handler_chain(RequestHandlerChain(handler))
            .build()
        )
        handler_input = make_input(IntentRequest(intent=Intent(name="fooIntent")))

        chain = mapper.get_request_handler_chain(handler_input)

        assert chain is not None
        assert chain.request_handler is handler

    def test_first_registered_wins(self, launch_input):
        """Test overlapping chains resolve to the first registered."""
        first = RecordingHandler(result=True, handler_name="first")
        second = RecordingHandler(result=True, handler_name="second")
        first_chain = RequestHandlerChain(first)
        mapper = (
            RequestMapper.builder()
            .add_request_handler_chain(first_chain)
            .add_request_handler_chain(RequestHandlerChain(second))
            .build()
        )

        assert mapper.get_request_handler_chain(launch_input) is first_chain

    def test_short_circuits_after_match(self, launch_input):
        """Test chains after the first match are never evaluated."""
        handlers = [
            RecordingHandler(result=False, handler_name="miss"),
            RecordingHandler(result=True, handler_name="hit"),
            RecordingHandler(result=True, handler_name="later"),
            RecordingHandler(result=False, handler_name="last"),
        ]
        mapper = (
            RequestMapper.builder()
            .with_request_handler_chains([RequestHandlerChain(h) for h in handlers])
            .build()
        )

        mapper.get_request_handler_chain(launch_input)

        assert [h.can_handle_calls for h in handlers] == [1, 1, 0, 0]

    def test_every_chain_evaluated_once_on_miss(self, launch_input):
        """Test a miss evaluates each chain exactly once."""
        handlers = [RecordingHandler(result=False, handler_name=n) for n in "abc"]
        mapper = (
            RequestMapper.builder()
            .with_request_handler_chains([RequestHandlerChain(h) for h in handlers])
            .build()
        )

        assert mapper.get_request_handler_chain(launch_input) is None
        assert [h.can_handle_calls for h in handlers] == [1, 1, 1]

    def test_same_input_instance_seen_by_every_predicate(self, intent_input):
        """Test predicates observe the exact instance passed to the mapper."""
        handlers = [RecordingHandler(result=False, handler_name=n) for n in "ab"]
        handlers.append(RecordingHandler(result=True, handler_name="c"))
        mapper = (
            RequestMapper.builder()
            .with_request_handler_chains([RequestHandlerChain(h) for h in handlers])
            .build()
        )

        mapper.get_request_handler_chain(intent_input)

        for handler in handlers:
            assert handler.seen_inputs == [intent_input]
            assert handler.seen_inputs[0] is intent_input

    def test_resolve_alias(self, launch_input, always_true):
        """Test resolve() is the same operation."""
        chain = RequestHandlerChain(always_true)
        mapper = RequestMapper.builder().add_request_handler_chain(chain).build()

        assert mapper.resolve(launch_input) is chain

    def test_predicate_failure_propagates(self, launch_input, always_true):
        """Test exceptions from can_handle reach the caller unchanged."""
        error = KeyError("missing slot")
        later = always_true
        mapper = (
            RequestMapper.builder()
            .add_request_handler_chain(RequestHandlerChain(ExplodingHandler(error)))
            .add_request_handler_chain(RequestHandlerChain(later))
            .build()
        )

        with pytest.raises(KeyError) as exc_info:
            mapper.get_request_handler_chain(launch_input)

        assert exc_info.value is error
        assert later.can_handle_calls == 0

    def test_repeated_resolution_is_stable(self):
        """Test the same input always yields the same chain."""
        launch = RequestHandlerChain(
            RecordingHandler(result=lambda i: isinstance(i.request, LaunchRequest))
        )
        ended = RequestHandlerChain(
            RecordingHandler(result=lambda i: isinstance(i.request, SessionEndedRequest))
        )
        mapper = RequestMapper.builder().with_request_handler_chains([launch, ended]).build()
        handler_input = make_input(SessionEndedRequest())

        results = {id(mapper.get_request_handler_chain(handler_input)) for _ in range(5)}

        assert results == {id(ended)}


class TestConcurrentResolution:
    """Tests for resolving from several threads at once."""

    def test_concurrent_resolution(self):
        """Test concurrent resolutions over one mapper are independent."""
        launch = RequestHandlerChain(
            FunctionRequestHandler(
                can_handle_func=lambda i: isinstance(i.request, LaunchRequest),
                handle_func=lambda i: "launch",
            )
        )
        hello = RequestHandlerChain(
            FunctionRequestHandler(
                can_handle_func=is_intent_name("HelloIntent"),
                handle_func=lambda i: "hello",
            )
        )
        mapper = RequestMapper.builder().with_request_handler_chains([launch, hello]).build()
        inputs = [
            (make_input(LaunchRequest()), launch),
            (make_input(IntentRequest(intent=Intent(name="HelloIntent"))), hello),
            (make_input(IntentRequest(intent=Intent(name="OtherIntent"))), None),
        ]
        mismatches: list[str] = []

        def worker() -> None:
            for _ in range(200):
                for handler_input, expected in inputs:
                    if mapper.get_request_handler_chain(handler_input) is not expected:
                        mismatches.append(handler_input.request.object_type)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert mismatches == []
