"""Failure handling of delegated calls under both policies."""
from __future__ import annotations

from collections.abc import MutableSequence

import pytest

from invocation_metrics import FailurePolicy, InstrumentationSettings, Interceptor, OperationKey, interceptor_of, wrap
from invocation_metrics.tests.helpers import ListStack


def _aggregate(proxy, name):
    [(_, agg)] = interceptor_of(proxy).stats_for(name)
    return agg


def test_swallow_returns_none_and_skips_sample(identifier, captured_events):
    proxy = wrap(ListStack(), identifier)
    proxy.push(1)

    assert proxy.pop() == 1
    assert proxy.pop() is None  # empty stack raised IndexError

    pop = _aggregate(proxy, "pop").snapshot()
    assert pop.count == 1
    assert pop.failures == 1
    assert pop.failure_by_code == {"not_found": 1}
    push = _aggregate(proxy, "push").snapshot()
    assert push.count == 1 and push.failures == 0

    [event] = [e for e in captured_events if e["event"] == "invocation.failed"]
    assert event["_level"] == "ERROR"
    assert event["_has_exc"] is True
    assert event["identifier"] == identifier
    assert event["operation"].endswith("Stack.pop()")
    assert event["target_type"] == "ListStack"
    assert event["error_code"] == "not_found"
    assert event["policy"] == "swallow"


def test_failure_leaves_timing_fields_untouched(identifier):
    proxy = wrap(ListStack(), identifier)
    proxy.push(5)
    proxy.peek()
    before = _aggregate(proxy, "peek").snapshot()
    proxy.pop()
    proxy.peek()  # IndexError, swallowed
    after = _aggregate(proxy, "peek").snapshot()
    assert (after.count, after.min_ns, after.max_ns, after.total_ns) == (
        before.count,
        before.min_ns,
        before.max_ns,
        before.total_ns,
    )
    assert after.failures == before.failures + 1


def test_propagate_reraises_original_exception(identifier, captured_events):
    settings = InstrumentationSettings(failure_policy=FailurePolicy.PROPAGATE)
    proxy = wrap(ListStack(), identifier, settings=settings)
    with pytest.raises(IndexError):
        proxy.pop()
    pop = _aggregate(proxy, "pop").snapshot()
    assert pop.count == 0 and pop.failures == 1
    assert [e["policy"] for e in captured_events if e["event"] == "invocation.failed"] == ["propagate"]


def test_policy_from_environment(identifier, monkeypatch):
    monkeypatch.setenv("INVOCATION_METRICS_FAILURE_POLICY", "PROPAGATE")
    proxy = wrap(ListStack(), identifier)
    with pytest.raises(IndexError):
        proxy.peek()


def test_failure_logging_can_be_disabled(identifier, captured_events):
    settings = InstrumentationSettings(log_failures=False)
    proxy = wrap(ListStack(), identifier, settings=settings)
    assert proxy.pop() is None
    assert not [e for e in captured_events if e["event"] == "invocation.failed"]
    assert _aggregate(proxy, "pop").failures == 1


def test_operation_without_aggregate_still_delegates():
    target = ListStack()
    interceptor = Interceptor(target, [], settings=InstrumentationSettings())
    assert interceptor.invoke(OperationKey("push"), (7,)) is None
    assert interceptor.invoke(OperationKey("peek")) == 7
    assert len(interceptor.aggregates) == 0
    assert interceptor.aggregate_for(OperationKey("peek")) is None


def test_missing_target_method_is_a_delegation_failure():
    key = OperationKey("greet", ("name: str",))
    interceptor = Interceptor(ListStack(), [key], settings=InstrumentationSettings(log_failures=False))
    assert interceptor.invoke(key, ("bob",)) is None
    snap = interceptor.aggregate_for(key).snapshot()
    assert snap.count == 0 and snap.failure_by_code == {"unknown": 1}


def test_swallowed_in_place_failure_rebinds_caller_to_none(identifier):
    proxy = wrap([], identifier, MutableSequence)
    alias = proxy
    proxy += 5  # list += int raises TypeError
    assert proxy is None
    assert _aggregate(alias, "__iadd__").snapshot().failure_by_code == {"validation": 1}


def test_propagated_in_place_failure_keeps_caller_binding(identifier):
    settings = InstrumentationSettings(failure_policy=FailurePolicy.PROPAGATE)
    proxy = wrap([], identifier, MutableSequence, settings=settings)
    with pytest.raises(TypeError):
        proxy += 5
    assert interceptor_of(proxy).identifier == identifier
