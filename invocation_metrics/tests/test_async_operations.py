"""Timing and failure handling of ``async def`` capability operations."""
from __future__ import annotations

import asyncio
import inspect

import pytest

from invocation_metrics import FailurePolicy, InstrumentationSettings, interceptor_of, wrap
from invocation_metrics.tests.helpers import Fetcher, SleepyFetcher


def _snapshot(proxy, name):
    [(_, agg)] = interceptor_of(proxy).stats_for(name)
    return agg.snapshot()


def test_async_operation_is_timed_across_the_await(identifier):
    proxy = wrap(SleepyFetcher(0.05), identifier)
    assert inspect.iscoroutinefunction(type(proxy).fetch)

    assert asyncio.run(proxy.fetch("a")) == "A"
    assert proxy.cached() == 1

    fetch = _snapshot(proxy, "fetch")
    assert fetch.count == 1
    assert fetch.min_ns >= 50_000_000
    assert _snapshot(proxy, "cached").count == 1


def test_async_failure_is_swallowed_and_counted(identifier, captured_events):
    proxy = wrap(SleepyFetcher(0), identifier)

    assert asyncio.run(proxy.fetch("missing")) is None

    fetch = _snapshot(proxy, "fetch")
    assert fetch.count == 0
    assert fetch.failure_by_code == {"not_found": 1}
    [event] = [e for e in captured_events if e["event"] == "invocation.failed"]
    assert event["operation"].endswith("Fetcher.fetch(key: str)")


def test_async_failure_propagates_under_propagate_policy(identifier):
    settings = InstrumentationSettings(failure_policy=FailurePolicy.PROPAGATE)
    proxy = wrap(SleepyFetcher(0), identifier, Fetcher, settings=settings)

    with pytest.raises(KeyError):
        asyncio.run(proxy.fetch("missing"))
    assert _snapshot(proxy, "fetch").failures == 1


def test_cancelled_await_is_counted_and_reraised(identifier):
    proxy = wrap(SleepyFetcher(10), identifier)

    async def scenario():
        task = asyncio.ensure_future(proxy.fetch("slow"))
        await asyncio.sleep(0.01)
        task.cancel()
        await task

    with pytest.raises(asyncio.CancelledError):
        asyncio.run(scenario())

    fetch = _snapshot(proxy, "fetch")
    assert fetch.count == 0
    assert fetch.failure_by_code == {"cancelled": 1}
