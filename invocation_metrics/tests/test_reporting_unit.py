"""Query filtering and exact report rendering."""
from __future__ import annotations

from invocation_metrics import (
    InstrumentationSettings,
    Interceptor,
    OperationKey,
    format_all,
    format_filtered,
    format_report,
    log_report,
    query_operations,
)
from invocation_metrics.base.metrics import RunningAggregate

PUSH = OperationKey("push", ("item: int",), "pkg.Stack")
PUSH_ALL = OperationKey("push_all", ("*items",), "pkg.Stack")
POP = OperationKey("pop", (), "pkg.Stack")


def _interceptor() -> Interceptor:
    interceptor = Interceptor(object(), [PUSH, PUSH_ALL, POP], identifier="report", settings=InstrumentationSettings())
    push = interceptor.aggregate_for(PUSH)
    push.record(100)
    push.record(300)
    return interceptor


def test_format_report_with_header_lines():
    agg = RunningAggregate()
    agg.record(10)
    agg.record(20)
    text = format_report(agg, "first", "second")
    assert text == "first\nsecond\nCount: 2\nMin: 10ns\nMax: 20ns\nAvg: 15.000000ns"


def test_format_report_without_samples():
    assert format_report(RunningAggregate()) == "Count: 0\nMin: 0ns\nMax: 0ns\nAvg: 0.000000ns"


def test_format_report_accepts_snapshots():
    agg = RunningAggregate()
    agg.record(7)
    assert format_report(agg.snapshot()) == format_report(agg)


def test_query_exact_match():
    matches = query_operations(_interceptor(), "push")
    assert [label for label, _ in matches] == ["pkg.Stack.push(item: int)"]
    assert matches[0][1].count == 2


def test_query_substring_match_and_stop_on_first():
    interceptor = _interceptor()
    labels = [label for label, _ in query_operations(interceptor, "pu", substring=True)]
    assert labels == ["pkg.Stack.push(item: int)", "pkg.Stack.push_all(*items)"]
    first = query_operations(interceptor, "p", substring=True, stop_on_first=True)
    assert [label for label, _ in first] == ["pkg.Stack.push(item: int)"]


def test_query_without_match_is_empty():
    assert query_operations(_interceptor(), "peek") == []
    assert query_operations(_interceptor(), "pus") == []
    assert format_filtered(_interceptor(), "peek") == ""


def test_format_all_renders_every_operation_in_order():
    expected = "\n".join(
        [
            "++++ Stats for pkg.Stack.push(item: int) ++++",
            "Count: 2",
            "Min: 100ns",
            "Max: 300ns",
            "Avg: 200.000000ns",
            "++++ Stats for pkg.Stack.push_all(*items) ++++",
            "Count: 0",
            "Min: 0ns",
            "Max: 0ns",
            "Avg: 0.000000ns",
            "++++ Stats for pkg.Stack.pop() ++++",
            "Count: 0",
            "Min: 0ns",
            "Max: 0ns",
            "Avg: 0.000000ns",
        ]
    )
    interceptor = _interceptor()
    assert format_all(interceptor) == expected
    assert interceptor.format_all() == expected


def test_format_filtered_matches_interceptor_shortcut():
    interceptor = _interceptor()
    text = format_filtered(interceptor, "push")
    assert text == "++++ Stats for pkg.Stack.push(item: int) ++++\nCount: 2\nMin: 100ns\nMax: 300ns\nAvg: 200.000000ns"
    assert interceptor.format("push") == text


def test_format_all_of_empty_interceptor_is_empty():
    assert format_all(Interceptor(object(), [], settings=InstrumentationSettings())) == ""


def test_log_report_emits_report_event(captured_events):
    interceptor = _interceptor()
    text = log_report(interceptor)
    [event] = [e for e in captured_events if e["event"] == "report"]
    assert event["report"] == text
    assert event["identifier"] == "report"
    assert event["target_type"] == "object"
