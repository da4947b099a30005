import pytest
from hypothesis import given
from hypothesis import strategies as st

from eventemitter import EventEmitter

pytestmark = pytest.mark.property


def _tagged(tag):
    def listener():
        return tag

    return listener


@given(st.lists(st.integers(min_value=-1000, max_value=1000), max_size=30))
def test_listeners_sorted_and_stable(priorities: list[int]):
    emitter = EventEmitter()
    callbacks = [_tagged(i) for i in range(len(priorities))]
    for priority, callback in zip(priorities, callbacks):
        emitter.on("evt", callback, priority)

    ordered = emitter.listeners("evt")
    expected = [callbacks[i] for i in sorted(range(len(priorities)), key=lambda i: priorities[i])]
    assert ordered == expected
    assert emitter.listeners("evt") == ordered


@given(
    st.lists(st.integers(min_value=0, max_value=200), min_size=1, max_size=20),
    st.data(),
)
def test_first_false_listener_stops_emission(priorities: list[int], data):
    emitter = EventEmitter()
    calls = []
    stop_at = data.draw(st.integers(min_value=0, max_value=len(priorities) - 1))

    for index, priority in enumerate(priorities):

        def listener(_index=index):
            calls.append(_index)
            return False if _index == stop_at else None

        emitter.on("evt", listener, priority)

    order = [i for _, i in sorted((p, i) for i, p in enumerate(priorities))]
    result = emitter.emit("evt")

    assert result is False
    assert calls == order[: order.index(stop_at) + 1]


@given(st.integers(min_value=0, max_value=10), st.integers(min_value=0, max_value=10))
def test_gate_call_count(listener_count: int, stop_after: int):
    emitter = EventEmitter()
    calls = []
    gate_calls = []

    for index in range(listener_count):
        emitter.on("evt", lambda _i=index: calls.append(_i))

    def gate():
        gate_calls.append(1)
        return len(gate_calls) < stop_after

    assert emitter.emit("evt", [], gate) is True
    stops_on = max(stop_after, 1)
    if listener_count == 0:
        assert gate_calls == []
        assert calls == []
    else:
        assert len(gate_calls) == min(listener_count - 1, stops_on)
        assert len(calls) == min(listener_count, stops_on)
