"""Tests for UpdateBus."""

import asyncio
import itertools
import logging
import random

import pytest

from ecosystem.models import BusState, UpdateKind
from ecosystem.update_bus import UpdateBus


async def _settle(task: asyncio.Task) -> None:
    await asyncio.wait_for(asyncio.gather(task, return_exceptions=True), timeout=2)


class TestUpdateBusLifecycle:
    """Tests for the IDLE/RUNNING timer lifecycle."""

    @pytest.mark.asyncio
    async def test_starts_idle(self, update_bus):
        """Test that a fresh bus has no timer."""
        assert update_bus.state == BusState.IDLE
        assert update_bus.subscriber_count == 0
        assert update_bus._task is None

    @pytest.mark.asyncio
    async def test_subscribe_unsubscribe_scenario(self, update_bus):
        """Test IDLE -> sub -> sub -> unsub -> unsub -> IDLE."""
        sub1 = update_bus.subscribe(lambda e: None)
        assert update_bus.state == BusState.RUNNING
        task = update_bus._task

        sub2 = update_bus.subscribe(lambda e: None)
        assert update_bus.state == BusState.RUNNING
        assert update_bus.subscriber_count == 2

        sub1()
        assert update_bus.state == BusState.RUNNING
        assert update_bus.subscriber_count == 1

        sub2()
        assert update_bus.state == BusState.IDLE
        assert update_bus.subscriber_count == 0

        await _settle(task)
        assert task.cancelled()
        assert update_bus._timer_starts == 1
        assert update_bus._timer_stops == 1

    @pytest.mark.asyncio
    async def test_timer_restarts_after_idle(self, update_bus):
        """Test that each 0->1 transition creates a new timer."""
        first = update_bus.subscribe(lambda e: None)
        first_task = update_bus._task
        first()

        second = update_bus.subscribe(lambda e: None)
        assert update_bus._task is not first_task
        second()

        assert update_bus._timer_starts == 2
        assert update_bus._timer_stops == 2

    @pytest.mark.asyncio
    async def test_random_sequence_keeps_state_consistent(self, update_bus):
        """Test RUNNING iff subscribers > 0 over a random op sequence."""
        rng = random.Random(7)
        handles = []
        transitions_up = 0
        transitions_down = 0

        for _ in range(300):
            before = update_bus.subscriber_count
            if handles and rng.random() < 0.5:
                handles.pop(rng.randrange(len(handles)))()
            else:
                handles.append(update_bus.subscribe(lambda e: None))
            after = update_bus.subscriber_count

            if before == 0 and after == 1:
                transitions_up += 1
            if before == 1 and after == 0:
                transitions_down += 1

            assert after == len(handles)
            assert (update_bus.state == BusState.RUNNING) == (after > 0)

        assert update_bus._timer_starts == transitions_up
        assert update_bus._timer_stops == transitions_down

    @pytest.mark.asyncio
    async def test_unsubscribe_is_idempotent(self, update_bus):
        """Test that a handle only ever removes its own subscription."""
        calls = []
        sub1 = update_bus.subscribe(lambda e: calls.append("a"))
        update_bus.subscribe(lambda e: calls.append("b"))

        sub1()
        sub1.unsubscribe()
        sub1()

        assert update_bus.subscriber_count == 1
        assert update_bus.state == BusState.RUNNING
        assert not sub1.active

    @pytest.mark.asyncio
    async def test_same_callback_twice_is_two_subscriptions(
        self, update_bus, make_event
    ):
        """Test that subscriptions are per call, not per callable."""
        calls = []

        def handler(event):
            calls.append(event)

        sub1 = update_bus.subscribe(handler)
        update_bus.subscribe(handler)
        update_bus.trigger_update(make_event())
        assert len(calls) == 2

        sub1()
        update_bus.trigger_update(make_event())
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_close_drops_everything(self, update_bus):
        """Test that close() unsubscribes all and stops the timer."""
        sub = update_bus.subscribe(lambda e: None)
        update_bus.subscribe(lambda e: None)

        update_bus.close()

        assert update_bus.state == BusState.IDLE
        assert update_bus.subscriber_count == 0
        assert not sub.active

    def test_subscribe_requires_running_loop(self, scripted_generator):
        """Test that the first subscribe outside an event loop fails cleanly."""
        bus = UpdateBus(interval=1, generator=scripted_generator)

        with pytest.raises(RuntimeError):
            bus.subscribe(lambda e: None)

        assert bus.subscriber_count == 0
        assert bus.state == BusState.IDLE

    def test_interval_must_be_positive(self):
        """Test that a non-positive interval is rejected."""
        with pytest.raises(ValueError):
            UpdateBus(interval=0)


class TestUpdateBusDelivery:
    """Tests for trigger_update fan-out."""

    @pytest.mark.asyncio
    async def test_fan_out_to_three_subscribers(self, update_bus, make_event):
        """Test that each subscriber receives the event exactly once, in order."""
        calls = []
        for name in ("first", "second", "third"):
            update_bus.subscribe(lambda e, name=name: calls.append((name, e)))

        event = make_event("asset", {"id": "gmb-main", "status": "active"})
        delivered = update_bus.trigger_update(event)

        assert delivered == 3
        assert [name for name, _ in calls] == ["first", "second", "third"]
        assert all(received == event for _, received in calls)

    @pytest.mark.asyncio
    async def test_trigger_without_subscribers(self, update_bus, make_event):
        """Test that triggering an idle bus delivers nowhere and stays idle."""
        assert update_bus.trigger_update(make_event()) == 0
        assert update_bus.state == BusState.IDLE

    @pytest.mark.asyncio
    async def test_failing_subscriber_is_isolated(
        self, update_bus, make_event, caplog
    ):
        """Test that errors in one subscriber don't affect others."""
        calls = []

        def failing(event):
            calls.append("failing")
            raise RuntimeError("Test error")

        update_bus.subscribe(failing)
        update_bus.subscribe(lambda e: calls.append("normal"))

        with caplog.at_level(logging.ERROR):
            delivered = update_bus.trigger_update(make_event())

        assert delivered == 2
        assert calls == ["failing", "normal"]
        assert "Error in subscriber" in caplog.text
        assert update_bus.state == BusState.RUNNING

    @pytest.mark.asyncio
    async def test_subscriber_cannot_edit_payload(self, update_bus, make_event):
        """Test that later subscribers see the payload as it was triggered."""
        seen = []

        def tamper(event):
            event.payload["status"] = "tampered"

        update_bus.subscribe(tamper)
        update_bus.subscribe(lambda e: seen.append(e.payload["status"]))

        delivered = update_bus.trigger_update(
            make_event("asset", {"status": "warning"})
        )

        assert delivered == 2
        assert seen == ["warning"]

    def test_payload_is_copied_on_construction(self, make_event):
        """Test that editing the source dict does not reach the event."""
        source = {"status": "active"}
        event = make_event("asset", source)

        source["status"] = "warning"

        assert event.payload == {"status": "active"}
        with pytest.raises(TypeError):
            event.payload["status"] = "warning"


class TestUpdateBusReentrancy:
    """Tests for subscribe/unsubscribe from inside a callback."""

    @pytest.mark.asyncio
    async def test_unsubscribing_later_subscriber_still_delivers(
        self, update_bus, make_event
    ):
        """Test that a subscriber removed mid-delivery still gets that event."""
        calls = []
        handles = {}

        def remover(event):
            calls.append("remover")
            handles["victim"]()

        update_bus.subscribe(remover)
        handles["victim"] = update_bus.subscribe(lambda e: calls.append("victim"))

        update_bus.trigger_update(make_event())
        assert calls == ["remover", "victim"]

        update_bus.trigger_update(make_event())
        assert calls == ["remover", "victim", "remover"]

    @pytest.mark.asyncio
    async def test_self_unsubscribe_during_delivery(self, update_bus, make_event):
        """Test that a subscriber may unsubscribe itself without skipping others."""
        calls = []
        handles = {}

        def once(event):
            calls.append("once")
            handles["once"]()

        handles["once"] = update_bus.subscribe(once)
        update_bus.subscribe(lambda e: calls.append("steady"))

        update_bus.trigger_update(make_event())
        update_bus.trigger_update(make_event())

        assert calls == ["once", "steady", "steady"]

    @pytest.mark.asyncio
    async def test_subscriber_added_mid_delivery_waits_for_next(
        self, update_bus, make_event
    ):
        """Test that a subscriber added mid-delivery first hears the next event."""
        calls = []
        added = []

        def adder(event):
            calls.append("adder")
            if not added:
                added.append(update_bus.subscribe(lambda e: calls.append("late")))

        update_bus.subscribe(adder)

        update_bus.trigger_update(make_event())
        assert calls == ["adder"]

        update_bus.trigger_update(make_event())
        assert calls == ["adder", "adder", "late"]


class TestUpdateBusTimer:
    """Tests for timer-driven delivery."""

    @pytest.mark.asyncio
    async def test_ticks_deliver_generated_events(self, scripted_generator):
        """Test that each tick delivers one generated event to every subscriber."""
        bus = UpdateBus(interval=0.01, generator=scripted_generator)
        first, second = [], []
        done = asyncio.Event()

        def on_first(event):
            first.append(event)
            if len(first) >= 3:
                done.set()

        sub1 = bus.subscribe(on_first)
        sub2 = bus.subscribe(second.append)
        await asyncio.wait_for(done.wait(), timeout=2)
        sub1()
        sub2()

        assert [e.kind for e in first[:3]] == [
            UpdateKind.ASSET,
            UpdateKind.TASK,
            UpdateKind.METRIC,
        ]
        assert [e.payload["seq"] for e in first[:3]] == [1, 2, 3]
        assert second[:3] == first[:3]
        assert bus.ticks >= 3

    @pytest.mark.asyncio
    async def test_no_events_after_last_unsubscribe(self, scripted_generator):
        """Test that the timer stops producing once the bus is idle."""
        bus = UpdateBus(interval=0.01, generator=scripted_generator)
        calls = []
        done = asyncio.Event()

        def handler(event):
            calls.append(event)
            done.set()

        sub = bus.subscribe(handler)
        await asyncio.wait_for(done.wait(), timeout=2)
        sub()
        seen = len(calls)
        ticks = bus.ticks

        await asyncio.sleep(0.05)

        assert len(calls) == seen
        assert bus.ticks == ticks

    @pytest.mark.asyncio
    async def test_unsubscribe_inside_tick_stops_timer(self, scripted_generator):
        """Test that the last subscriber leaving during a tick cancels the timer."""
        bus = UpdateBus(interval=0.01, generator=scripted_generator)
        calls = []
        handles = {}

        def handler(event):
            calls.append(event)
            handles["sub"]()

        handles["sub"] = bus.subscribe(handler)
        task = bus._task
        await _settle(task)

        assert len(calls) == 1
        assert bus.state == BusState.IDLE
        assert task.cancelled()

    @pytest.mark.asyncio
    async def test_generator_failure_does_not_stop_timer(self, make_event, caplog):
        """Test that a failing generator is logged and the next tick proceeds."""
        attempts = itertools.count()

        def flaky():
            if next(attempts) == 0:
                raise RuntimeError("generator broke")
            return make_event("metric", {"value": 95})

        bus = UpdateBus(interval=0.01, generator=flaky)
        done = asyncio.Event()
        calls = []

        def handler(event):
            calls.append(event)
            done.set()

        with caplog.at_level(logging.ERROR):
            sub = bus.subscribe(handler)
            await asyncio.wait_for(done.wait(), timeout=2)
            sub()

        assert calls[0].payload == {"value": 95}
        assert "Update generator failed" in caplog.text
