"""Tests for the simulation clock."""

import threading
import time

import pytest

from lifeline.network.node_types import NodeType
from lifeline.simulation.clock import SimulationClock


def _wait_for(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


class TestStopped:
    def test_invalid_period(self, engine):
        with pytest.raises(ValueError):
            SimulationClock(engine, period=0)

    def test_period_defaults_to_settings(self, engine):
        clock = SimulationClock(engine)
        assert clock.period == engine.settings.tick_period
        assert not clock.is_running

    def test_step_runs_one_tick(self, engine, source_sink):
        _, sink, _ = source_sink
        clock = SimulationClock(engine)

        report = clock.step()

        assert engine.tick_count == 1
        assert report.delivered == 40.0
        assert engine.get_node(sink).load == 40.0

    def test_submit_waits_for_drain(self, engine):
        clock = SimulationClock(engine)

        future = clock.submit(engine.add_node, NodeType.HUB)
        assert not future.done()
        assert engine.graph.node_count == 0

        assert clock.drain() == 1
        assert future.result() == "node-1"
        assert engine.graph.node_count == 1

    def test_step_applies_commands_before_ticking(self, engine, source_sink):
        _, _, edge = source_sink
        clock = SimulationClock(engine)

        clock.submit(engine.update_edge, edge, max_flow=20)
        clock.step()

        assert engine.get_edge(edge).flow == 20.0

    def test_command_error_lands_on_future(self, engine):
        clock = SimulationClock(engine)

        future = clock.submit(engine.add_node, "SPACESHIP")
        clock.drain()

        with pytest.raises(ValueError):
            future.result()


class TestRunning:
    def test_ticks_periodically(self, engine, source_sink):
        clock = SimulationClock(engine, period=0.01)
        clock.start()
        try:
            assert clock.is_running
            assert _wait_for(lambda: engine.tick_count >= 2)
        finally:
            clock.stop()

        assert not clock.is_running

    def test_start_is_idempotent(self, engine):
        clock = SimulationClock(engine, period=0.01)
        clock.start()
        thread = clock._thread
        try:
            clock.start()
            assert clock._thread is thread
        finally:
            clock.stop()
        clock.stop()

    def test_submit_while_running(self, engine):
        clock = SimulationClock(engine, period=0.01)
        clock.start()
        try:
            future = clock.submit(engine.add_node, NodeType.SINK)
            assert future.result(timeout=2.0) == "node-1"
        finally:
            clock.stop()

    def test_drain_and_step_refused_while_running(self, engine):
        clock = SimulationClock(engine, period=0.01)
        clock.start()
        try:
            with pytest.raises(RuntimeError):
                clock.drain()
            with pytest.raises(RuntimeError):
                clock.step()
        finally:
            clock.stop()

    def test_stop_runs_pending_commands(self, engine):
        clock = SimulationClock(engine, period=0.01)
        clock.start()
        futures = [clock.submit(engine.add_node, NodeType.HUB) for _ in range(5)]
        clock.stop()

        assert all(f.done() for f in futures)
        assert engine.graph.node_count == 5

    def test_no_tick_after_stop(self, engine):
        clock = SimulationClock(engine, period=0.01)
        clock.start()
        _wait_for(lambda: engine.tick_count >= 1)
        clock.stop()

        count = engine.tick_count
        time.sleep(0.05)
        assert engine.tick_count == count

    def test_overrun_skips_ticks(self, engine):
        engine.subscribe(lambda: time.sleep(0.05))
        clock = SimulationClock(engine, period=0.01)
        clock.start()
        try:
            assert _wait_for(lambda: engine.tick_count >= 2)
        finally:
            clock.stop()

        assert clock.ticks_skipped >= 1

    def test_ticks_never_overlap(self, engine, source_sink):
        active = []
        overlaps = []
        lock = threading.Lock()

        def subscriber():
            with lock:
                if active:
                    overlaps.append(1)
                active.append(1)
            time.sleep(0.002)
            with lock:
                active.pop()

        engine.subscribe(subscriber)
        clock = SimulationClock(engine, period=0.005)
        clock.start()
        try:
            for _ in range(10):
                clock.submit(engine.add_node, NodeType.HUB)
            assert _wait_for(lambda: engine.tick_count >= 3)
        finally:
            clock.stop()

        assert overlaps == []


class TestConcurrentReads:
    def test_reads_never_see_a_partial_tick(self, engine):
        sinks = []
        for _ in range(200):
            source = engine.add_node(NodeType.SOURCE)
            sink = engine.add_node(NodeType.SINK)
            engine.add_edge(source, sink)
            sinks.append(sink)
        engine.tick()

        partial = []
        clock = SimulationClock(engine, period=0.001)
        clock.start()
        try:
            deadline = time.monotonic() + 0.3
            while time.monotonic() < deadline:
                snapshot = engine.snapshot()
                loads = {snapshot.node(sink).load for sink in sinks}
                if loads != {40.0}:
                    partial.append(loads)
        finally:
            clock.stop()

        assert engine.tick_count > 1
        assert partial == []

    def test_reads_during_structural_changes(self, engine):
        clock = SimulationClock(engine, period=0.001)
        clock.start()
        try:
            futures = [clock.submit(engine.add_node, NodeType.HUB) for _ in range(200)]
            while not all(f.done() for f in futures):
                snapshot = engine.snapshot()
                assert len(engine.list_nodes()) >= len(snapshot.nodes)
                for node in snapshot.nodes:
                    assert snapshot.node(node.id) is node
        finally:
            clock.stop()

        assert len(engine.list_nodes()) == 200


class TestStopFromSubscriber:
    def test_subscriber_can_stop_the_clock(self, engine, source_sink):
        clock = SimulationClock(engine, period=0.01)
        engine.subscribe(clock.stop)
        clock.start()
        thread = clock._thread

        thread.join(timeout=2.0)

        assert not thread.is_alive()
        assert not clock.is_running
        assert engine.tick_count == 1

        clock.start()
        try:
            assert _wait_for(lambda: engine.tick_count >= 2)
        finally:
            clock.stop()
