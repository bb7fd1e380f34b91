import time
from unittest.mock import MagicMock

import orjson
import pytest

from backend.simulation_runner import SimulationRunner
from core.config.simulation_config import SimulationConfig
from core.world import RailWorld


class TestSimulationRunnerCommands:
    @pytest.fixture
    def runner(self):
        """Create a SimulationRunner around a seeded default world."""
        return SimulationRunner(world=RailWorld(seed=123))

    def test_handle_unknown_command(self, runner):
        result = runner.handle_command("unknown_command")
        assert result["success"] is False
        assert "Unknown command" in result["error"]

    def test_start_stop(self, runner):
        assert runner.handle_command("start") == {"success": True}
        assert runner.world.running is True

        assert runner.handle_command("stop") == {"success": True}
        assert runner.world.running is False

    def test_request_and_accept_recommendation(self, runner):
        result = runner.handle_command("request_recommendation")
        assert result["success"] is True
        assert result["recommendation"]["confidence"] == 0.92

        result = runner.handle_command("request_recommendation")
        assert result["success"] is False
        assert "pending" in result["error"]

        assert runner.handle_command("accept_recommendation") == {"success": True}
        assert runner.world.metrics.conflicts_averted == 1

    def test_reject_without_pending(self, runner):
        result = runner.handle_command("reject_recommendation")
        assert result["success"] is False

    def test_inject_disruption(self, runner):
        result = runner.handle_command("inject_disruption", {"train_id": "F205", "minutes": 5})
        assert result["success"] is True
        assert result["train"]["delay"] == 10
        assert result["train"]["status"] == "delayed"

    @pytest.mark.parametrize(
        "data",
        [{}, {"train_id": "F205"}, {"train_id": "F205", "minutes": 0}, {"train_id": "X999", "minutes": 5}],
    )
    def test_inject_disruption_noop(self, runner, data):
        before = runner.world.get_state()
        result = runner.handle_command("inject_disruption", data)
        assert result["success"] is False
        assert runner.world.get_state() == before

    def test_reset(self, runner):
        runner.handle_command("start")
        runner.step()
        runner.handle_command("inject_disruption", {"train_id": "F205", "minutes": 5})

        runner.handle_command("reset")

        state = runner.get_state()
        assert state.tick == 0
        assert state.running is False
        assert next(t for t in state.trains if t.id == "F205").delay == 5

    def test_commands_invalidate_state_cache(self, runner):
        runner._invalidate_state_cache = MagicMock()
        runner.handle_command("inject_disruption", {"train_id": "F205", "minutes": 5})
        assert runner._invalidate_state_cache.called


class TestSimulationRunnerState:
    @pytest.fixture
    def runner(self):
        return SimulationRunner(world=RailWorld(seed=123))

    def test_step_only_ticks_while_running(self, runner):
        assert runner.step() is False
        assert runner.world.clock.tick == 0

        runner.handle_command("start")
        assert runner.step() is True
        assert runner.world.clock.tick == 1

    def test_state_cached_per_tick(self, runner):
        first = runner.get_state()
        assert runner.get_state() is first

        runner.handle_command("start")
        runner.step()
        second = runner.get_state()
        assert second is not first
        assert second.tick == 1
        assert second.clock == "00:01"

    def test_command_refreshes_state(self, runner):
        runner.get_state()
        runner.handle_command("request_recommendation")
        assert runner.get_state().pending_recommendation is not None

    def test_serialize_state(self, runner):
        data = orjson.loads(runner.serialize_state(runner.get_state()))
        assert data["type"] == "full"
        assert data["tick"] == 0
        assert data["metrics"]["efficiency_score"] == 95
        assert data["pending_recommendation"] is None
        assert data["contention"] == []
        assert data["tick_seconds"] == runner.tick_seconds
        assert [t["id"] for t in data["trains"]] == ["R101", "F205", "P302", "E404"]


class TestSimulationRunnerThread:
    def test_thread_lifecycle(self):
        world = RailWorld(config=SimulationConfig(seed=1, tick_seconds=0.01))
        runner = SimulationRunner(world=world)

        runner.start()
        assert runner.running is True
        assert runner.thread.is_alive()
        assert world.running is False

        runner.stop()
        assert runner.running is False
        assert runner.thread is None

    def test_running_world_advances(self):
        world = RailWorld(config=SimulationConfig(seed=1, tick_seconds=0.01))
        runner = SimulationRunner(world=world)

        runner.start(start_running=True)
        try:
            deadline = time.time() + 2.0
            while world.clock.tick < 3 and time.time() < deadline:
                time.sleep(0.01)
        finally:
            runner.stop()

        assert world.clock.tick >= 3

    def test_stopped_world_does_not_advance(self):
        world = RailWorld(config=SimulationConfig(seed=1, tick_seconds=0.01))
        runner = SimulationRunner(world=world)

        runner.start()
        try:
            time.sleep(0.1)
        finally:
            runner.stop()

        assert world.clock.tick == 0
