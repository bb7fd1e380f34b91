"""Tests for the headless command-line mode."""

import orjson

from main import run_headless


def test_headless_run_reaches_requested_tick():
    state = run_headless(max_ticks=20, stats_interval=5, seed=3)
    assert state.tick == 20
    assert state.clock == "00:20"
    assert state.running is False
    assert state.metrics.conflicts_averted == 0


def test_headless_arbitration_counts_accepts():
    state = run_headless(max_ticks=20, stats_interval=0, seed=3, arbitrate_every=5)
    assert state.metrics.conflicts_averted == 4
    assert state.pending_recommendation is None


def test_headless_export(tmp_path):
    target = tmp_path / "final.json"
    state = run_headless(max_ticks=10, stats_interval=0, seed=3, export_state=str(target))

    data = orjson.loads(target.read_bytes())
    assert data["tick"] == 10
    assert data == state.to_dict()


def test_headless_is_deterministic():
    first = run_headless(max_ticks=30, stats_interval=0, seed=9, arbitrate_every=3)
    second = run_headless(max_ticks=30, stats_interval=0, seed=9, arbitrate_every=3)
    assert first.to_dict() == second.to_dict()
