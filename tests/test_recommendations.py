"""Tests for recommendation generation, acceptance and rejection."""

import random
from unittest.mock import MagicMock

import pytest

from core.metrics import MetricsAggregator
from core.recommendations import RecommendationGenerator, select_winner
from core.registry import TrainRegistry
from core.scenario import create_default_trains
from core.trains import Train, TrainStatus


def contender(train_id: str, priority: int, position: float = 75) -> Train:
    return Train(
        id=train_id, name=f"Train {train_id}", priority=priority, position=position,
        target_position=100, speed=2.0,
    )


@pytest.fixture
def stub_rng():
    rng = MagicMock(spec=random.Random)
    rng.randrange.return_value = 7
    rng.random.return_value = 0.25
    rng.choice.side_effect = lambda seq: seq[1]
    return rng


class TestConflictBranch:
    def test_highest_priority_proceeds(self, contention_trains, stub_rng) -> None:
        generator = RecommendationGenerator(rng=stub_rng)
        recommendation = generator.generate(contention_trains, tick=12).unwrap()

        assert recommendation.conflict is True
        assert recommendation.proceed == ("A",)
        assert recommendation.halt == ("B",)
        assert recommendation.confidence == 0.87
        assert recommendation.projected_delay_saved == 7
        assert recommendation.created_at_tick == 12
        assert recommendation.reason == (
            "Prioritizing Alpha (Priority: 9) to minimize junction congestion "
            "and reduce total network delay."
        )
        stub_rng.randrange.assert_called_once_with(5, 15)

    def test_halt_keeps_registry_order(self) -> None:
        trains = [contender("C", 3), contender("A", 9), contender("B", 5)]
        recommendation = RecommendationGenerator().generate(trains).unwrap()
        assert recommendation.proceed == ("A",)
        assert recommendation.halt == ("C", "B")

    def test_priority_tie_goes_to_lowest_id(self) -> None:
        assert select_winner([contender("T2", 7), contender("T1", 7)]).id == "T1"

    def test_delay_saved_in_range(self, contention_trains, seeded_rng) -> None:
        for _ in range(50):
            generator = RecommendationGenerator(rng=seeded_rng)
            saved = generator.generate(contention_trains).unwrap().projected_delay_saved
            assert 5 <= saved < 15

    def test_generation_does_not_touch_trains(self, contention_trains) -> None:
        registry = TrainRegistry(contention_trains)
        before = registry.get()
        RecommendationGenerator().generate(registry.get())
        assert registry.get() == before


class TestAdvisoryBranch:
    def test_proceed_when_coin_is_low(self, stub_rng) -> None:
        trains = create_default_trains()
        recommendation = RecommendationGenerator(rng=stub_rng).generate(trains).unwrap()

        assert recommendation.conflict is False
        assert recommendation.proceed == ("F205",)
        assert recommendation.halt == ()
        assert recommendation.confidence == 0.92
        assert recommendation.reason == (
            "Current traffic flow is optimal. Suggested minor adjustment to "
            "Freight Train to maintain efficiency."
        )
        stub_rng.randrange.assert_called_once_with(2, 10)

    def test_halt_when_coin_is_high(self, stub_rng) -> None:
        stub_rng.random.return_value = 0.5
        recommendation = RecommendationGenerator(rng=stub_rng).generate(create_default_trains()).unwrap()
        assert recommendation.proceed == ()
        assert recommendation.halt == ("F205",)

    def test_exactly_one_train_named(self, seeded_rng) -> None:
        trains = create_default_trains()
        ids = {t.id for t in trains}
        for _ in range(30):
            recommendation = RecommendationGenerator(rng=seeded_rng).generate(trains).unwrap()
            named = recommendation.proceed + recommendation.halt
            assert len(named) == 1
            assert named[0] in ids
            assert 2 <= recommendation.projected_delay_saved < 10

    def test_same_seed_same_recommendation(self) -> None:
        trains = create_default_trains()
        first = RecommendationGenerator(rng=random.Random(7)).generate(trains).unwrap()
        second = RecommendationGenerator(rng=random.Random(7)).generate(trains).unwrap()
        assert first == second


class TestPendingSlot:
    def test_generate_while_pending_is_noop(self, contention_trains) -> None:
        generator = RecommendationGenerator()
        first = generator.generate(contention_trains).unwrap()

        result = generator.generate(contention_trains)
        assert result.is_err()
        assert generator.pending is first

    def test_generate_without_trains_is_err(self) -> None:
        generator = RecommendationGenerator()
        assert generator.generate([]).is_err()
        assert not generator.has_pending()

    def test_reject_clears_without_applying(self, contention_trains) -> None:
        registry = TrainRegistry(contention_trains)
        metrics = MetricsAggregator()
        generator = RecommendationGenerator()
        generator.generate(registry.get())

        assert generator.reject().is_ok()
        assert generator.pending is None
        assert registry.get() == tuple(contention_trains)
        assert metrics.conflicts_averted == 0

    def test_reject_without_pending_is_err(self) -> None:
        assert RecommendationGenerator().reject().is_err()

    def test_accept_without_pending_is_err(self, contention_trains) -> None:
        registry = TrainRegistry(contention_trains)
        metrics = MetricsAggregator()
        assert RecommendationGenerator().accept(registry, metrics).is_err()
        assert metrics.conflicts_averted == 0


class TestAccept:
    def test_applies_halt_and_proceed(self, contention_trains) -> None:
        registry = TrainRegistry(contention_trains)
        metrics = MetricsAggregator()
        generator = RecommendationGenerator()
        generator.generate(registry.get())

        assert generator.accept(registry, metrics).is_ok()

        a, b = registry.get()
        assert a.status is TrainStatus.MOVING
        assert a.speed == pytest.approx(1.2)
        assert b.status is TrainStatus.HALTED
        assert b.speed == 0
        assert metrics.conflicts_averted == 1
        assert generator.pending is None

    def test_counter_increments_once_per_accept(self) -> None:
        registry = TrainRegistry(create_default_trains())
        metrics = MetricsAggregator()
        generator = RecommendationGenerator(rng=random.Random(3))
        for expected in range(1, 4):
            generator.generate(registry.get())
            generator.accept(registry, metrics)
            assert metrics.conflicts_averted == expected

    def test_accept_recomputes_metrics(self) -> None:
        registry = TrainRegistry(create_default_trains())
        metrics = MetricsAggregator()
        generator = RecommendationGenerator(rng=random.Random(3))
        generator.generate(registry.get())
        generator.accept(registry, metrics)

        assert metrics.current.average_delay == 2
        assert metrics.current.efficiency_score == 93

    def test_unknown_ids_are_skipped(self, stub_rng) -> None:
        registry = TrainRegistry(create_default_trains())
        metrics = MetricsAggregator()
        generator = RecommendationGenerator(rng=stub_rng)
        generator.generate(registry.get())

        # F205 vanishes from the registry the generator will apply to
        other = TrainRegistry(t for t in create_default_trains() if t.id != "F205")
        before = other.get()

        assert generator.accept(other, metrics).is_ok()
        assert other.get() == before
        assert metrics.conflicts_averted == 1
