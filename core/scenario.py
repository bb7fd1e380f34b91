"""Default four-train scenario around the two-track junction."""

from typing import List

from core.trains import Train, TrainCategory


def create_default_trains() -> List[Train]:
    """Build the initial registry contents. All trains start moving."""
    return [
        Train(
            id="R101",
            name="Rajdhani Express",
            category=TrainCategory.EXPRESS,
            priority=9,
            position=10.0,
            target_position=90.0,
            speed=2.0,
            delay=0,
            track=1,
        ),
        Train(
            id="F205",
            name="Freight Train",
            category=TrainCategory.FREIGHT,
            priority=3,
            position=30.0,
            target_position=85.0,
            speed=1.0,
            delay=5,
            track=2,
        ),
        Train(
            id="P302",
            name="Passenger Local",
            category=TrainCategory.PASSENGER,
            priority=6,
            position=65.0,
            target_position=95.0,
            speed=1.5,
            delay=2,
            track=1,
        ),
        Train(
            id="E404",
            name="Express Mail",
            category=TrainCategory.EXPRESS,
            priority=8,
            position=45.0,
            target_position=88.0,
            speed=2.2,
            delay=0,
            track=2,
        ),
    ]
