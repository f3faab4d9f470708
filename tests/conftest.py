from __future__ import annotations

from typing import List

import pytest

from fleet import Building


EMPTY_SLOTS = "< -- -- -- -- -- -- -- -- -- -- -->"


def waiting(floor: int, time: int, count: int) -> List[str]:
    return [f"Waiting[Floor {floor}, Time {time}]"] * count


def reports(building: Building) -> List[str]:
    return building.status_snapshot().elevator_texts()


@pytest.fixture
def building() -> Building:
    """Eleven floors, eight cars of capacity three, already running."""
    building = Building(11, 8, 3)
    building.start()
    return building
