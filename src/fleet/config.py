from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ElevatorTiming:
    """Tick counts that drive each car's door and idle countdowns."""

    door_open_ticks: int = 3
    idle_ticks: int = 5

    def __post_init__(self) -> None:
        if self.door_open_ticks < 1:
            raise ValueError("door_open_ticks must be at least 1")
        if self.idle_ticks < 1:
            raise ValueError("idle_ticks must be at least 1")


@dataclass
class BuildingConfig:
    """Dimensions and policy used to build a :class:`~fleet.building.Building`."""

    num_floors: int = 11
    num_elevators: int = 8
    elevator_capacity: int = 3
    timing: ElevatorTiming = field(default_factory=ElevatorTiming)
    policy: str = "terminal"

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]] = None, policy: Optional[str] = None) -> "BuildingConfig":
        data = data or {}
        defaults = cls()
        timing_cfg = data.get("timing", {})
        return cls(
            num_floors=data.get("num_floors", defaults.num_floors),
            num_elevators=data.get("num_elevators", defaults.num_elevators),
            elevator_capacity=data.get("elevator_capacity", defaults.elevator_capacity),
            timing=ElevatorTiming(**timing_cfg),
            policy=policy or data.get("policy", defaults.policy),
        )
