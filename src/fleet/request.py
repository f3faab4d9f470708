from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .states import Direction


@dataclass(frozen=True)
class Request:
    """A rider's intent to travel from one floor to another (0-indexed)."""

    start_floor: int
    end_floor: int

    @property
    def direction(self) -> Direction:
        """Return UP when travelling to a higher floor, DOWN otherwise."""
        return Direction.UP if self.start_floor < self.end_floor else Direction.DOWN

    def floors(self) -> Tuple[int, int]:
        return self.start_floor, self.end_floor

    def rejection_reason(self, num_floors: int) -> Optional[str]:
        """Why this request cannot be served in a building of ``num_floors``, or None."""
        if not 0 <= self.start_floor < num_floors:
            return "start floor is not valid"
        if not 0 <= self.end_floor < num_floors:
            return "end floor is not valid"
        if self.start_floor == self.end_floor:
            return "start and end floor are the same"
        return None

    def __str__(self) -> str:
        # Displayed 1-indexed, the way riders number floors.
        return f"{self.start_floor + 1}->{self.end_floor + 1}"
