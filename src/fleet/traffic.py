from __future__ import annotations

import random
from typing import TYPE_CHECKING, List, Optional

from .request import Request

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from .building import Building


class RandomRequestSource:
    """Generates random floor-to-floor requests from an injectable RNG."""

    def __init__(
        self,
        num_floors: int,
        rng: Optional[random.Random] = None,
        random_seed: Optional[int] = None,
    ) -> None:
        if num_floors < 2:
            raise ValueError("Random requests need at least two floors")
        self.num_floors = num_floors
        self.random = rng or random.Random(random_seed)

    def next_request(self) -> Request:
        start = self.random.randrange(self.num_floors)
        # Draw from the remaining floors so start and end always differ.
        end = self.random.randrange(self.num_floors - 1)
        if end >= start:
            end += 1
        return Request(start, end)

    def generate(self, count: int) -> List[Request]:
        if count < 0:
            raise ValueError("count must not be negative")
        return [self.next_request() for _ in range(count)]

    def feed(self, building: "Building", count: int) -> int:
        """Submit ``count`` random requests and return how many were accepted."""
        return sum(1 for request in self.generate(count) if building.add_request(request))
