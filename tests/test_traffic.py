from __future__ import annotations

import random

import pytest

from fleet import Building, RandomRequestSource


def test_seeded_sources_agree():
    first = RandomRequestSource(11, random_seed=42).generate(50)
    second = RandomRequestSource(11, random_seed=42).generate(50)
    assert first == second


def test_injected_rng_is_used():
    rng = random.Random(3)
    expected = RandomRequestSource(6, rng=random.Random(3)).generate(5)
    assert RandomRequestSource(6, rng=rng).generate(5) == expected


def test_requests_are_always_valid():
    source = RandomRequestSource(2, random_seed=1)
    for request in source.generate(200):
        assert request.rejection_reason(2) is None


def test_feed_counts_accepted(building):
    source = RandomRequestSource(building.num_floors, random_seed=9)
    assert source.feed(building, 20) == 20
    assert len(building.up_requests) + len(building.down_requests) == 20


def test_feed_rejected_when_not_running():
    building = Building(11, 8, 3)
    assert RandomRequestSource(11, random_seed=9).feed(building, 5) == 0


def test_invalid_arguments():
    with pytest.raises(ValueError):
        RandomRequestSource(1)
    with pytest.raises(ValueError):
        RandomRequestSource(5).generate(-1)
