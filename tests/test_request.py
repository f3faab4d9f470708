from __future__ import annotations

import dataclasses
import logging

import pytest

from fleet import Building, Direction, Request


def test_direction():
    assert Request(2, 3).direction is Direction.UP
    assert Request(3, 2).direction is Direction.DOWN


def test_renders_one_indexed():
    assert str(Request(2, 3)) == "3->4"
    assert str(Request(10, 0)) == "11->1"


def test_rejection_reason():
    assert Request(0, 10).rejection_reason(11) is None
    assert Request(0, 11).rejection_reason(11) == "end floor is not valid"
    assert Request(-1, 3).rejection_reason(11) == "start floor is not valid"
    assert Request(4, 4).rejection_reason(11) == "start and end floor are the same"


def test_building_logs_rejection_reason(caplog):
    building = Building(11, 1, 1)
    building.start()
    with caplog.at_level(logging.INFO, logger="fleet.building"):
        assert not building.add_request(Request(4, 4))
    assert "Request 5->5 rejected: start and end floor are the same" in caplog.text


def test_immutable():
    request = Request(1, 2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        request.start_floor = 5
    assert request.floors() == (1, 2)
