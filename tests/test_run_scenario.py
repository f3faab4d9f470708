from __future__ import annotations

import json

import run_scenario
from fleet import SystemStatus


SCENARIO = {
    "name": "evening",
    "description": "short shift ending in a shutdown",
    "building": {"num_floors": 6, "num_elevators": 2, "elevator_capacity": 2},
    "duration": 40,
    "report_interval": 5,
    "events": [
        {"time": 0, "type": "request", "start_floor": 1, "end_floor": 4},
        {"time": 0, "type": "request", "start_floor": 3, "end_floor": 3},
        {"time": 2, "type": "request", "start_floor": 5, "end_floor": 0},
        {"time": 20, "type": "stop"},
        {"time": 21, "type": "request", "start_floor": 2, "end_floor": 4},
    ],
}


def test_build_building_starts_by_default():
    building = run_scenario.build_building(SCENARIO)
    assert building.num_floors == 6
    assert building.system_status is SystemStatus.RUNNING


def test_build_building_without_autostart():
    building = run_scenario.build_building({**SCENARIO, "autostart": False})
    assert building.system_status is SystemStatus.OUT_OF_SERVICE


def test_run_scenario_counts_and_snapshots():
    building = run_scenario.build_building(SCENARIO)
    outcome = run_scenario.run_scenario(building, SCENARIO)
    assert outcome["accepted_requests"] == 2
    assert outcome["rejected_requests"] == 2
    assert [snapshot["time"] for snapshot in outcome["snapshots"]] == [5, 10, 15, 20, 25, 30, 35, 40]
    assert building.system_status is SystemStatus.OUT_OF_SERVICE


def test_random_traffic_is_reproducible():
    config = {**SCENARIO, "events": [], "random_requests": {"per_tick": 2, "seed": 11}}
    first = run_scenario.run_scenario(run_scenario.build_building(config), config)
    second = run_scenario.run_scenario(run_scenario.build_building(config), config)
    assert first == second
    assert first["accepted_requests"] == 80


def test_main_writes_output(tmp_path, capsys):
    config_path = tmp_path / "scenario.json"
    config_path.write_text(json.dumps(SCENARIO))
    output_path = tmp_path / "out" / "results.json"

    run_scenario.main([str(config_path), "--output", str(output_path)])

    results = json.loads(output_path.read_text())
    assert results["scenario"] == "evening"
    assert results["policy"] == "terminal"
    assert results["final_state"]["system_status"] == "out_of_service"
    printed = capsys.readouterr().out
    assert "Scenario: evening" in printed
    assert "System status: Out of Service" in printed
