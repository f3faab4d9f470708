"""CLI for running offline elevator dispatch scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from fleet import Building, BuildingConfig, RandomRequestSource, Request

logger = logging.getLogger("run_scenario")


def build_building(config: Dict) -> Building:
    building_cfg = BuildingConfig.from_dict(config.get("building", {}), policy=config.get("policy"))
    building = Building.from_config(building_cfg)
    if config.get("autostart", True):
        building.start()
    return building


def build_traffic(config: Dict, num_floors: int) -> Optional[RandomRequestSource]:
    random_cfg = config.get("random_requests")
    if not random_cfg:
        return None
    return RandomRequestSource(num_floors, random_seed=random_cfg.get("seed"))


def _apply_scheduled_events(building: Building, events: Iterable[Dict], current_time: int) -> Dict[str, int]:
    counts = {"accepted": 0, "rejected": 0}
    for event in events:
        if event.get("time") != current_time:
            continue
        kind = event.get("type")
        if kind == "request":
            request = Request(event["start_floor"], event["end_floor"])
            outcome = "accepted" if building.add_request(request) else "rejected"
            counts[outcome] += 1
        elif kind == "stop":
            building.stop()
        elif kind == "start":
            building.start()
        else:
            logger.warning("Ignoring unknown event type %r at t=%d", kind, current_time)
    return counts


def run_scenario(building: Building, config: Dict) -> Dict:
    duration = config.get("duration", 100)
    events = config.get("events", [])
    report_interval = max(1, config.get("report_interval", 10))
    traffic = build_traffic(config, building.num_floors)
    per_tick = config.get("random_requests", {}).get("per_tick", 0) if traffic else 0

    accepted = 0
    rejected = 0
    snapshots: List[Dict] = []
    for tick in range(duration):
        counts = _apply_scheduled_events(building, events, tick)
        accepted += counts["accepted"]
        rejected += counts["rejected"]
        if traffic and per_tick:
            fed = traffic.feed(building, per_tick)
            accepted += fed
            rejected += per_tick - fed

        building.step()
        if building.current_time % report_interval == 0:
            snapshot = building.status_snapshot().to_dict()
            snapshot["time"] = building.current_time
            snapshots.append(snapshot)

    return {
        "accepted_requests": accepted,
        "rejected_requests": rejected,
        "snapshots": snapshots,
    }


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write status snapshots as JSON",
    )
    parser.add_argument("--verbose", action="store_true", help="Log dispatcher decisions")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = json.loads(args.config.read_text())
    building = build_building(config)
    outcome = run_scenario(building, config)

    final_report = building.status_snapshot()
    results = {
        "scenario": config.get("name", args.config.stem),
        "description": config.get("description"),
        "duration": config.get("duration", 100),
        "policy": building.policy_name,
        "final_state": final_report.to_dict(),
        **outcome,
    }

    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(f"Policy: {results['policy']}")
    print(f"Duration: {results['duration']} ticks")
    print(f"Requests accepted: {outcome['accepted_requests']}, rejected: {outcome['rejected_requests']}")
    print(final_report, end="")
    if args.output:
        print(f"Saved snapshots to {args.output}")


if __name__ == "__main__":
    main()
