from __future__ import annotations

from typing import Dict, Type

from .interface import CarView, DistributionPolicy
from .terminal import TerminalPickupPolicy

__all__ = [
    "CarView",
    "DistributionPolicy",
    "TerminalPickupPolicy",
    "get_policy",
]


POLICY_REGISTRY: Dict[str, Type[DistributionPolicy]] = {
    "terminal": TerminalPickupPolicy,
}


def get_policy(name: str, **kwargs) -> DistributionPolicy:
    cls = POLICY_REGISTRY.get(name.lower())
    if cls is None:
        raise ValueError(f"Unknown distribution policy '{name}'. Available: {', '.join(POLICY_REGISTRY)}")
    return cls(**kwargs)
