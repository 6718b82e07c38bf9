# ethicaldrive/reasoning/decision_engine.py
"""
Decision Engine — symbolic reasoning layer

Principles:
- Protect people > obey binding traffic law > avoid damage > progress
- Rules are evaluated top to bottom, first match wins
- Only object/signal presence is consulted (positions/context never)
- Stateless: every Decision is prebuilt and frozen
"""

from typing import Callable, Iterable, List, NamedTuple

from ethicaldrive.models.decision_model import Action, Decision
from ethicaldrive.models.perception_model import (
    DetectedObject,
    PerceptionSnapshot,
    TrafficSignal,
)


class Rule(NamedTuple):
    name: str
    guard: Callable[[PerceptionSnapshot], bool]
    decision: Decision


def _rule(name, guard, action, reason, confidence) -> Rule:
    return Rule(
        name=name,
        guard=guard,
        decision=Decision(
            action=action, reason=reason, confidence=confidence, rule=name
        ),
    )


# -----------------------------
# Rule table (priority order)
# -----------------------------
RULES = (
    _rule(
        "pedestrian",
        lambda s: s.has_object(DetectedObject.PEDESTRIAN),
        Action.BRAKE,
        "Pedestrian detected. Primary directive is to minimize human harm.",
        0.98,
    ),
    _rule(
        "red_light",
        lambda s: s.has_signal(TrafficSignal.RED),
        Action.STOP,
        "Red light detected. Adhering to traffic laws to ensure public safety.",
        0.99,
    ),
    _rule(
        "obstacle",
        lambda s: s.has_object(DetectedObject.OBSTACLE),
        Action.BRAKE,
        "Obstacle on road detected. Braking to avoid collision and property damage.",
        0.95,
    ),
    _rule(
        "green_light",
        lambda s: s.has_signal(TrafficSignal.GREEN),
        Action.CONTINUE,
        "Path is clear and traffic signal is green. Proceeding with standard caution.",
        0.90,
    ),
    _rule(
        "fallback",
        lambda s: True,
        Action.CONTINUE,
        "No immediate ethical risks or critical obstacles detected. Proceeding with caution.",
        0.85,
    ),
)


def decide(snapshot: PerceptionSnapshot) -> Decision:
    for rule in RULES:
        if rule.guard(snapshot):
            return rule.decision
    # unreachable: the fallback guard always matches
    return RULES[-1].decision


def decide_many(snapshots: Iterable[PerceptionSnapshot]) -> List[Decision]:
    return [decide(s) for s in snapshots]
