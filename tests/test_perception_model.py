import pytest
from pydantic import ValidationError

from ethicaldrive.models.decision_model import Action, Decision
from ethicaldrive.models.perception_model import (
    DetectedObject,
    OBJECT_VOCABULARIES,
    PerceptionSnapshot,
)


def test_unknown_object_is_rejected():
    with pytest.raises(ValidationError):
        PerceptionSnapshot(objects=["unicorn"])


def test_unknown_signal_is_rejected():
    with pytest.raises(ValidationError):
        PerceptionSnapshot(signals=["blue_light"])


def test_animal_rejected_under_v1():
    with pytest.raises(ValidationError):
        PerceptionSnapshot(objects=["animal"], vocabulary="v1")


def test_animal_accepted_under_v2():
    s = PerceptionSnapshot(objects=["animal"])
    assert s.vocabulary == "v2"
    assert s.has_object(DetectedObject.ANIMAL)


def test_v1_is_subset_of_v2():
    assert OBJECT_VOCABULARIES["v1"] < OBJECT_VOCABULARIES["v2"]


def test_snapshot_is_frozen():
    s = PerceptionSnapshot(objects=["car"])
    with pytest.raises(ValidationError):
        s.objects = ("pedestrian",)


def test_positions_need_not_align_with_objects():
    s = PerceptionSnapshot(objects=["car"], positions=["ahead", "behind", "left"])
    assert len(s.positions) == 3


def test_decision_confidence_bounds():
    with pytest.raises(ValidationError):
        Decision(action=Action.BRAKE, reason="x", confidence=0.0, rule="x")
    with pytest.raises(ValidationError):
        Decision(action=Action.BRAKE, reason="x", confidence=1.5, rule="x")
