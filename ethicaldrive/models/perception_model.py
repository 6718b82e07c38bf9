from enum import Enum
from typing import Dict, FrozenSet, Literal, Tuple

from pydantic import BaseModel, ConfigDict, model_validator


class DetectedObject(str, Enum):
    PEDESTRIAN = "pedestrian"
    CAR = "car"
    OBSTACLE = "obstacle"
    TRAFFIC_LIGHT = "traffic_light"
    ANIMAL = "animal"


class TrafficSignal(str, Enum):
    RED = "red_light"
    GREEN = "green_light"
    YELLOW = "yellow_light"


# ----------------------------
# Closed object vocabularies
# v1 predates the animal category
# ----------------------------
VocabularyVersion = Literal["v1", "v2"]

OBJECT_VOCABULARIES: Dict[str, FrozenSet[DetectedObject]] = {
    "v1": frozenset({
        DetectedObject.PEDESTRIAN,
        DetectedObject.CAR,
        DetectedObject.OBSTACLE,
        DetectedObject.TRAFFIC_LIGHT,
    }),
    "v2": frozenset(DetectedObject),
}

DEFAULT_VOCABULARY: VocabularyVersion = "v2"


class PerceptionSnapshot(BaseModel):
    """
    One immutable perception record.

    - objects / signals: only presence matters downstream
    - positions: free-text labels, not aligned with objects
    - context: forwarded to the narrative generator only
    """

    model_config = ConfigDict(frozen=True)

    objects: Tuple[DetectedObject, ...] = ()
    positions: Tuple[str, ...] = ()
    signals: Tuple[TrafficSignal, ...] = ()
    context: str = ""
    vocabulary: VocabularyVersion = DEFAULT_VOCABULARY

    @model_validator(mode="after")
    def check_vocabulary(self):
        allowed = OBJECT_VOCABULARIES[self.vocabulary]
        unknown = sorted(o.value for o in self.objects if o not in allowed)
        if unknown:
            raise ValueError(
                f"objects {unknown} are not part of vocabulary {self.vocabulary}"
            )
        return self

    def has_object(self, obj: DetectedObject) -> bool:
        return obj in self.objects

    def has_signal(self, signal: TrafficSignal) -> bool:
        return signal in self.signals
