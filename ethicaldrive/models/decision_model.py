from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Action(str, Enum):
    BRAKE = "Brake"
    STOP = "Stop"
    CONTINUE = "Continue"


class Decision(BaseModel):
    """
    Recommended vehicle action for one snapshot.
    Confidence is a literal per rule, never computed.
    """

    model_config = ConfigDict(frozen=True)

    action: Action
    reason: str
    confidence: float = Field(gt=0.0, le=1.0)
    rule: str
