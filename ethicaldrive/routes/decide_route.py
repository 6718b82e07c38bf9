from typing import List

from fastapi import APIRouter

from ethicaldrive.models.decision_model import Decision
from ethicaldrive.models.perception_model import PerceptionSnapshot
from ethicaldrive.reasoning.decision_engine import decide, decide_many

router = APIRouter(prefix="/decide")


@router.post("", response_model=Decision)
def decide_snapshot(snapshot: PerceptionSnapshot):
    return decide(snapshot)


@router.post("/batch", response_model=List[Decision])
def decide_batch(snapshots: List[PerceptionSnapshot]):
    return decide_many(snapshots)
