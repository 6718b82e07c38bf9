from typing import List

from fastapi import APIRouter, HTTPException

from ethicaldrive.models.scenario_model import Scenario
from ethicaldrive.scenarios.catalog import ScenarioNotFound, get_scenario, load_scenarios

router = APIRouter(prefix="/scenarios")


@router.get("", response_model=List[Scenario])
def list_scenarios():
    return load_scenarios()


@router.get("/{scenario_id}", response_model=Scenario)
def read_scenario(scenario_id: str):
    try:
        return get_scenario(scenario_id)
    except ScenarioNotFound:
        raise HTTPException(status_code=404, detail=f"Unknown scenario '{scenario_id}'")
