import yaml
from functools import lru_cache
from pathlib import Path
from typing import Dict, List

from ethicaldrive.models.scenario_model import Scenario

SCENARIOS_PATH = Path(__file__).parent / "scenarios.yaml"


class ScenarioNotFound(KeyError):
    pass


@lru_cache(maxsize=1)
def _load(path: str) -> Dict[str, Scenario]:
    with open(path, "r") as f:
        raw = yaml.safe_load(f)["scenarios"]

    catalog = {}
    for entry in raw:
        scenario = Scenario.model_validate(entry)
        catalog[scenario.id] = scenario
    return catalog


def load_scenarios(path: Path = SCENARIOS_PATH) -> List[Scenario]:
    return list(_load(str(path)).values())


def get_scenario(scenario_id: str, path: Path = SCENARIOS_PATH) -> Scenario:
    try:
        return _load(str(path))[scenario_id]
    except KeyError:
        raise ScenarioNotFound(scenario_id) from None
