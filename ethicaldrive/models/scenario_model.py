from pydantic import BaseModel

from ethicaldrive.models.perception_model import PerceptionSnapshot


class Scenario(BaseModel):
    id: str
    name: str
    description: str
    image_id: str
    perception: PerceptionSnapshot
