from pydantic import BaseModel
from typing import Literal, Optional

class InputModel(BaseModel):
    source: Literal["scenario", "snapshot", "upload", "live"]
    scenario_id: Optional[str] = None
    file_path: Optional[str] = None
    filename: Optional[str] = None
    size_bytes: Optional[int] = None
