from pydantic import BaseModel, Field
from typing import Dict, Any, Optional

from ethicaldrive.models.input_model import InputModel
from ethicaldrive.models.video_model import VideoModel
from ethicaldrive.models.perception_model import PerceptionSnapshot
from ethicaldrive.models.decision_model import Decision
from ethicaldrive.models.narrative_model import NarrativeModel


class Context(BaseModel):
    """
    Canonical analysis context passed through the pipeline.

    NOTE:
    - perception is None until a source provides it (catalog, posted
      snapshot, or the vision model for video sources).
    - decision is written once by the decision stage; later stages
      read it but never replace it.
    """

    # -------------------------
    # Inputs & raw data
    # -------------------------
    input: InputModel
    video: VideoModel = Field(default_factory=VideoModel)

    # -------------------------
    # Perception
    # -------------------------
    perception: Optional[PerceptionSnapshot] = None
    perception_error: Optional[str] = None

    # -------------------------
    # Interpretation layers
    # -------------------------
    decision: Optional[Decision] = None
    narrative: NarrativeModel = Field(default_factory=NarrativeModel)

    # -------------------------
    # Reporting (JSON-first)
    # -------------------------
    report: Dict[str, Any] = Field(default_factory=dict)
