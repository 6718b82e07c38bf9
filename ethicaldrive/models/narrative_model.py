from pydantic import BaseModel
from typing import Optional

SUMMARY_PLACEHOLDER = "Could not generate AI summary."
EXPLANATION_PLACEHOLDER = "Could not generate AI explanation."


class NarrativeModel(BaseModel):
    summary: Optional[str] = None
    explanation: Optional[str] = None
    error: Optional[str] = None
