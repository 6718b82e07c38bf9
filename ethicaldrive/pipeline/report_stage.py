# ethicaldrive/pipeline/report_stage.py

from typing import Any, Dict, Optional

from ethicaldrive.models.context import Context
from ethicaldrive.models.decision_model import Action, Decision

REPORT_SCHEMA_VERSION = "1.0"

VIDEO_SOURCES = ("upload", "live")


# ---------------------------------------------------------
# Dashboard badge variant
# ---------------------------------------------------------
def badge_for(decision: Optional[Decision]) -> str:
    """
      Brake / Stop → destructive
      Continue     → default
      no decision  → secondary
    """
    if decision is None:
        return "secondary"
    if decision.action in (Action.BRAKE, Action.STOP):
        return "destructive"
    return "default"


# ---------------------------------------------------------
# Main Report Builder
# ---------------------------------------------------------
def run(ctx: Context) -> Context:
    report: Dict[str, Any] = {"schema_version": REPORT_SCHEMA_VERSION}

    report["source"] = ctx.input.source
    if ctx.input.scenario_id:
        report["scenario_id"] = ctx.input.scenario_id

    report["perception"] = (
        ctx.perception.model_dump(mode="json") if ctx.perception else None
    )
    report["decision"] = (
        ctx.decision.model_dump(mode="json") if ctx.decision else None
    )
    report["badge"] = badge_for(ctx.decision)
    report["narrative"] = ctx.narrative.model_dump(exclude_none=True)

    if ctx.input.source in VIDEO_SOURCES:
        report["video"] = ctx.video.model_dump(exclude_none=True)

    error = ctx.video.error or ctx.perception_error
    if error:
        report["error"] = error

    ctx.report = report
    return ctx
