# ethicaldrive/narrative/flows.py
"""
Narrative flows over the text-generation service.

Every flow is text-in / text-out from the caller's point of view and
raises NarrativeError on any failure. Callers decide the fallback.
"""

from typing import List

from pydantic import BaseModel, Field, ValidationError

from ethicaldrive.models.decision_model import Decision
from ethicaldrive.models.perception_model import (
    OBJECT_VOCABULARIES,
    PerceptionSnapshot,
    TrafficSignal,
)
from ethicaldrive.narrative.client import NarrativeClient, NarrativeError
from ethicaldrive.narrative.prompts import (
    ANALYZE_VIDEO_PROMPT,
    EXPLAIN_DECISION_PROMPT,
    SUMMARIZE_SCENARIO_PROMPT,
    join_tags,
)
from ethicaldrive.utils.logger import warn


# ----------------------------
# Output schemas
# ----------------------------
class SummaryOutput(BaseModel):
    scenario_summary: str


class ExplanationOutput(BaseModel):
    explanation: str


class VideoAnalysisOutput(BaseModel):
    objects: List[str] = Field(default_factory=list)
    positions: List[str] = Field(default_factory=list)
    signals: List[str] = Field(default_factory=list)
    context: str = ""
    scenario_summary: str


class VideoAnalysis(BaseModel):
    perception: PerceptionSnapshot
    scenario_summary: str


def _parse(schema, raw):
    try:
        return schema.model_validate(raw)
    except ValidationError as e:
        raise NarrativeError(f"Unexpected model output for {schema.__name__}") from e


# ----------------------------
# Flows
# ----------------------------
async def summarize_driving_scenario(
    client: NarrativeClient, snapshot: PerceptionSnapshot
) -> str:
    prompt = SUMMARIZE_SCENARIO_PROMPT.format(
        objects=join_tags(snapshot.objects),
        positions=join_tags(snapshot.positions),
        signals=join_tags(snapshot.signals),
        context=snapshot.context,
    )
    out = _parse(SummaryOutput, await client.generate(prompt))
    return out.scenario_summary


async def explain_ethical_decision(
    client: NarrativeClient, decision: Decision, context: str
) -> str:
    prompt = EXPLAIN_DECISION_PROMPT.format(
        decision=decision.action.value,
        reasoning=decision.reason,
        context=context,
    )
    out = _parse(ExplanationOutput, await client.generate(prompt))
    return out.explanation


async def analyze_video_scenario(
    client: NarrativeClient,
    keyframes: List[str],
    vocabulary: str = "v2",
) -> VideoAnalysis:
    """
    Ask the vision model what is in the clip and build a snapshot.

    The model is an untrusted perception source: tags outside the active
    vocabulary are dropped here, before the snapshot is constructed.
    """
    if not keyframes:
        raise NarrativeError("No keyframes to analyze")

    allowed_objects = {o.value for o in OBJECT_VOCABULARIES[vocabulary]}
    allowed_signals = {s.value for s in TrafficSignal}

    prompt = ANALYZE_VIDEO_PROMPT.format(
        objects=join_tags(sorted(allowed_objects)),
        signals=join_tags(sorted(allowed_signals)),
    )
    out = _parse(VideoAnalysisOutput, await client.generate(prompt, images=keyframes))

    objects = [o.strip().lower() for o in out.objects]
    signals = [s.strip().lower() for s in out.signals]
    dropped = [o for o in objects if o not in allowed_objects]
    dropped += [s for s in signals if s not in allowed_signals]
    if dropped:
        warn(f"Vision model reported unknown tags, dropped: {dropped}")

    snapshot = PerceptionSnapshot(
        objects=[o for o in objects if o in allowed_objects],
        positions=out.positions,
        signals=[s for s in signals if s in allowed_signals],
        context=out.context,
        vocabulary=vocabulary,
    )
    return VideoAnalysis(perception=snapshot, scenario_summary=out.scenario_summary)
