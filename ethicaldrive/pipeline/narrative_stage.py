# ethicaldrive/pipeline/narrative_stage.py

import asyncio
from typing import Optional

from ethicaldrive.models.context import Context
from ethicaldrive.models.narrative_model import (
    EXPLANATION_PLACEHOLDER,
    SUMMARY_PLACEHOLDER,
)
from ethicaldrive.narrative.client import NarrativeClient, NarrativeError
from ethicaldrive.narrative.flows import (
    explain_ethical_decision,
    summarize_driving_scenario,
)
from ethicaldrive.utils.logger import warn


async def run(ctx: Context, client: Optional[NarrativeClient]) -> Context:
    """
    NARRATIVE STAGE

    - Runs after the decision is final; reads ctx.decision, never writes it
    - Summary and explanation are generated concurrently
    - Any failure degrades both to fixed placeholders
    - A summary already supplied by video perception is kept
    """
    if ctx.decision is None:
        return ctx

    narrative = ctx.narrative
    if client is None:
        _placeholders(ctx, "Narrative service disabled")
        return ctx

    snapshot = ctx.perception
    flows = [explain_ethical_decision(client, ctx.decision, snapshot.context)]
    if not narrative.summary:
        flows.append(summarize_driving_scenario(client, snapshot))

    # Let both flows settle before inspecting either
    results = await asyncio.gather(*flows, return_exceptions=True)
    for r in results:
        if isinstance(r, NarrativeError):
            warn(f"Narrative generation failed: {r}")
            _placeholders(ctx, str(r))
            return ctx
        if isinstance(r, BaseException):
            raise r

    narrative.explanation = results[0]
    if len(results) > 1:
        narrative.summary = results[1]

    return ctx


def _placeholders(ctx: Context, reason: str) -> None:
    ctx.narrative.summary = ctx.narrative.summary or SUMMARY_PLACEHOLDER
    ctx.narrative.explanation = EXPLANATION_PLACEHOLDER
    ctx.narrative.error = reason
