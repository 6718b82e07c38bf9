from typing import Optional

from ethicaldrive.config import get_settings
from ethicaldrive.models.context import Context
from ethicaldrive.narrative.client import NarrativeClient, NarrativeError
from ethicaldrive.narrative.flows import analyze_video_scenario
from ethicaldrive.utils.logger import info, warn


async def run(ctx: Context, client: Optional[NarrativeClient]) -> Context:
    """
    Perception for video sources: keyframes -> vision model -> snapshot.
    Catalog and posted snapshots already carry ctx.perception.
    """
    if ctx.perception is not None:
        return ctx

    if ctx.video.error:
        ctx.perception_error = ctx.video.error
        return ctx

    if client is None:
        ctx.perception_error = "Video analysis is unavailable: narrative service disabled"
        return ctx

    try:
        analysis = await analyze_video_scenario(
            client,
            ctx.video.keyframes,
            vocabulary=get_settings().object_vocabulary,
        )
    except NarrativeError as e:
        warn(f"Video perception failed: {e}")
        ctx.perception_error = f"Video analysis failed: {e}"
        return ctx

    ctx.perception = analysis.perception
    ctx.narrative.summary = analysis.scenario_summary
    info(
        f"Video perception: objects={[o.value for o in analysis.perception.objects]} "
        f"signals={[s.value for s in analysis.perception.signals]}"
    )
    return ctx
