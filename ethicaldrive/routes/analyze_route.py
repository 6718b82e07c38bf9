import os
import tempfile
import uuid
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.concurrency import run_in_threadpool

from ethicaldrive.config import get_settings
from ethicaldrive.models.context import Context
from ethicaldrive.models.input_model import InputModel
from ethicaldrive.models.perception_model import PerceptionSnapshot
from ethicaldrive.narrative.client import NarrativeClient
from ethicaldrive.scenarios.catalog import ScenarioNotFound, get_scenario

from ethicaldrive.pipeline import input_stage
from ethicaldrive.pipeline.input_stage import UploadRejected, save_upload
from ethicaldrive.pipeline.video_stage import run as video_stage
from ethicaldrive.pipeline.video_stage import capture_clip
from ethicaldrive.pipeline.perception_stage import run as perception_stage
from ethicaldrive.pipeline.decision_stage import run as decision_stage
from ethicaldrive.pipeline.narrative_stage import run as narrative_stage
from ethicaldrive.pipeline.report_stage import run as report_stage

router = APIRouter(prefix="/analyze")


async def get_narrative_client() -> AsyncIterator[Optional[NarrativeClient]]:
    settings = get_settings()
    if not settings.narrative_enabled:
        yield None
        return
    async with NarrativeClient.from_settings(settings) as client:
        yield client


async def _run_pipeline(ctx: Context, client: Optional[NarrativeClient]) -> dict:
    ctx = await perception_stage(ctx, client)
    ctx = decision_stage(ctx)
    ctx = await narrative_stage(ctx, client)
    ctx = report_stage(ctx)
    return ctx.report


@router.post("/scenario/{scenario_id}")
async def analyze_scenario(
    scenario_id: str,
    client: Optional[NarrativeClient] = Depends(get_narrative_client),
):
    try:
        scenario = get_scenario(scenario_id)
    except ScenarioNotFound:
        raise HTTPException(status_code=404, detail=f"Unknown scenario '{scenario_id}'")

    ctx = Context(
        input=InputModel(source="scenario", scenario_id=scenario.id),
        perception=scenario.perception,
    )
    return await _run_pipeline(ctx, client)


@router.post("/snapshot")
async def analyze_snapshot(
    snapshot: PerceptionSnapshot,
    client: Optional[NarrativeClient] = Depends(get_narrative_client),
):
    ctx = Context(input=InputModel(source="snapshot"), perception=snapshot)
    return await _run_pipeline(ctx, client)


@router.post("/video")
async def analyze_video(
    file: UploadFile = File(...),
    client: Optional[NarrativeClient] = Depends(get_narrative_client),
):
    # Size is checked from the multipart header before any bytes are read
    ctx = Context(
        input=InputModel(
            source="upload",
            filename=file.filename,
            size_bytes=file.size,
        )
    )
    suffix = Path(file.filename or "").suffix.lower()
    tmp_path = os.path.join(
        tempfile.gettempdir(), f"ethicaldrive_{uuid.uuid4()}{suffix}"
    )

    try:
        ctx = input_stage.run(ctx)
        ctx.input.size_bytes = await save_upload(file, tmp_path)
        ctx.input.file_path = tmp_path
        ctx = await run_in_threadpool(video_stage, ctx)
        return await _run_pipeline(ctx, client)
    except UploadRejected as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)


@router.post("/live")
async def analyze_live(
    seconds: Optional[float] = Query(default=None, gt=0, le=10),
    device: Optional[int] = Query(default=None, ge=0),
    client: Optional[NarrativeClient] = Depends(get_narrative_client),
):
    settings = get_settings()
    ctx = Context(input=InputModel(source="live"))
    # OpenCV capture blocks for the whole clip; keep it off the event loop
    ctx = await run_in_threadpool(
        capture_clip,
        ctx,
        device=settings.camera_device if device is None else device,
        seconds=seconds or settings.live_clip_seconds,
    )
    return await _run_pipeline(ctx, client)
