import base64

import cv2
import numpy as np

from ethicaldrive.config import get_settings
from ethicaldrive.models.context import Context
from ethicaldrive.utils.logger import debug, error, info

# Used when a camera reports no frame rate
FALLBACK_FPS = 15.0


def run(ctx: Context) -> Context:
    """
    Read an uploaded clip.
    - Truncate past clip_max_seconds.
    - Errors land in ctx.video.error, never raised.
    """
    settings = get_settings()
    cap = None
    try:
        cap = cv2.VideoCapture(ctx.input.file_path)

        if not cap.isOpened():
            ctx.video.error = f"Unable to open file: {ctx.input.filename or ctx.input.file_path}"
            return ctx

        fps = cap.get(cv2.CAP_PROP_FPS)
        width = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        height = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))

        max_frames = int(fps * settings.clip_max_seconds) if fps > 0 else None

        frames = []
        truncated = False
        while True:
            if max_frames is not None and len(frames) >= max_frames:
                truncated = cap.grab()
                break
            ret, frame = cap.read()
            if not ret:
                break
            frames.append(frame)

        debug(f"Read {len(frames)} frames at {fps:.1f} fps (truncated={truncated})")
        _store(ctx, frames, fps, width, height, truncated, settings.keyframe_count)

    except Exception as e:
        ctx.video.error = str(e)
        error(f"Video read failed: {e}")

    finally:
        if cap is not None:
            cap.release()

    return ctx


def capture_clip(ctx: Context, device: int, seconds: float) -> Context:
    """
    Record a short clip from a local camera into ctx.video.
    """
    settings = get_settings()
    cap = None
    try:
        cap = cv2.VideoCapture(device)

        if not cap.isOpened():
            ctx.video.error = f"Unable to open camera {device}"
            return ctx

        fps = cap.get(cv2.CAP_PROP_FPS) or FALLBACK_FPS
        width = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        height = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))

        wanted = max(1, int(fps * seconds))
        frames = []
        while len(frames) < wanted:
            ret, frame = cap.read()
            if not ret:
                break
            frames.append(frame)

        info(f"Captured {len(frames)}/{wanted} frames from camera {device}")
        _store(ctx, frames, fps, width, height, False, settings.keyframe_count)

    except Exception as e:
        ctx.video.error = str(e)

    finally:
        if cap is not None:
            cap.release()

    return ctx


def _store(ctx, frames, fps, width, height, truncated, keyframe_count):
    if not frames:
        ctx.video.error = "No video frames decoded"
        return

    ctx.video.frames = frames
    ctx.video.frame_count = len(frames)
    ctx.video.fps = fps
    ctx.video.width = width
    ctx.video.height = height
    ctx.video.duration_sec = len(frames) / fps if fps > 0 else 0.0
    ctx.video.truncated = truncated
    ctx.video.keyframes = encode_keyframes(sample_keyframes(frames, keyframe_count))


# ---------------------------------------------------------
# Keyframes
# ---------------------------------------------------------
def sample_keyframes(frames, count):
    """Evenly spaced frames, first and last included, no repeats."""
    if not frames or count <= 0:
        return []
    count = min(count, len(frames))
    idx = np.linspace(0, len(frames) - 1, count).round().astype(int)
    return [frames[i] for i in idx]


def encode_keyframes(frames):
    out = []
    for frame in frames:
        ok, buf = cv2.imencode(".jpg", frame)
        if not ok:
            continue
        out.append(base64.b64encode(buf.tobytes()).decode("ascii"))
    return out
