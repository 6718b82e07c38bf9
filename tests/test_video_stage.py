import base64

import cv2
import numpy as np
import pytest

from ethicaldrive.config import get_settings
from ethicaldrive.models.context import Context
from ethicaldrive.models.input_model import InputModel
from ethicaldrive.pipeline import video_stage
from ethicaldrive.pipeline.video_stage import capture_clip, encode_keyframes, sample_keyframes

WIDTH, HEIGHT = 64, 48


def write_clip(path, frames=20, fps=10.0):
    writer = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"MJPG"), fps, (WIDTH, HEIGHT))
    for i in range(frames):
        writer.write(np.full((HEIGHT, WIDTH, 3), i * 10 % 255, dtype=np.uint8))
    writer.release()
    return path


def file_ctx(path):
    return Context(input=InputModel(source="upload", file_path=str(path), filename=path.name))


class FakeCapture:
    """Minimal stand-in for cv2.VideoCapture on a camera"""

    def __init__(self, device, opened=True, fps=10.0):
        self.device = device
        self.opened = opened
        self.fps = fps
        self.released = False

    def isOpened(self):
        return self.opened

    def get(self, prop):
        return {
            cv2.CAP_PROP_FPS: self.fps,
            cv2.CAP_PROP_FRAME_WIDTH: WIDTH,
            cv2.CAP_PROP_FRAME_HEIGHT: HEIGHT,
        }.get(prop, 0.0)

    def read(self):
        return True, np.zeros((HEIGHT, WIDTH, 3), dtype=np.uint8)

    def release(self):
        self.released = True


# ----------------------------
# Keyframes
# ----------------------------
def test_sample_keyframes_evenly_spaced():
    frames = list(range(10))
    assert sample_keyframes(frames, 4) == [0, 3, 6, 9]


def test_sample_keyframes_bounded_by_frame_count():
    assert sample_keyframes([1, 2], 5) == [1, 2]


def test_sample_keyframes_empty():
    assert sample_keyframes([], 4) == []
    assert sample_keyframes([1, 2, 3], 0) == []


def test_encode_keyframes_produces_jpeg():
    encoded = encode_keyframes([np.zeros((HEIGHT, WIDTH, 3), dtype=np.uint8)])
    assert len(encoded) == 1
    assert base64.b64decode(encoded[0])[:2] == b"\xff\xd8"


# ----------------------------
# Uploaded clips
# ----------------------------
def test_reads_clip(tmp_path):
    ctx = video_stage.run(file_ctx(write_clip(tmp_path / "clip.avi")))

    assert ctx.video.error is None
    assert ctx.video.frame_count == 20
    assert (ctx.video.width, ctx.video.height) == (WIDTH, HEIGHT)
    assert ctx.video.duration_sec == pytest.approx(2.0)
    assert ctx.video.truncated is False
    assert len(ctx.video.keyframes) == get_settings().keyframe_count


def test_long_clip_is_truncated(tmp_path, monkeypatch):
    monkeypatch.setattr(get_settings(), "clip_max_seconds", 1.0)
    ctx = video_stage.run(file_ctx(write_clip(tmp_path / "clip.avi", frames=30)))

    assert ctx.video.frame_count == 10
    assert ctx.video.truncated is True


def test_unreadable_file_sets_error(tmp_path):
    bogus = tmp_path / "clip.mp4"
    bogus.write_bytes(b"this is not a video")

    ctx = video_stage.run(file_ctx(bogus))

    assert ctx.video.error
    assert ctx.video.frame_count == 0


# ----------------------------
# Live capture
# ----------------------------
def test_capture_clip_records_requested_duration(monkeypatch):
    monkeypatch.setattr(video_stage.cv2, "VideoCapture", FakeCapture)
    ctx = capture_clip(Context(input=InputModel(source="live")), device=0, seconds=2)

    assert ctx.video.error is None
    assert ctx.video.frame_count == 20
    assert ctx.video.keyframes


def test_capture_clip_camera_unavailable(monkeypatch):
    monkeypatch.setattr(
        video_stage.cv2, "VideoCapture", lambda device: FakeCapture(device, opened=False)
    )
    ctx = capture_clip(Context(input=InputModel(source="live")), device=3, seconds=1)

    assert ctx.video.error == "Unable to open camera 3"


def test_capture_released_when_read_fails(tmp_path, monkeypatch):
    opened = []

    class BrokenCapture(FakeCapture):
        def __init__(self, source):
            super().__init__(source)
            opened.append(self)

        def read(self):
            raise RuntimeError("decoder crashed")

    monkeypatch.setattr(video_stage.cv2, "VideoCapture", BrokenCapture)
    ctx = video_stage.run(file_ctx(tmp_path / "clip.avi"))

    assert "decoder crashed" in ctx.video.error
    assert opened[0].released is True
