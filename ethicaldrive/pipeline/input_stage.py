from pathlib import Path
from typing import Optional

from ethicaldrive.config import get_settings
from ethicaldrive.models.context import Context

ALLOWED_EXTENSIONS = {".mp4", ".mov", ".webm", ".avi", ".mkv"}

CHUNK_SIZE = 1024 * 1024


class UploadRejected(Exception):
    def __init__(self, status_code: int, detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


def upload_limit() -> int:
    return get_settings().max_upload_mb * 1024 * 1024


def check_size(size_bytes: Optional[int]) -> None:
    """
    None means the size is not known yet and is checked while saving.
    """
    if size_bytes is None:
        return
    if size_bytes == 0:
        raise UploadRejected(400, "Empty upload")
    if size_bytes > upload_limit():
        raise UploadRejected(
            413, f"Upload exceeds {get_settings().max_upload_mb} MB"
        )


def run(ctx: Context) -> Context:
    """
    Gatekeeper for uploaded clips. Other sources pass through untouched.
    """
    inp = ctx.input
    if inp.source != "upload":
        return ctx

    suffix = Path(inp.filename or "").suffix.lower()
    if suffix not in ALLOWED_EXTENSIONS:
        raise UploadRejected(
            400, f"Unsupported video type '{suffix or inp.filename}'"
        )

    check_size(inp.size_bytes)
    return ctx


async def save_upload(upload, path: str) -> int:
    """
    Stream an upload to disk in chunks, stopping as soon as the size
    limit is passed. Returns the number of bytes written.
    """
    limit = upload_limit()
    written = 0
    with open(path, "wb") as out:
        while True:
            chunk = await upload.read(CHUNK_SIZE)
            if not chunk:
                break
            written += len(chunk)
            if written > limit:
                check_size(written)
            out.write(chunk)

    check_size(written)
    return written
