import mimetypes
import re
from pathlib import Path
from typing import Optional, Tuple

from ..domain.models import FetchResponse

VIDEO_EXTENSIONS = {".mp4", ".webm", ".mov", ".mkv"}

CONTENT_TYPES = {
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".mov": "video/quicktime",
    ".mkv": "video/x-matroska",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".svg": "image/svg+xml",
}

RANGE_PATTERN = re.compile(r"^\s*bytes=(\d*)-(\d*)\s*$")


class UnsatisfiableRange(Exception):
    pass


def content_type_for(path: Path) -> str:
    ext = path.suffix.lower()
    if ext in CONTENT_TYPES:
        return CONTENT_TYPES[ext]
    mime, _ = mimetypes.guess_type(path.name)
    return mime or "application/octet-stream"


def parse_range(header: Optional[str], size: int) -> Optional[Tuple[int, int]]:
    """
    Parses a single `bytes=` range into inclusive (start, end).

    Returns None when the header is absent or not a single byte range,
    in which case the full body is served.

    Raises:
        UnsatisfiableRange: If the range starts beyond the end of the file.
    """
    if not header:
        return None
    match = RANGE_PATTERN.match(header)
    if not match:
        return None

    first, last = match.groups()
    if first == "" and last == "":
        return None

    if first == "":
        # Suffix range: the final N bytes
        length = int(last)
        if length == 0 or size == 0:
            raise UnsatisfiableRange(header)
        return max(size - length, 0), size - 1

    start = int(first)
    end = int(last) if last else size - 1
    end = min(end, size - 1)
    if start >= size or start > end:
        raise UnsatisfiableRange(header)
    return start, end


def serve_file(path: Path, range_header: Optional[str] = None) -> FetchResponse:
    """
    Builds the response a browser expects for a local file.
    Video-like files honour Range requests with 206 partial content so
    media elements can seek without pulling the whole file.
    """
    size = path.stat().st_size
    content_type = content_type_for(path)
    is_video = path.suffix.lower() in VIDEO_EXTENSIONS

    if is_video and range_header:
        try:
            byte_range = parse_range(range_header, size)
        except UnsatisfiableRange:
            return FetchResponse(
                status=416,
                headers={"Content-Range": f"bytes */{size}", "Accept-Ranges": "bytes"},
            )

        if byte_range is not None:
            start, end = byte_range
            length = end - start + 1
            with open(path, "rb") as f:
                f.seek(start)
                body = f.read(length)
            return FetchResponse(
                status=206,
                headers={
                    "Content-Type": content_type,
                    "Content-Range": f"bytes {start}-{end}/{size}",
                    "Accept-Ranges": "bytes",
                    "Content-Length": str(len(body)),
                },
                body=body,
            )

    body = path.read_bytes()
    return FetchResponse(
        status=200,
        headers={
            "Content-Type": content_type,
            "Accept-Ranges": "bytes",
            "Content-Length": str(len(body)),
        },
        body=body,
    )
