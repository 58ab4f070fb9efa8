"""Encoding of media upload bodies."""

import json
import uuid
from typing import Any

DEFAULT_MEDIA_TYPE = "application/octet-stream"


def read_media(media: Any) -> bytes:
    """Return the media payload as bytes.

    Accepts bytes, str (encoded as UTF-8) or a binary file-like object.
    """
    if isinstance(media, (bytes, bytearray)):
        return bytes(media)
    if isinstance(media, str):
        return media.encode("utf-8")
    if hasattr(media, "read"):
        data = media.read()
        return data.encode("utf-8") if isinstance(data, str) else data
    raise TypeError(f"Unsupported media type: {type(media).__name__}")


def encode_multipart_related(
    resource: dict | None,
    media: Any,
    media_type: str = DEFAULT_MEDIA_TYPE,
    boundary: str | None = None,
) -> tuple[bytes, str]:
    """Build a multipart/related body with JSON metadata followed by the media part.

    Returns (body, content_type).
    """
    boundary = boundary or uuid.uuid4().hex
    metadata = json.dumps(resource or {}).encode("utf-8")
    delimiter = f"--{boundary}\r\n".encode("ascii")

    body = b"".join([
        delimiter,
        b"Content-Type: application/json; charset=UTF-8\r\n\r\n",
        metadata,
        b"\r\n",
        delimiter,
        f"Content-Type: {media_type}\r\n\r\n".encode("ascii"),
        read_media(media),
        b"\r\n",
        f"--{boundary}--\r\n".encode("ascii"),
    ])
    return body, f"multipart/related; boundary={boundary}"
