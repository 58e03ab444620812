import codecs
import json
from typing import Any
from urllib.parse import parse_qsl

from starlette.requests import Request

from ..exceptions.contact import MalformedBodyError, UnsupportedContentTypeError


MAX_BODY_SIZE = 120 * 1024

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"


async def read_body(request: Request, limit: int = MAX_BODY_SIZE) -> bytes:
    """
    Read the request body, keeping at most `limit` bytes.

    The stream is drained to the end; everything past the cap is discarded.
    """

    buffer = bytearray()
    async for chunk in request.stream():
        if len(buffer) < limit:
            buffer += chunk[: limit - len(buffer)]
    return bytes(buffer)


def decode_body(raw: bytes) -> str:
    # an incomplete sequence at the end (cut by the cap) is dropped, invalid bytes elsewhere become U+FFFD
    return codecs.getincrementaldecoder("utf-8")(errors="replace").decode(raw, final=False)


def parse_body(raw: str, content_type: str) -> dict[str, Any]:
    content_type = content_type.lower()

    if FORM_CONTENT_TYPE in content_type:
        return dict(parse_qsl(raw, keep_blank_values=True))

    if JSON_CONTENT_TYPE in content_type:
        try:
            data = json.loads(raw or "{}")
        except ValueError:
            raise MalformedBodyError
        if not isinstance(data, dict):
            raise MalformedBodyError
        return data

    raise UnsupportedContentTypeError
