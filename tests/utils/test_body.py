from typing import Any

import pytest
from starlette.requests import Request

from site_api.exceptions.contact import MalformedBodyError, UnsupportedContentTypeError
from site_api.utils import body


def make_request(chunks: list[bytes]) -> Request:
    messages = [
        {"type": "http.request", "body": chunk, "more_body": i < len(chunks) - 1} for i, chunk in enumerate(chunks)
    ]

    async def receive() -> dict[str, Any]:
        return messages.pop(0)

    return Request({"type": "http", "method": "POST", "headers": []}, receive)


@pytest.mark.parametrize(
    "chunks,limit,expected",
    [
        ([b""], 10, b""),
        ([b"hello"], 10, b"hello"),
        ([b"hello", b" ", b"world"], 100, b"hello world"),
        ([b"hello", b" ", b"world"], 8, b"hello wo"),
        ([b"0123456789", b"abc"], 10, b"0123456789"),
        ([b"0123456789abc"], 10, b"0123456789"),
    ],
)
async def test__read_body(chunks: list[bytes], limit: int, expected: bytes) -> None:
    assert await body.read_body(make_request(chunks), limit) == expected


async def test__read_body_default_limit() -> None:
    chunks = [b"x" * 64 * 1024] * 4

    result = await body.read_body(make_request(chunks))

    assert len(result) == body.MAX_BODY_SIZE == 120 * 1024


def test__decode_body_drops_split_code_point() -> None:
    raw = "grüße".encode()

    assert body.decode_body(raw) == "grüße"
    assert body.decode_body(raw[:3]) == "gr"


@pytest.mark.parametrize(
    "raw,expected",
    [
        (b"a\xffb", "a\ufffdb"),
        (b"\xfeabc", "\ufffdabc"),
        (b"a\xc3(b", "a\ufffd(b"),
        (b"ok\xe2\x82", "ok"),
    ],
)
def test__decode_body_replaces_invalid_bytes(raw: bytes, expected: str) -> None:
    assert body.decode_body(raw) == expected


@pytest.mark.parametrize(
    "raw,content_type,expected",
    [
        ("name=Jane+Doe&email=jane%40example.com", "application/x-www-form-urlencoded", {
            "name": "Jane Doe",
            "email": "jane@example.com",
        }),
        ("a=1&a=2&b=", "application/x-www-form-urlencoded; charset=UTF-8", {"a": "2", "b": ""}),
        ("", "application/x-www-form-urlencoded", {}),
        ('{"name": "Jane", "n": 42}', "application/json", {"name": "Jane", "n": 42}),
        ('{"name": "Jane"}', "Application/JSON; charset=utf-8", {"name": "Jane"}),
        ("", "application/json", {}),
    ],
)
def test__parse_body(raw: str, content_type: str, expected: dict[str, Any]) -> None:
    assert body.parse_body(raw, content_type) == expected


@pytest.mark.parametrize("raw", ["{", "[]", "null", "42", '"x"'])
def test__parse_body_malformed_json(raw: str) -> None:
    with pytest.raises(MalformedBodyError):
        body.parse_body(raw, "application/json")


@pytest.mark.parametrize("content_type", ["", "text/plain", "multipart/form-data", "application/xml"])
def test__parse_body_unsupported(content_type: str) -> None:
    with pytest.raises(UnsupportedContentTypeError):
        body.parse_body("name=Jane", content_type)
