import httpx
import pytest

from storefront.core.exceptions import ExternalServiceError, ValidationError
from storefront.services.image_services import ImageHostClient, split_extension, validate_image

UPLOAD_URL = "https://images.test/1/upload"


def _client(handler):
    return ImageHostClient(
        upload_url=UPLOAD_URL,
        api_key="secret",
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


# ==========================================================
# validate_image
# ==========================================================

def test_split_extension():
    assert split_extension("photo.Front.JPG") == ("photo.Front", "jpg")
    assert split_extension("noext") == ("noext", "")


def test_validate_image_accepts_allowed_file():
    validate_image("shock.png", 1024, max_bytes=2048, allowed_extensions=["png"])


@pytest.mark.parametrize(
    "filename, size",
    [
        ("shock.png", 0),
        ("shock.png", 4096),
        ("", 10),
        (None, 10),
        ("shock.exe", 10),
    ],
)
def test_validate_image_rejects(filename, size):
    with pytest.raises(ValidationError):
        validate_image(filename, size, max_bytes=2048, allowed_extensions=["png", "jpg"])


# ==========================================================
# store
# ==========================================================

async def test_store_returns_url_and_delete_url():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = request.content
        return httpx.Response(
            200,
            json={
                "success": True,
                "data": {"url": "https://i.test/abc.png", "delete_url": "https://i.test/del/abc"},
            },
        )

    url, external_id = await _client(handler).store(b"\x89PNG", "abc.png")

    assert (url, external_id) == ("https://i.test/abc.png", "https://i.test/del/abc")
    assert seen["method"] == "POST"
    assert seen["url"] == UPLOAD_URL
    assert b"key=secret" in seen["body"]
    assert b"name=abc" in seen["body"]


async def test_store_host_rejection():
    def handler(request):
        return httpx.Response(200, json={"success": False, "error": {"message": "bad key"}})

    with pytest.raises(ExternalServiceError, match="bad key"):
        await _client(handler).store(b"img", "a.png")


async def test_store_http_error():
    def handler(request):
        return httpx.Response(500, text="boom")

    with pytest.raises(ExternalServiceError):
        await _client(handler).store(b"img", "a.png")


async def test_store_unreachable_host():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ExternalServiceError):
        await _client(handler).store(b"img", "a.png")


# ==========================================================
# delete
# ==========================================================

async def test_delete_ok():
    def handler(request):
        assert request.method == "GET"
        return httpx.Response(200, text="ok")

    assert await _client(handler).delete("https://i.test/del/abc") is True


async def test_delete_failure():
    def handler(request):
        return httpx.Response(404)

    with pytest.raises(ExternalServiceError):
        await _client(handler).delete("https://i.test/del/abc")
