from __future__ import annotations

import httpx
import pytest

from src.tryon.masterpiece.masterpiece_assets import AssetUploader, derive_filename
from src.tryon.masterpiece.masterpiece_endpoints import EndpointResolver, EndpointRole
from src.tryon.masterpiece.masterpiece_transport import MasterpieceTransport
from tests.mocks.masterpiece_api import IMAGE_URL, FakeResponse


def make_uploader(asset_paths: list[str] | None = None) -> AssetUploader:
    resolver = EndpointResolver("https://api.example.com", {EndpointRole.ASSET: asset_paths or []})
    return AssetUploader(transport=MasterpieceTransport(api_key="mp-key"), resolver=resolver)


def test_derive_filename() -> None:
    assert derive_filename("https://cdn.example.com/a/red%20shoe.png?w=200") == "red shoe.png"
    assert derive_filename("https://cdn.example.com/").startswith("image-")
    assert derive_filename("https://cdn.example.com/").endswith(".jpg")


@pytest.mark.asyncio
async def test_incomplete_asset_response_tries_next_candidate(masterpiece_api) -> None:
    masterpiece_api.on("GET", IMAGE_URL, FakeResponse(200, content=b"jpg"))
    masterpiece_api.on("POST", "https://api.example.com/uploads", FakeResponse(200, {"assetId": "only-id"}))
    masterpiece_api.on(
        "POST",
        "https://api.example.com/assets/create",
        FakeResponse(200, {"url": "https://uploads.example.com/put", "data": {"requestId": "asset-2"}}),
    )
    masterpiece_api.on("PUT", "https://uploads.example.com/put", FakeResponse(201))

    uploader = make_uploader(["/uploads"])
    asset_id = await uploader.upload(IMAGE_URL, "prod-1")

    assert asset_id == "asset-2"
    put_call = masterpiece_api.calls_to("PUT")[0]
    assert put_call.headers["Content-Type"] == "image/jpeg"


@pytest.mark.asyncio
async def test_rejected_signed_upload_returns_none(masterpiece_api) -> None:
    masterpiece_api.on("GET", IMAGE_URL, FakeResponse(200, content=b"jpg"))
    masterpiece_api.on(
        "POST",
        "https://api.example.com/assets/create",
        FakeResponse(200, {"uploadUrl": "https://uploads.example.com/put", "requestId": "asset-3"}),
    )
    masterpiece_api.on("PUT", "https://uploads.example.com/put", FakeResponse(403))

    assert await make_uploader().upload(IMAGE_URL, "prod-1") is None
    assert len(masterpiece_api.calls_to("POST")) == 2


@pytest.mark.asyncio
async def test_source_image_not_found_skips_registration(masterpiece_api) -> None:
    assert await make_uploader().upload(IMAGE_URL, "prod-1") is None
    assert masterpiece_api.calls_to("POST") == []


@pytest.mark.asyncio
async def test_malformed_signed_url_tries_next_candidate(masterpiece_api) -> None:
    masterpiece_api.on("GET", IMAGE_URL, FakeResponse(200, content=b"jpg"))
    masterpiece_api.on(
        "POST",
        "https://api.example.com/uploads",
        FakeResponse(200, {"uploadUrl": "http://[::1/put", "requestId": "asset-1"}),
    )
    masterpiece_api.on("PUT", "http://[::1/put", httpx.InvalidURL("Invalid port: ':1'"))
    masterpiece_api.on(
        "POST",
        "https://api.example.com/assets/create",
        FakeResponse(200, {"uploadUrl": "https://uploads.example.com/put", "requestId": "asset-2"}),
    )
    masterpiece_api.on("PUT", "https://uploads.example.com/put", FakeResponse(200))

    assert await make_uploader(["/uploads"]).upload(IMAGE_URL, "prod-1") == "asset-2"


@pytest.mark.asyncio
async def test_unbuildable_source_url_returns_none(masterpiece_api) -> None:
    masterpiece_api.on("GET", IMAGE_URL, httpx.InvalidURL("Invalid non-printable ASCII character in URL"))

    assert await make_uploader().upload(IMAGE_URL, "prod-1") is None
    assert masterpiece_api.calls_to("POST") == []
