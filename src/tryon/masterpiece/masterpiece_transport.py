"""HTTP transport for Masterpiece API calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

BODY_PREVIEW_LIMIT = 500

# httpx.InvalidURL is raised before a request exists and is not a RequestError.
TRANSPORT_ERRORS = (httpx.RequestError, httpx.InvalidURL)


@dataclass(slots=True)
class MasterpieceTransport:
    """Issue authenticated requests with a per-request timeout."""

    api_key: str
    app_id: str | None = None
    timeout_seconds: float = 30.0

    def headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.app_id:
            headers["X-App-Id"] = self.app_id
        return headers

    async def get(self, url: str) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout_seconds, follow_redirects=True) as client:
            return await client.get(url, headers=self.headers())

    async def post_json(self, url: str, payload: dict[str, Any]) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout_seconds, follow_redirects=True) as client:
            return await client.post(url, headers=self.headers(), json=payload)

    async def put_bytes(self, url: str, content: bytes, *, content_type: str) -> httpx.Response:
        # Signed URLs authenticate themselves; no bearer header here.
        headers = {"Content-Type": content_type, "Content-Length": str(len(content))}
        async with httpx.AsyncClient(timeout=self.timeout_seconds, follow_redirects=True) as client:
            return await client.put(url, headers=headers, content=content)

    async def download(self, url: str) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout_seconds, follow_redirects=True) as client:
            return await client.get(url)


def response_json(response: httpx.Response) -> Any:
    """Decode a JSON body, returning ``None`` for empty or non-JSON bodies."""

    try:
        return response.json()
    except ValueError:
        return None


def body_preview(response: httpx.Response) -> str:
    text = getattr(response, "text", "") or ""
    if len(text) > BODY_PREVIEW_LIMIT:
        return text[:BODY_PREVIEW_LIMIT] + "...(truncated)"
    return text


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


__all__ = [
    "MasterpieceTransport",
    "TRANSPORT_ERRORS",
    "body_preview",
    "is_success",
    "response_json",
]
