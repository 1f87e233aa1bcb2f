"""Deterministic fake of the Masterpiece X REST API for client tests."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any

BASE_URL = "https://api.example.com/v2"
IMAGE_URL = "https://cdn.example.com/products/sneaker.png"


class FakeResponse:
    def __init__(
        self,
        status_code: int,
        json_data: Any = None,
        *,
        content: bytes = b"",
        headers: dict[str, str] | None = None,
        text: str | None = None,
    ) -> None:
        self.status_code = status_code
        self._json_data = json_data
        self.content = content
        self.headers = headers or {}
        self.text = text if text is not None else ("" if json_data is None else str(json_data))

    def json(self) -> Any:
        if self._json_data is None:
            raise ValueError("No JSON data")
        return self._json_data


@dataclass
class RecordedCall:
    method: str
    url: str
    headers: dict[str, str] | None = None
    json: Any = None
    content: bytes | None = None


@dataclass
class FakeMasterpieceAPI:
    """Route (method, url) pairs to queued responses.

    The last queued response for a route is sticky. Unrouted requests get a
    404. Exceptions queued as responses are raised.
    """

    routes: dict[tuple[str, str], list[Any]] = field(default_factory=lambda: defaultdict(list))
    calls: list[RecordedCall] = field(default_factory=list)

    def on(self, method: str, url: str, *responses: Any) -> "FakeMasterpieceAPI":
        self.routes[(method.upper(), url)].extend(responses)
        return self

    def calls_to(self, method: str, url: str | None = None) -> list[RecordedCall]:
        return [
            call
            for call in self.calls
            if call.method == method.upper() and (url is None or call.url == url)
        ]

    async def handle(self, call: RecordedCall) -> FakeResponse:
        self.calls.append(call)
        queue = self.routes.get((call.method, call.url))
        if not queue:
            return FakeResponse(404, {"message": "not found"})
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        return response

    def client_factory(self, *args: Any, **kwargs: Any) -> "FakeAsyncClient":
        return FakeAsyncClient(self)


class FakeAsyncClient:
    def __init__(self, api: FakeMasterpieceAPI) -> None:
        self._api = api

    async def __aenter__(self) -> "FakeAsyncClient":  # pragma: no cover - helper
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:  # pragma: no cover - helper
        return None

    async def get(self, url: str, headers: dict[str, str] | None = None) -> FakeResponse:
        return await self._api.handle(RecordedCall("GET", url, headers=headers))

    async def post(
        self, url: str, headers: dict[str, str] | None = None, json: Any = None
    ) -> FakeResponse:
        return await self._api.handle(RecordedCall("POST", url, headers=headers, json=json))

    async def put(
        self, url: str, headers: dict[str, str] | None = None, content: bytes | None = None
    ) -> FakeResponse:
        return await self._api.handle(RecordedCall("PUT", url, headers=headers, content=content))
