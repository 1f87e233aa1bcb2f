from __future__ import annotations

import pytest

from tests.mocks.masterpiece_api import FakeMasterpieceAPI

MASTERPIECE_ENV = (
    "MASTERPIECE_X_API_URL",
    "MASTERPIECE_X_API_KEY",
    "MASTERPIECE_X_APP_ID",
    "ENABLE_3D_GENERATION",
    "MASTERPIECE_POLL_INTERVAL_MS",
    "MASTERPIECE_MAX_POLL_ATTEMPTS",
    "MASTERPIECE_REQUEST_TIMEOUT_MS",
    "MASTERPIECE_GENERATE_PATHS",
    "MASTERPIECE_STATUS_PATHS",
    "MASTERPIECE_ASSET_PATHS",
    "MASTERPIECE_FORCE_ASSET_UPLOAD",
    "MASTERPIECE_TRY_ASSET_UPLOAD",
)


@pytest.fixture(autouse=True)
def clean_masterpiece_env(monkeypatch):
    for name in MASTERPIECE_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def masterpiece_api(monkeypatch) -> FakeMasterpieceAPI:
    api = FakeMasterpieceAPI()
    monkeypatch.setattr("httpx.AsyncClient", api.client_factory)
    return api
