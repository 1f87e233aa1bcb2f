from __future__ import annotations

import pytest

from src.tryon.masterpiece.masterpiece_models import (
    Model3DState,
    PollOutcome,
    classify_status,
)


@pytest.mark.parametrize("status", ["complete", "completed", "success", "done", "finished"])
def test_success_statuses(status: str) -> None:
    assert classify_status(status) is PollOutcome.SUCCESS


@pytest.mark.parametrize("status", ["failed", "error", "failure"])
def test_failure_statuses(status: str) -> None:
    assert classify_status(status) is PollOutcome.FAILURE


@pytest.mark.parametrize("status", ["pending", "processing", "in_progress", "queued", "running"])
def test_pending_statuses(status: str) -> None:
    assert classify_status(status) is PollOutcome.RETRY


@pytest.mark.parametrize("status", ["warming_up", "", None])
def test_unknown_statuses(status: str | None) -> None:
    assert classify_status(status) is PollOutcome.UNKNOWN


def test_classification_ignores_case_and_whitespace() -> None:
    assert classify_status(" Completed ") is PollOutcome.SUCCESS


def test_model3d_state_round_trip() -> None:
    state = Model3DState(status="completed", masterpiece_id="req-1", url="https://m.test/a.glb")

    assert state.to_dict() == {
        "status": "completed",
        "masterpieceId": "req-1",
        "url": "https://m.test/a.glb",
    }
    assert Model3DState.from_dict(state.to_dict()) == state
    assert Model3DState(status="processing").to_dict() == {
        "status": "processing",
        "masterpieceId": None,
    }
