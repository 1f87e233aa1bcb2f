"""Data structures shared by the Masterpiece client and its callers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class JobStatus(StrEnum):
    """Tri-state status persisted on the owning product record."""

    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class PollOutcome(StrEnum):
    """Classification of a single status response."""

    SUCCESS = "success"
    FAILURE = "failure"
    RETRY = "retry"
    UNKNOWN = "unknown"


SUCCESS_STATUSES = frozenset({"complete", "completed", "success", "done", "finished"})
FAILURE_STATUSES = frozenset({"failed", "error", "failure"})
PENDING_STATUSES = frozenset({"pending", "processing", "in_progress", "queued", "running"})

DEFAULT_FAILURE_REASON = "3D model generation failed"


def classify_status(raw_status: str | None) -> PollOutcome:
    """Map a provider status string onto :class:`PollOutcome`.

    Unrecognised or missing statuses are ``UNKNOWN``; the poller treats them
    as retry-eligible.
    """

    if raw_status is None:
        return PollOutcome.UNKNOWN
    normalized = raw_status.strip().lower()
    if normalized in SUCCESS_STATUSES:
        return PollOutcome.SUCCESS
    if normalized in FAILURE_STATUSES:
        return PollOutcome.FAILURE
    if normalized in PENDING_STATUSES:
        return PollOutcome.RETRY
    return PollOutcome.UNKNOWN


@dataclass(slots=True)
class StatusSnapshot:
    """One classified status response for a job."""

    job_id: str
    raw_status: str | None
    outcome: PollOutcome
    result_url: str | None = None
    failure_reason: str | None = None
    payload: Any = None

    @property
    def is_terminal(self) -> bool:
        return self.outcome in (PollOutcome.SUCCESS, PollOutcome.FAILURE)


@dataclass(slots=True)
class GenerationResult:
    """Successful outcome of :meth:`MasterpieceClient.generate`."""

    job_id: str
    result_url: str
    status: JobStatus = JobStatus.COMPLETED
    metadata: Any = None


@dataclass(slots=True)
class Model3DState:
    """``model3d`` sub-document stored on a product record."""

    status: str
    masterpiece_id: str | None = None
    url: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"status": self.status, "masterpieceId": self.masterpiece_id}
        if self.url is not None:
            data["url"] = self.url
        if self.error is not None:
            data["error"] = self.error
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Model3DState":
        return cls(
            status=str(data.get("status") or "pending"),
            masterpiece_id=data.get("masterpieceId"),
            url=data.get("url"),
            error=data.get("error"),
        )


@dataclass(slots=True)
class SourceImage:
    """Binary image fetched for the asset upload handshake."""

    content: bytes
    content_type: str
    filename: str

    @property
    def content_length(self) -> int:
        return len(self.content)


__all__ = [
    "DEFAULT_FAILURE_REASON",
    "FAILURE_STATUSES",
    "GenerationResult",
    "JobStatus",
    "Model3DState",
    "PENDING_STATUSES",
    "PollOutcome",
    "SUCCESS_STATUSES",
    "SourceImage",
    "StatusSnapshot",
    "classify_status",
]
