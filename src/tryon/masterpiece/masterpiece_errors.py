"""Error taxonomy for the Masterpiece image-to-3D integration."""

from __future__ import annotations

from typing import Any


class MasterpieceError(Exception):
    """Base class for image-to-3D generation errors.

    ``job_id`` is filled in once the provider has assigned an identifier so
    callers can persist it next to the failure.
    """

    def __init__(self, message: str, *, job_id: str | None = None) -> None:
        super().__init__(message)
        self.job_id = job_id


class MasterpieceConfigError(MasterpieceError):
    """Raised when URL/key are missing or the feature is disabled."""


class EndpointUnreachableError(MasterpieceError):
    """Raised when every candidate endpoint for a role was exhausted."""

    def __init__(self, message: str, *, role: str, job_id: str | None = None) -> None:
        super().__init__(message, job_id=job_id)
        self.role = role


class MalformedResponseError(MasterpieceError):
    """Raised when a successful response lacks the expected id or URL."""

    def __init__(self, message: str, *, payload: Any, job_id: str | None = None) -> None:
        super().__init__(message, job_id=job_id)
        self.payload = payload


class GenerationFailedError(MasterpieceError):
    """Raised when the provider reports the job as failed."""

    def __init__(self, reason: str, *, job_id: str | None = None) -> None:
        super().__init__(reason, job_id=job_id)
        self.reason = reason


class GenerationTimeoutError(MasterpieceError):
    """Raised when polling exceeded the attempt budget."""

    def __init__(self, attempts: int, *, job_id: str | None = None) -> None:
        super().__init__(
            f"3D model generation timeout - exceeded maximum poll attempts ({attempts})",
            job_id=job_id,
        )
        self.attempts = attempts


class AssetUploadError(MasterpieceError):
    """Raised when asset upload is mandatory but no candidate succeeded."""


class MasterpieceRequestError(MasterpieceError):
    """Raised for HTTP statuses that signal a configuration problem (401/403...)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        url: str,
        job_id: str | None = None,
    ) -> None:
        super().__init__(message, job_id=job_id)
        self.status_code = status_code
        self.url = url


__all__ = [
    "AssetUploadError",
    "EndpointUnreachableError",
    "GenerationFailedError",
    "GenerationTimeoutError",
    "MalformedResponseError",
    "MasterpieceConfigError",
    "MasterpieceError",
    "MasterpieceRequestError",
]
