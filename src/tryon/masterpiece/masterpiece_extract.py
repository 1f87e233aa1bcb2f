"""Ordered accessor paths for heterogeneous provider payloads.

Every logical value (job id, result URL, ...) may live under several field
names depending on the API version. Each value is described by a tuple of
paths evaluated first-match-wins, which keeps the priority order explicit.
"""

from __future__ import annotations

from typing import Any

AccessorPath = tuple[str, ...]

JOB_ID_PATHS: tuple[AccessorPath, ...] = (
    ("requestId",),
    ("request_id",),
    ("id",),
    ("data", "requestId"),
)

ASSET_UPLOAD_URL_PATHS: tuple[AccessorPath, ...] = (
    ("uploadUrl",),
    ("url",),
    ("signedUrl",),
)

ASSET_ID_PATHS: tuple[AccessorPath, ...] = (
    ("requestId",),
    ("assetId",),
    ("data", "requestId"),
)

STATUS_PATHS: tuple[AccessorPath, ...] = (
    ("status",),
    ("state",),
    ("data", "status"),
)

# GLB first: it is the format the storefront viewer renders.
RESULT_URL_PATHS: tuple[AccessorPath, ...] = (
    ("outputs", "glb"),
    ("outputs", "fbx"),
    ("outputs", "usdz"),
    ("output", "glb"),
    ("output", "url"),
    ("output", "modelUrl"),
    ("output", "model_url"),
    ("result", "url"),
    ("result", "modelUrl"),
    ("result", "model_url"),
    ("modelUrl",),
    ("model_url",),
    ("url",),
    ("data", "url"),
    ("data", "output", "url"),
    ("data", "outputs", "glb"),
    ("data", "modelUrl"),
)

FAILURE_REASON_PATHS: tuple[AccessorPath, ...] = (
    ("error",),
    ("message",),
    ("error_message",),
    ("errorMessage",),
)


def resolve_path(payload: Any, path: AccessorPath) -> Any:
    current = payload
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def first_match(payload: Any, paths: tuple[AccessorPath, ...]) -> str | None:
    """Return the first non-empty scalar found along ``paths`` as a string."""

    for path in paths:
        value = resolve_path(payload, path)
        if isinstance(value, bool) or value is None:
            continue
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, str) and value.strip():
            return value
    return None


def extract_job_id(payload: Any) -> str | None:
    return first_match(payload, JOB_ID_PATHS)


def extract_status(payload: Any) -> str | None:
    return first_match(payload, STATUS_PATHS)


def extract_result_url(payload: Any) -> str | None:
    return first_match(payload, RESULT_URL_PATHS)


def extract_failure_reason(payload: Any) -> str | None:
    return first_match(payload, FAILURE_REASON_PATHS)


def extract_asset_ticket(payload: Any) -> tuple[str, str] | None:
    """Return ``(upload_url, asset_id)`` when both are present."""

    upload_url = first_match(payload, ASSET_UPLOAD_URL_PATHS)
    asset_id = first_match(payload, ASSET_ID_PATHS)
    if not upload_url or not asset_id:
        return None
    return upload_url, asset_id


__all__ = [
    "ASSET_ID_PATHS",
    "ASSET_UPLOAD_URL_PATHS",
    "FAILURE_REASON_PATHS",
    "JOB_ID_PATHS",
    "RESULT_URL_PATHS",
    "STATUS_PATHS",
    "extract_asset_ticket",
    "extract_failure_reason",
    "extract_job_id",
    "extract_result_url",
    "extract_status",
    "first_match",
    "resolve_path",
]
