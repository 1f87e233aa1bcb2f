"""Candidate endpoint resolution for the Masterpiece REST API.

The provider exposes several undocumented, versioned URL shapes for the same
operation. Instead of hard-coding one, the client probes an ordered list of
candidates: configured override paths first, then built-in defaults. When the
base URL already ends with a version segment (``/v2``) and a path starts with
one, the version-stripped base is used so URLs never contain ``/v2/v2``.
Both the configured base and its version-stripped variant are expanded.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from .masterpiece_errors import MasterpieceConfigError

JOB_ID_PLACEHOLDER = "{jobId}"
LEGACY_PLACEHOLDER = "{requestId}"

_BASE_VERSION_RE = re.compile(r"/v\d+$")
_PATH_VERSION_RE = re.compile(r"^/v\d+/")
_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


class EndpointRole(StrEnum):
    CREATE = "create"
    STATUS = "status"
    ASSET = "asset"


DEFAULT_PATHS: Mapping[EndpointRole, tuple[str, ...]] = {
    EndpointRole.CREATE: (
        "/functions/imageto3d",
        "/v2/functions/imageto3d",
        "/functions/image-to-3d",
        "/v2/functions/image-to-3d",
    ),
    EndpointRole.STATUS: (
        "/v2/status/{jobId}",
        "/status/{jobId}",
        "/v2/functions/imageto3d/status/{jobId}",
        "/functions/imageto3d/{jobId}",
        "/v2/functions/image-to-3d/status/{jobId}",
        "/functions/image-to-3d/{jobId}",
        "/v2/requests/{jobId}",
        "/requests/{jobId}",
    ),
    EndpointRole.ASSET: (
        "/assets/create",
        "/v2/assets/create",
    ),
}


def parse_path_list(value: str | None) -> list[str]:
    """Split a comma-separated override list, dropping blanks."""

    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def ensure_job_placeholder(path: str) -> str:
    if JOB_ID_PLACEHOLDER in path or LEGACY_PLACEHOLDER in path:
        return path
    return f"{path.rstrip('/')}/{JOB_ID_PLACEHOLDER}"


def substitute_job_id(pattern: str, job_id: str) -> str:
    return pattern.replace(JOB_ID_PLACEHOLDER, job_id).replace(LEGACY_PLACEHOLDER, job_id)


def join_url(base: str, path: str) -> str:
    """Join ``path`` onto ``base``; absolute URLs are returned verbatim."""

    if _SCHEME_RE.match(path):
        return path.rstrip("/")
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{base}{path}".rstrip("/")


def _unique(items: Iterable[str]) -> list[str]:
    seen: dict[str, None] = {}
    for item in items:
        seen.setdefault(item, None)
    return list(seen)


@dataclass(slots=True, frozen=True)
class EndpointResolver:
    """Pure, deterministic candidate generator for the three API roles."""

    base_url: str
    overrides: Mapping[EndpointRole, Sequence[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.base_url or not self.base_url.strip():
            raise MasterpieceConfigError(
                "MASTERPIECE_X_API_URL is not set in environment variables"
            )

    def candidates(self, role: EndpointRole) -> list[str]:
        base = self.base_url.strip().rstrip("/")
        stripped = _BASE_VERSION_RE.sub("", base)
        bases = _unique(item for item in (base, stripped) if item)
        paths = _unique([*self.overrides.get(role, ()), *DEFAULT_PATHS[role]])

        endpoints: list[str] = []
        # Path-major order keeps every override ahead of every default.
        for path in paths:
            if role is EndpointRole.STATUS:
                path = ensure_job_placeholder(path)
            for candidate_base in bases:
                target = candidate_base
                if _BASE_VERSION_RE.search(candidate_base) and _PATH_VERSION_RE.match(path):
                    target = stripped or candidate_base
                endpoints.append(join_url(target, path))
        return _unique(endpoints)

    def creation_endpoints(self) -> list[str]:
        return self.candidates(EndpointRole.CREATE)

    def status_patterns(self) -> list[str]:
        return self.candidates(EndpointRole.STATUS)

    def asset_endpoints(self) -> list[str]:
        return self.candidates(EndpointRole.ASSET)


__all__ = [
    "DEFAULT_PATHS",
    "EndpointResolver",
    "EndpointRole",
    "JOB_ID_PLACEHOLDER",
    "ensure_job_placeholder",
    "join_url",
    "parse_path_list",
    "substitute_job_id",
]
