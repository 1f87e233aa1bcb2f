"""Try candidate endpoints in order until one accepts the request."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from .masterpiece_transport import TRANSPORT_ERRORS

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Statuses meaning "wrong endpoint shape", not "wrong credentials".
ENDPOINT_SHAPE_STATUSES = frozenset({400, 404, 405})


class SkipCandidate(Exception):
    """Raised by an attempt callable to move on to the next candidate."""

    def __init__(self, reason: str, *, status_code: int | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code


@dataclass(slots=True)
class ProbeHit(Generic[T]):
    endpoint: str
    value: T


def is_next_candidate_status(status_code: int) -> bool:
    """Return True when a failed status should fall through to the next candidate."""

    return status_code in ENDPOINT_SHAPE_STATUSES or status_code >= 500


async def first_accepting(
    candidates: Sequence[str],
    attempt: Callable[[str], Awaitable[T]],
    *,
    role: str,
    log: logging.Logger | None = None,
) -> ProbeHit[T] | None:
    """Run ``attempt`` for each candidate and return the first success.

    ``attempt`` signals a retry-eligible failure by raising
    :class:`SkipCandidate`; transport errors are treated the same way. Any
    other exception aborts the search. ``None`` is returned when every
    candidate was skipped.
    """

    log = log or logger
    total = len(candidates)
    for index, candidate in enumerate(candidates, start=1):
        try:
            value = await attempt(candidate)
        except SkipCandidate as exc:
            log.warning(
                "masterpiece.%s.candidate_skipped",
                role,
                extra={
                    "endpoint": candidate,
                    "status_code": exc.status_code,
                    "reason": exc.reason,
                    "candidate": f"{index}/{total}",
                },
            )
            continue
        except TRANSPORT_ERRORS as exc:
            log.warning(
                "masterpiece.%s.candidate_unreachable",
                role,
                extra={"endpoint": candidate, "error": str(exc), "candidate": f"{index}/{total}"},
            )
            continue
        log.info("masterpiece.%s.endpoint_selected", role, extra={"endpoint": candidate})
        return ProbeHit(endpoint=candidate, value=value)
    return None


__all__ = [
    "ENDPOINT_SHAPE_STATUSES",
    "ProbeHit",
    "SkipCandidate",
    "first_accepting",
    "is_next_candidate_status",
]
