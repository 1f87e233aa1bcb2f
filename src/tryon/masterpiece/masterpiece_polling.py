"""Status endpoint discovery and polling loop."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from .masterpiece_endpoints import EndpointResolver, substitute_job_id
from .masterpiece_errors import (
    EndpointUnreachableError,
    GenerationFailedError,
    GenerationTimeoutError,
    MalformedResponseError,
    MasterpieceRequestError,
)
from .masterpiece_extract import (
    extract_failure_reason,
    extract_result_url,
    extract_status,
)
from .masterpiece_models import (
    DEFAULT_FAILURE_REASON,
    GenerationResult,
    PollOutcome,
    StatusSnapshot,
    classify_status,
)
from .masterpiece_probe import ProbeHit, SkipCandidate, first_accepting
from .masterpiece_transport import (
    TRANSPORT_ERRORS,
    MasterpieceTransport,
    body_preview,
    is_success,
    response_json,
)

logger = logging.getLogger(__name__)


def build_snapshot(job_id: str, payload: Any) -> StatusSnapshot:
    """Classify a status payload and pull out the terminal details."""

    raw_status = extract_status(payload)
    outcome = classify_status(raw_status)
    snapshot = StatusSnapshot(job_id=job_id, raw_status=raw_status, outcome=outcome, payload=payload)
    if outcome is PollOutcome.SUCCESS:
        snapshot.result_url = extract_result_url(payload)
    elif outcome is PollOutcome.FAILURE:
        snapshot.failure_reason = extract_failure_reason(payload) or DEFAULT_FAILURE_REASON
    return snapshot


@dataclass(slots=True)
class StatusPoller:
    transport: MasterpieceTransport
    resolver: EndpointResolver
    poll_interval_seconds: float = 5.0
    max_attempts: int = 240
    log: logging.Logger = field(default_factory=lambda: logger)

    async def discover(self, job_id: str) -> ProbeHit[Any]:
        """Find the first status pattern that answers for ``job_id``.

        The returned hit carries the pattern (placeholder intact) and the
        probe's decoded body. No poll attempts are consumed here.
        """

        async def probe(pattern: str) -> Any:
            url = substitute_job_id(pattern, job_id)
            self.log.info("masterpiece.status.probe", extra={"url": url, "job_id": job_id})
            response = await self.transport.get(url)
            if response.status_code < 300:
                return response_json(response)
            raise SkipCandidate("status probe rejected", status_code=response.status_code)

        hit = await first_accepting(
            self.resolver.status_patterns(), probe, role="status", log=self.log
        )
        if hit is None:
            raise EndpointUnreachableError(
                "Could not find valid status endpoint. Tried all possible endpoints.",
                role="status",
                job_id=job_id,
            )
        return hit

    async def poll(self, job_id: str, pattern: str) -> GenerationResult:
        """Poll ``pattern`` until the job is terminal or attempts run out."""

        url = substitute_job_id(pattern, job_id)
        attempts = 0
        while attempts < self.max_attempts:
            await asyncio.sleep(self.poll_interval_seconds)
            attempt_label = f"{attempts + 1}/{self.max_attempts}"
            context = {"job_id": job_id, "url": url, "attempt": attempt_label}

            try:
                response = await self.transport.get(url)
            except TRANSPORT_ERRORS as exc:
                self.log.warning("masterpiece.poll.network_error", extra={**context, "error": str(exc)})
                attempts += 1
                continue

            if response.status_code == 404:
                self.log.info("masterpiece.poll.not_indexed", extra=context)
                attempts += 1
                continue
            if response.status_code >= 500:
                self.log.warning(
                    "masterpiece.poll.server_error",
                    extra={**context, "status_code": response.status_code},
                )
                attempts += 1
                continue
            if not is_success(response.status_code):
                self.log.error(
                    "masterpiece.poll.fatal_status",
                    extra={
                        **context,
                        "status_code": response.status_code,
                        "body_preview": body_preview(response),
                    },
                )
                raise MasterpieceRequestError(
                    f"Masterpiece status check failed (status={response.status_code})",
                    status_code=response.status_code,
                    url=url,
                    job_id=job_id,
                )

            snapshot = build_snapshot(job_id, response_json(response))
            self.log.info(
                "masterpiece.poll.status",
                extra={**context, "status": snapshot.raw_status, "outcome": snapshot.outcome.value},
            )

            if snapshot.outcome is PollOutcome.SUCCESS:
                if not snapshot.result_url:
                    self.log.error(
                        "masterpiece.poll.missing_result_url",
                        extra={**context, "payload": snapshot.payload},
                    )
                    raise MalformedResponseError(
                        "3D model generation completed but no model URL was returned",
                        payload=snapshot.payload,
                        job_id=job_id,
                    )
                return GenerationResult(
                    job_id=job_id,
                    result_url=snapshot.result_url,
                    metadata=snapshot.payload,
                )
            if snapshot.outcome is PollOutcome.FAILURE:
                reason = snapshot.failure_reason or DEFAULT_FAILURE_REASON
                self.log.error("masterpiece.poll.remote_failure", extra={**context, "reason": reason})
                raise GenerationFailedError(reason, job_id=job_id)
            if snapshot.outcome is PollOutcome.UNKNOWN:
                if snapshot.raw_status is None:
                    self.log.warning("masterpiece.poll.missing_status", extra=context)
                else:
                    self.log.warning(
                        "masterpiece.poll.unknown_status",
                        extra={**context, "status": snapshot.raw_status},
                    )
            attempts += 1

        raise GenerationTimeoutError(self.max_attempts, job_id=job_id)

    async def check(self, job_id: str) -> StatusSnapshot:
        """Discover a status endpoint and classify its single response."""

        hit = await self.discover(job_id)
        return build_snapshot(job_id, hit.value)


__all__ = ["StatusPoller", "build_snapshot"]
