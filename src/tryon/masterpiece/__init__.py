"""Masterpiece X image-to-3D model generation client."""

from .masterpiece_client import MasterpieceClient
from .masterpiece_endpoints import EndpointResolver, EndpointRole
from .masterpiece_errors import (
    AssetUploadError,
    EndpointUnreachableError,
    GenerationFailedError,
    GenerationTimeoutError,
    MalformedResponseError,
    MasterpieceConfigError,
    MasterpieceError,
    MasterpieceRequestError,
)
from .masterpiece_models import (
    GenerationResult,
    JobStatus,
    Model3DState,
    PollOutcome,
    StatusSnapshot,
)

__all__ = [
    "AssetUploadError",
    "EndpointResolver",
    "EndpointRole",
    "EndpointUnreachableError",
    "GenerationFailedError",
    "GenerationResult",
    "GenerationTimeoutError",
    "JobStatus",
    "MalformedResponseError",
    "MasterpieceClient",
    "MasterpieceConfigError",
    "MasterpieceError",
    "MasterpieceRequestError",
    "Model3DState",
    "PollOutcome",
    "StatusSnapshot",
]
