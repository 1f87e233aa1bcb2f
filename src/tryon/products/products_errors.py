"""Errors raised by the product 3D model service."""


class ProductNotFoundError(KeyError):
    """Raised when a product record does not exist."""


class ProductImageMissingError(Exception):
    """Raised when a product has no image to generate a model from."""


class GenerationInProgressError(Exception):
    """Raised when a generation is already running for the product."""


class ModelNotReadyError(Exception):
    """Raised when a completed 3D model is requested but not available."""

    def __init__(self, status: str) -> None:
        super().__init__(f"3D model not available (status={status})")
        self.status = status
