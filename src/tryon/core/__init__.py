"""Core configuration primitives."""

from .config import MasterpieceSettings

__all__ = ["MasterpieceSettings"]
