"""Service clients for collaborators of the comparison engine."""

from .extraction_client import ExtractionClient

__all__ = [
    "ExtractionClient",
]
