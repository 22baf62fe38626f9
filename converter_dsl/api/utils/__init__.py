"""Utility functions for naming and paths."""

from .casing import to_capitalized, to_lowered
from .paths import artifact_base_name, artifact_identity, artifact_path, ARTIFACT_SUFFIX

__all__ = [
    "to_capitalized",
    "to_lowered",
    "artifact_base_name",
    "artifact_identity",
    "artifact_path",
    "ARTIFACT_SUFFIX",
]
