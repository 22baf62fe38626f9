"""Converter function generation pipeline."""

from .generator import (
    DeclarationFailure,
    GenerationReport,
    check_artifact_collisions,
    generate,
    generate_for_declaration,
)

__all__ = [
    "DeclarationFailure",
    "GenerationReport",
    "check_artifact_collisions",
    "generate",
    "generate_for_declaration",
]
