"""
Code generators for converter builder functions.

- synthesizers: one pure FunctionSpec factory per variant kind
- emitter: file assembly (Jinja2) and artifact writing
"""

from .synthesizers import (
    SYNTHESIZERS,
    synthesize,
    synthesize_single,
    synthesize_optional,
    synthesize_defaulting,
    synthesize_list,
)
from .emitter import GeneratedArtifact, emit, write_artifact, unsupported_marker

__all__ = [
    "SYNTHESIZERS",
    "synthesize",
    "synthesize_single",
    "synthesize_optional",
    "synthesize_defaulting",
    "synthesize_list",
    "GeneratedArtifact",
    "emit",
    "write_artifact",
    "unsupported_marker",
]
