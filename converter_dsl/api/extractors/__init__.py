"""Declaration extraction utilities."""

from .spec_extractor import extract_spec, KNOWN_ARGUMENTS

__all__ = [
    "extract_spec",
    "KNOWN_ARGUMENTS",
]
