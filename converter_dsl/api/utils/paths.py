"""Artifact naming and output path utilities."""

from pathlib import Path

ARTIFACT_SUFFIX = "Functions"


def artifact_base_name(declaration_simple_name: str) -> str:
    return f"{declaration_simple_name}{ARTIFACT_SUFFIX}"


def artifact_identity(package: str, base_name: str) -> str:
    """Build-wide identity of an artifact: its qualified file name."""
    return f"{package}.{base_name}" if package else base_name


def artifact_path(out_dir, package: str, base_name: str, extension: str = ".kt") -> Path:
    """
    Location of an artifact below `out_dir`, one directory per package segment.

    e.g. ("out", "a.b", "XFunctions") -> out/a/b/XFunctions.kt
    """
    path = Path(out_dir)
    if package:
        path = path.joinpath(*package.split("."))
    return path / f"{base_name}{extension}"
