"""Assembly and writing of generated converter function files."""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from converter_dsl.templates import env as jinja_env

from ..gen_logging import get_logger
from ..utils import artifact_base_name, artifact_identity, artifact_path

logger = get_logger(__name__)

TEMPLATE_NAME = "kotlin/functions.kt.jinja"


@dataclass(frozen=True)
class GeneratedArtifact:
    """One generated source file; written once, to its declaration's package."""
    target_package: str
    target_file_base_name: str
    text: str
    source_file: Optional[Path] = None

    @property
    def identity(self) -> str:
        return artifact_identity(self.target_package, self.target_file_base_name)


def unsupported_marker(variant_name: str) -> str:
    return f"// Unsupported converter type: {variant_name}"


def emit(spec, entries, functions, config) -> Optional[GeneratedArtifact]:
    """
    Render the artifact for one converter.

    Args:
        spec: the ConverterSpec
        entries: plan entries, in plan order
        functions: FunctionSpec (or None for placeholders), aligned with entries
        config: GeneratorConfig (opt-ins and framework imports)

    Returns:
        The artifact, or None when no entry produced a real function.
    """
    if not any(fn is not None for fn in functions):
        return None

    blocks = []
    for entry, fn in zip(entries, functions):
        if fn is not None:
            text = fn.render()
        elif not entry.is_supported:
            text = unsupported_marker(entry.variant_name)
        else:
            text = ""
        text = text.strip("\n")
        if text:
            blocks.append(text)

    declaration = spec.declaration
    context = dict(
        opt_ins=list(config.opt_ins),
        package=declaration.package_name,
        value_type_imports=spec.value_type.import_paths(),
        converter_import=declaration.qualified_name,
        framework_imports=list(config.framework_imports),
        extra_imports=list(spec.extra_imports),
        body="\n\n".join(blocks),
    )
    text = jinja_env.get_template(TEMPLATE_NAME).render(**context) + "\n"

    return GeneratedArtifact(
        target_package=declaration.package_name,
        target_file_base_name=artifact_base_name(declaration.simple_name),
        text=text,
        source_file=declaration.source_file,
    )


def write_artifact(artifact: GeneratedArtifact, out_dir, extension: str = ".kt") -> Path:
    """
    Write an artifact below out_dir, replacing the target atomically.

    The text goes to a temporary sibling first so a failed write never
    leaves a truncated file behind.
    """
    target = artifact_path(out_dir, artifact.target_package, artifact.target_file_base_name, extension)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=str(target.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(artifact.text)
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info(f"[GENERATED] {artifact.identity} -> {target}")
    return target
