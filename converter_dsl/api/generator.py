"""
Main entry point for converter function generation.

For every declaration carrying the converter annotation:

    scan -> extract -> plan -> synthesize -> emit -> write

Declarations are independent of each other, so the per-declaration pipeline
runs on a thread pool when more than one job is requested. A SpecError only
removes its own declaration from the output; an artifact name collision
fails the whole run before anything is written.

Architecture:
    - scanner: valid / deferred partition
    - extractors/: annotation -> ConverterSpec
    - planner: ordered variant plan
    - generators/: synthesizers (FunctionSpec) and emitter (file text + write)
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from converter_dsl.config import GeneratorConfig

from .errors import ArtifactCollisionError, SpecError
from .extractors import extract_spec
from .gen_logging import get_logger
from .generators import emit, synthesize, write_artifact
from .planner import plan_variants
from .scanner import scan
from .utils import artifact_base_name, artifact_identity

logger = get_logger(__name__)


@dataclass(frozen=True)
class DeclarationFailure:
    declaration: str
    error: SpecError


@dataclass
class GenerationReport:
    """Outcome of one generation run."""
    artifacts: list = field(default_factory=list)
    written: list = field(default_factory=list)
    failures: list = field(default_factory=list)
    deferred: list = field(default_factory=list)
    empty: list = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def generate_for_declaration(descriptor, environment, config: GeneratorConfig):
    """
    Run extract -> plan -> synthesize -> emit for one declaration.

    Returns the GeneratedArtifact, or None when nothing was synthesized.
    Raises SpecError (with declaration context attached) on fatal problems;
    nothing has been written at that point.
    """
    try:
        spec = extract_spec(descriptor, environment, config.annotation)
        entries = plan_variants(spec)
        functions = [synthesize(entry, spec) for entry in entries]
    except SpecError as e:
        raise e.for_declaration(descriptor.qualified_name, descriptor.location)

    for fn in functions:
        if fn is not None:
            logger.debug(f"  -> {descriptor.simple_name}: fun Arguments.{fn.name}({', '.join(fn.parameter_names)})")

    return emit(spec, entries, functions, config)


def check_artifact_collisions(descriptors) -> None:
    """Fail if two declarations would generate the same artifact."""
    owners = {}
    for descriptor in descriptors:
        identity = artifact_identity(descriptor.package_name, artifact_base_name(descriptor.simple_name))
        owner = owners.get(identity)
        if owner is not None:
            raise ArtifactCollisionError(identity, owner.qualified_name, f"{descriptor.qualified_name} ({descriptor.location})")
        owners[identity] = descriptor


def generate(environment, out_dir: Optional[Path] = None, config: GeneratorConfig = None, jobs: int = None) -> GenerationReport:
    """
    Generate builder functions for every annotated declaration in `environment`.

    Args:
        environment: host environment implementing the SymbolEnvironment queries
        out_dir: where to write artifacts; None renders without writing
        config: GeneratorConfig (defaults when omitted)
        jobs: worker threads; overrides config.jobs when given

    Returns:
        GenerationReport with artifacts, written paths, failures and deferred symbols

    Raises:
        ArtifactCollisionError: two declarations map to one artifact
    """
    config = config or GeneratorConfig()
    jobs = jobs or config.jobs
    report = GenerationReport()

    valid, deferred = scan(environment, config.annotation)
    report.deferred = list(deferred)
    check_artifact_collisions(valid)

    def _run(descriptor):
        try:
            return descriptor, generate_for_declaration(descriptor, environment, config), None
        except SpecError as e:
            return descriptor, None, e

    if jobs > 1 and len(valid) > 1:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            results = list(pool.map(_run, valid))
    else:
        results = [_run(descriptor) for descriptor in valid]

    # Results are in scan order regardless of which worker finished first
    for descriptor, artifact, error in results:
        if error is not None:
            logger.error(f"[FAILED] {error}")
            report.failures.append(DeclarationFailure(descriptor.qualified_name, error))
            continue

        if artifact is None:
            logger.warning(f"[SKIPPED] {descriptor.qualified_name}: no builder functions to generate")
            report.empty.append(descriptor.qualified_name)
            continue

        report.artifacts.append(artifact)
        if out_dir is not None:
            report.written.append(write_artifact(artifact, out_dir, config.file_extension))

    logger.info(
        f"[SUMMARY] {len(report.artifacts)} artifact(s), {len(report.failures)} failure(s), "
        f"{len(report.deferred)} deferred, {len(report.empty)} empty"
    )
    return report
