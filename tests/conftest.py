"""
Pytest configuration and shared fixtures for the converter DSL test suite.
"""

import logging
import shutil
import tempfile
from pathlib import Path

import pytest

from converter_dsl.api.converter_spec import ConverterSpec, VariantKind
from converter_dsl.config import GeneratorConfig
from converter_dsl.environment import ConverterDescriptor, SourceEnvironment, TypeRef


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def examples_dir(project_root):
    """Return the example converter sources directory."""
    return project_root / "examples" / "converters"


@pytest.fixture
def temp_output_dir():
    """Create a temporary directory for generated code output."""
    temp_dir = tempfile.mkdtemp(prefix="cdsl_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def config():
    return GeneratorConfig()


@pytest.fixture(autouse=True)
def reset_gen_logging():
    """CLI tests install a stderr handler bound to CliRunner's stream; drop it afterwards."""
    yield
    root = logging.getLogger("cdsl.gen")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.propagate = True
    root.setLevel(logging.NOTSET)


# Source factories

def kotlin_converter(
    class_name="DurationConverter",
    name='"duration"',
    types=("SINGLE",),
    imports=None,
    package="com.example.converters",
    supertype="SingleConverter<DateTimePeriod>",
    type_parameters="",
    extra_imports=(),
):
    """Build a converter declaration source; pass name=None/types=None to omit them."""
    lines = []
    if package:
        lines += [f"package {package}", ""]
    lines += [
        "import com.kotlindiscord.kord.extensions.commands.converters.SingleConverter",
        "import com.kotlindiscord.kord.extensions.modules.annotations.converters.Converter",
        "import com.kotlindiscord.kord.extensions.modules.annotations.converters.ConverterType",
        "import kotlinx.datetime.DateTimePeriod",
    ]
    lines += [f"import {path}" for path in extra_imports]
    lines.append("")

    arguments = []
    if name is not None:
        arguments.append(f"    name = {name},")
    if types is not None:
        arguments.append("    types = [" + ", ".join(f"ConverterType.{t}" for t in types) + "],")
    if imports is not None:
        arguments.append("    imports = [" + ", ".join(f'"{i}"' for i in imports) + "],")

    lines.append("@Converter(")
    lines += arguments
    lines.append(")")
    header = f"public class {class_name}{type_parameters}"
    if supertype:
        header += f" : {supertype}()"
    lines.append(header + " {")
    lines.append('    override val signatureTypeString: String = "converters.test.signatureType"')
    lines.append("}")
    return "\n".join(lines) + "\n"


@pytest.fixture
def converter_source():
    """Factory fixture returning converter declaration source text."""
    return kotlin_converter


@pytest.fixture
def make_environment(config):
    """Factory fixture: {file name: source} -> SourceEnvironment with the default classpath."""
    def _make(sources: dict) -> SourceEnvironment:
        return SourceEnvironment.from_strings(
            sources,
            known_types=config.classpath,
            annotation_parameters=config.annotation_signatures,
        )
    return _make


@pytest.fixture
def make_spec():
    """Factory fixture building a ConverterSpec without going through a source file."""
    def _make(
        name="duration",
        types=("SINGLE",),
        value_type=None,
        extra_imports=(),
        converter="DurationConverter",
        package="com.example.converters",
    ) -> ConverterSpec:
        variants = {VariantKind.parse(t) for t in types} - {None}
        unsupported = {t for t in types if VariantKind.parse(t) is None}
        descriptor = ConverterDescriptor(
            simple_name=converter,
            qualified_name=f"{package}.{converter}" if package else converter,
            package_name=package,
            supertypes=(),
            source_file=None,
            location="test.kt:1:1",
            symbol=None,
        )
        return ConverterSpec(
            name=name,
            value_type=value_type or TypeRef("kotlinx.datetime.DateTimePeriod"),
            variants=frozenset(variants),
            unsupported_variants=frozenset(unsupported),
            extra_imports=tuple(extra_imports),
            declaration=descriptor,
        )
    return _make
