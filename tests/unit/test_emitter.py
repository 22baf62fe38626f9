"""
Artifact assembly: file layout, import fidelity and atomic writing.
"""

from converter_dsl.api.generators import emit, synthesize, write_artifact
from converter_dsl.api.planner import plan_variants
from converter_dsl.config import GeneratorConfig
from converter_dsl.environment import TypeRef


def _emit(spec, config):
    entries = plan_variants(spec)
    return emit(spec, entries, [synthesize(entry, spec) for entry in entries], config)


EXPECTED_SINGLE = """\
@file:OptIn(
    KordPreview::class,
    ConverterToDefaulting::class,
    ConverterToMulti::class,
    ConverterToOptional::class
)

package com.example.converters

// Converter value type
import kotlinx.datetime.DateTimePeriod

// Source converter class
import com.example.converters.DurationConverter

// Framework imports
import com.kotlindiscord.kord.extensions.commands.converters.*
import com.kotlindiscord.kord.extensions.commands.parser.Arguments
import dev.kord.common.annotation.KordPreview

/**
 * Creates a duration converter, for single arguments.
 *
 * @see DurationConverter
 */
public fun Arguments.duration(
    displayName: String,
    description: String,
    validator: Validator<DateTimePeriod> = null,
): SingleConverter<DateTimePeriod> = arg(
    displayName = displayName,
    description = description,

    converter = DurationConverter(validator)
)
"""


class TestLayout:

    def test_single_variant_file(self, make_spec, config):
        artifact = _emit(make_spec(), config)

        assert artifact.text == EXPECTED_SINGLE
        assert artifact.target_package == "com.example.converters"
        assert artifact.target_file_base_name == "DurationConverterFunctions"
        assert artifact.identity == "com.example.converters.DurationConverterFunctions"

    def test_functions_follow_plan_order(self, make_spec, config):
        text = _emit(make_spec(types=("SINGLE", "LIST", "OPTIONAL", "DEFAULTING")), config).text

        positions = [
            text.index("fun Arguments.defaultingDuration("),
            text.index("fun Arguments.durationList("),
            text.index("fun Arguments.optionalDuration("),
            text.index("fun Arguments.duration("),
        ]
        assert positions == sorted(positions)
        assert "\n)\n\n/**\n" in text

    def test_output_is_deterministic(self, make_spec, config):
        first = _emit(make_spec(types=("OPTIONAL", "SINGLE", "CHOICE")), config).text
        second = _emit(make_spec(types=("CHOICE", "SINGLE", "OPTIONAL")), config).text
        assert first == second

    def test_extra_imports_follow_framework_imports(self, make_spec, config):
        text = _emit(make_spec(extra_imports=("kotlin.math.sign", "kotlin.math.abs")), config).text

        assert (
            "import dev.kord.common.annotation.KordPreview\n"
            "\n"
            "// Extra imports\n"
            "import kotlin.math.sign\n"
            "import kotlin.math.abs\n"
            "\n"
            "/**"
        ) in text

    def test_generic_value_type_imports_every_argument(self, make_spec, config):
        value_type = TypeRef(
            "kotlin.collections.Map",
            (TypeRef("kotlin.String"), TypeRef("dev.kord.common.entity.Snowflake")),
        )
        text = _emit(make_spec(value_type=value_type), config).text

        assert (
            "// Converter value type\n"
            "import kotlin.collections.Map\n"
            "import kotlin.String\n"
            "import dev.kord.common.entity.Snowflake\n"
        ) in text
        assert "Validator<Map<String, Snowflake>>" in text

    def test_default_package(self, make_spec, config):
        artifact = _emit(make_spec(package=""), config)

        assert "package " not in artifact.text
        assert "import DurationConverter\n" in artifact.text
        assert artifact.identity == "DurationConverterFunctions"

    def test_config_controls_header(self, make_spec):
        config = GeneratorConfig(opt_ins=(), framework_imports=("x.y.Arguments",))
        text = _emit(make_spec(), config).text

        assert text.startswith("package com.example.converters\n")
        assert "// Framework imports\nimport x.y.Arguments\n" in text


class TestPlaceholders:

    def test_unsupported_variant_leaves_a_marker(self, make_spec, config):
        text = _emit(make_spec(types=("SINGLE", "COALESCING")), config).text

        assert "// Unsupported converter type: COALESCING\n\n/**" in text
        assert text.count("public fun ") == 1

    def test_only_unsupported_variants_produce_no_artifact(self, make_spec, config):
        assert _emit(make_spec(types=("COALESCING",)), config) is None

    def test_choice_only_produces_no_artifact(self, make_spec, config):
        assert _emit(make_spec(types=("CHOICE",)), config) is None


class TestWriting:

    def test_write_creates_package_directories(self, make_spec, config, temp_output_dir):
        artifact = _emit(make_spec(), config)
        path = write_artifact(artifact, temp_output_dir)

        assert path == temp_output_dir / "com" / "example" / "converters" / "DurationConverterFunctions.kt"
        assert path.read_text(encoding="utf-8") == artifact.text
        assert [p.name for p in path.parent.iterdir()] == ["DurationConverterFunctions.kt"]

    def test_write_replaces_existing_file(self, make_spec, config, temp_output_dir):
        artifact = _emit(make_spec(), config)
        path = write_artifact(artifact, temp_output_dir)
        path.write_text("stale", encoding="utf-8")

        write_artifact(artifact, temp_output_dir)
        assert path.read_text(encoding="utf-8") == artifact.text

    def test_write_uses_extension(self, make_spec, config, temp_output_dir):
        path = write_artifact(_emit(make_spec(), config), temp_output_dir, ".kts")
        assert path.suffix == ".kts"
