"""
ConverterSpec extraction: required arguments, shapes and the value type.
"""

import pytest

from converter_dsl.api.converter_spec import VariantKind
from converter_dsl.api.errors import (
    InvalidArgument,
    MissingRequiredArgument,
    NoSupertype,
    UnresolvedValueType,
)
from converter_dsl.api.extractors import extract_spec
from converter_dsl.config import ANNOTATION_FQN


@pytest.fixture
def extract(make_environment):
    """Extract the ConverterSpec of the single converter in `source`."""
    def _extract(source):
        environment = make_environment({"Converter.kt": source})
        symbol = environment.symbols_with_annotation(ANNOTATION_FQN)[0]
        return extract_spec(environment.describe(symbol), environment, ANNOTATION_FQN)
    return _extract


class TestValidDeclarations:

    def test_basic_spec(self, extract, converter_source):
        spec = extract(converter_source(types=("SINGLE", "OPTIONAL")))

        assert spec.name == "duration"
        assert spec.converter_name == "DurationConverter"
        assert spec.value_type.render() == "DateTimePeriod"
        assert spec.variants == {VariantKind.SINGLE, VariantKind.OPTIONAL}
        assert spec.unsupported_variants == frozenset()
        assert spec.extra_imports == ()
        assert not spec.has_choice

    def test_duplicate_types_collapse(self, extract, converter_source):
        spec = extract(converter_source(types=("SINGLE", "SINGLE", "CHOICE")))

        assert spec.variants == {VariantKind.SINGLE, VariantKind.CHOICE}
        assert spec.has_choice

    def test_unknown_type_names_are_kept_as_unsupported(self, extract, converter_source):
        spec = extract(converter_source(types=("SINGLE", "COALESCING")))

        assert spec.variants == {VariantKind.SINGLE}
        assert spec.unsupported_variants == {"COALESCING"}

    def test_extra_imports_keep_their_order(self, extract, converter_source):
        spec = extract(converter_source(imports=["z.Last", "a.First"]))
        assert spec.extra_imports == ("z.Last", "a.First")

    def test_single_type_without_array(self, extract, converter_source):
        source = converter_source(types=None).replace(
            '    name = "duration",', '    name = "duration",\n    types = ConverterType.LIST,'
        )
        assert extract(source).variants == {VariantKind.LIST}


class TestMissingArguments:

    def test_missing_name(self, extract, converter_source):
        with pytest.raises(MissingRequiredArgument) as e:
            extract(converter_source(name=None))
        assert e.value.argument == "name"
        assert e.value.declaration == "com.example.converters.DurationConverter"
        assert e.value.location.startswith("Converter.kt:")

    def test_empty_name(self, extract, converter_source):
        with pytest.raises(MissingRequiredArgument):
            extract(converter_source(name='""'))

    def test_missing_types(self, extract, converter_source):
        with pytest.raises(MissingRequiredArgument) as e:
            extract(converter_source(types=None))
        assert e.value.argument == "types"

    def test_empty_types(self, extract, converter_source):
        with pytest.raises(MissingRequiredArgument) as e:
            extract(converter_source(types=()))
        assert e.value.argument == "types"


class TestInvalidArguments:

    def test_name_must_be_a_string(self, extract, converter_source):
        with pytest.raises(InvalidArgument) as e:
            extract(converter_source(name="42"))
        assert e.value.argument == "name"

    def test_types_must_be_enum_entries(self, extract, converter_source):
        source = converter_source().replace("ConverterType.SINGLE", '"SINGLE"')
        with pytest.raises(InvalidArgument) as e:
            extract(source)
        assert e.value.argument == "types"

    def test_imports_must_be_strings(self, extract, converter_source):
        source = converter_source(imports=["ok.Import"]).replace('"ok.Import"', "42")
        with pytest.raises(InvalidArgument) as e:
            extract(source)
        assert e.value.argument == "imports"

    def test_empty_import_string(self, extract, converter_source):
        with pytest.raises(InvalidArgument):
            extract(converter_source(imports=[""]))

    def test_unknown_argument(self, extract, converter_source):
        source = converter_source().replace("@Converter(", "@Converter(\n    priority = 1,")
        with pytest.raises(InvalidArgument) as e:
            extract(source)
        assert e.value.argument == "priority"

    def test_name_given_by_position_and_by_name(self, extract, converter_source):
        source = converter_source(name='"second"').replace("@Converter(", "@Converter(\n    \"first\",")
        with pytest.raises(InvalidArgument) as e:
            extract(source)
        assert e.value.argument == "name"
        assert "both by position and by name" in str(e.value)


class TestValueType:

    def test_no_supertype(self, extract, converter_source):
        with pytest.raises(NoSupertype):
            extract(converter_source(supertype=None))

    def test_type_variable(self, extract, converter_source):
        with pytest.raises(UnresolvedValueType) as e:
            extract(converter_source(type_parameters="<T>", supertype="SingleConverter<T>"))
        assert "'T'" in str(e.value)

    def test_star_projection_inside_value_type(self, extract, converter_source):
        with pytest.raises(UnresolvedValueType):
            extract(converter_source(supertype="SingleConverter<List<*>>"))

    def test_nullable_generic_value_type(self, extract, converter_source):
        spec = extract(converter_source(supertype="SingleConverter<List<DateTimePeriod>?>"))
        assert spec.value_type.render() == "List<DateTimePeriod>?"
