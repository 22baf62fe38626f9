"""
Builder-function synthesizers, one per variant kind.

Each synthesizer is a pure function:

    (converter_name, display_name, value_type, has_choice) -> FunctionSpec

`converter_name` is the simple name of the annotated class, `display_name`
the annotation's `name` and `value_type` the rendered Kotlin value type.
The function names and parameter lists produced here are what command
argument classes call, so they must not drift.
"""

from ..builders import FunctionBuilder
from ..converter_spec import VariantKind
from ..errors import IncompatibleVariants
from ..utils import to_capitalized, to_lowered

RECEIVER = "Arguments"


def _nullable(type_name: str) -> str:
    return type_name if type_name.endswith("?") else f"{type_name}?"


def _new_function(name: str) -> FunctionBuilder:
    return (
        FunctionBuilder(name, receiver=RECEIVER)
        .argument("displayName", "String")
        .argument("description", "String")
    )


def _register(builder: FunctionBuilder, constructor: str, combinator: str = None) -> FunctionBuilder:
    """Body shared by every variant: build the converter and register it with arg()."""
    builder.line("arg(")
    builder.line("displayName = displayName,", indent=1)
    builder.line("description = description,", indent=1)
    builder.line("")
    builder.line(f"converter = {constructor}", indent=1)
    if combinator:
        builder.line(f".{combinator}", indent=2)
    return builder.line(")")


def synthesize_single(converter_name, display_name, value_type, has_choice):
    if not has_choice:
        builder = _new_function(to_lowered(display_name)).doc(
            f"Creates a {display_name} converter, for single arguments.",
            see=converter_name,
        )
        constructor = f"{converter_name}(validator)"
    else:
        builder = _new_function(f"{to_lowered(display_name)}Choice").doc(
            f"Creates a {display_name} choice converter, for a defined set of single arguments.",
            see=converter_name,
        )
        builder.argument("choices", f"Map<String, {value_type}>")
        constructor = f"{converter_name}(choices, validator)"

    builder.argument("validator", f"Validator<{value_type}>", "null")
    builder.returns(f"SingleConverter<{value_type}>")
    return _register(builder, constructor).build()


def synthesize_optional(converter_name, display_name, value_type, has_choice):
    optional_type = _nullable(value_type)

    if not has_choice:
        builder = _new_function(f"optional{to_capitalized(display_name)}").doc(
            f"Creates an optional {display_name} converter, for single arguments.",
            params=[("required", "Whether command parsing should fail if an invalid argument is provided.")],
            see=converter_name,
        )
        builder.argument("required", "Boolean", "false")
        constructor = f"{converter_name}()"
        combinator = "toOptional(outputError = required, nestedValidator = validator)"
    else:
        builder = _new_function(f"optional{to_capitalized(display_name)}Choice").doc(
            f"Creates an optional {display_name} choice converter, for a defined set of single arguments.",
            see=converter_name,
        )
        builder.argument("choices", f"Map<String, {value_type}>")
        constructor = f"{converter_name}(choices)"
        combinator = "toOptional(nestedValidator = validator)"

    builder.argument("validator", f"Validator<{optional_type}>", "null")
    builder.returns(f"OptionalConverter<{optional_type}>")
    return _register(builder, constructor, combinator).build()


def synthesize_defaulting(converter_name, display_name, value_type, has_choice):
    default_doc = [("defaultValue", "Default value to use if no argument was provided.")]

    if not has_choice:
        builder = _new_function(f"defaulting{to_capitalized(display_name)}").doc(
            f"Creates a defaulting {display_name} converter, for single arguments.",
            params=default_doc,
            see=converter_name,
        )
        builder.argument("defaultValue", value_type)
        constructor = f"{converter_name}()"
    else:
        builder = _new_function(f"defaulting{to_capitalized(display_name)}Choice").doc(
            f"Creates a defaulting {display_name} choice converter, for a defined set of single arguments.",
            params=default_doc,
            see=converter_name,
        )
        builder.argument("defaultValue", value_type)
        builder.argument("choices", f"Map<String, {value_type}>")
        constructor = f"{converter_name}(choices)"

    builder.argument("validator", f"Validator<{value_type}>", "null")
    builder.returns(f"DefaultingConverter<{value_type}>")
    return _register(builder, constructor, "toDefaulting(defaultValue, nestedValidator = validator)").build()


def synthesize_list(converter_name, display_name, value_type, has_choice):
    if has_choice:
        raise IncompatibleVariants(
            "Choice converters are incompatible with list converters", argument="types"
        )

    builder = _new_function(f"{to_lowered(display_name)}List").doc(
        f"Creates a {display_name} converter, for lists of arguments.",
        params=[("required", "Whether command parsing should fail if no arguments could be converted.")],
        see=converter_name,
    )
    builder.argument("required", "Boolean", "true")
    builder.argument("validator", f"Validator<List<{value_type}>>", "null")
    builder.returns(f"MultiConverter<{value_type}>")
    return _register(builder, f"{converter_name}()", "toMulti(required, nestedValidator = validator)").build()


SYNTHESIZERS = {
    VariantKind.SINGLE: synthesize_single,
    VariantKind.OPTIONAL: synthesize_optional,
    VariantKind.DEFAULTING: synthesize_defaulting,
    VariantKind.LIST: synthesize_list,
}


def synthesize(entry, spec):
    """
    Synthesize the function for one plan entry.

    Returns None for placeholder entries (unsupported variant names).
    """
    if entry.kind is None:
        return None

    synthesizer = SYNTHESIZERS.get(entry.kind)
    if synthesizer is None:
        raise ValueError(f"No synthesizer for variant {entry.kind.value}")

    return synthesizer(
        spec.converter_name,
        spec.name,
        spec.value_type.render(),
        entry.has_choice,
    )
