"""Extraction of a ConverterSpec from an annotated declaration."""

from converter_dsl.environment import AnnotationArgumentError, EnumReference

from ..converter_spec import ConverterSpec, VariantKind
from ..errors import (
    InvalidArgument,
    MissingRequiredArgument,
    NoSupertype,
    UnresolvedValueType,
)
from ..gen_logging import get_logger

logger = get_logger(__name__)

KNOWN_ARGUMENTS = ("name", "types", "imports")


def extract_spec(descriptor, environment, annotation: str) -> ConverterSpec:
    """
    Build a ConverterSpec from the declaration's annotation and first supertype.

    Args:
        descriptor: a valid ConverterDescriptor from the scanner
        environment: the host environment the descriptor came from
        annotation: fully-qualified name of the converter annotation

    Raises:
        MissingRequiredArgument: `name` or `types` missing or empty
        InvalidArgument: an argument has the wrong shape, is unknown, or is
            given both by position and by name
        NoSupertype: no supertype with a type argument
        UnresolvedValueType: the value type is a type variable or `*`
    """
    context = dict(declaration=descriptor.qualified_name, location=descriptor.location)
    try:
        arguments = environment.read_annotation_arguments(descriptor, annotation)
    except AnnotationArgumentError as e:
        raise InvalidArgument(str(e), argument=str(e.argument), **context) from e
    logger.debug(f"[SCAN] {descriptor.qualified_name} arguments: {arguments}")

    for key in arguments:
        if key not in KNOWN_ARGUMENTS:
            raise InvalidArgument("Unexpected annotation argument", argument=str(key), **context)

    name = _read_name(arguments, context)
    variants, unsupported = _read_types(arguments, context)
    extra_imports = _read_imports(arguments, context)
    value_type = _read_value_type(descriptor, environment, context)

    return ConverterSpec(
        name=name,
        value_type=value_type,
        variants=frozenset(variants),
        unsupported_variants=frozenset(unsupported),
        extra_imports=extra_imports,
        declaration=descriptor,
    )


def _read_name(arguments, context) -> str:
    if "name" not in arguments:
        raise MissingRequiredArgument("Converter annotation requires a name", argument="name", **context)

    name = arguments["name"]
    if not isinstance(name, str):
        raise InvalidArgument("Converter name must be a string", argument="name", **context)
    if not name:
        raise MissingRequiredArgument("Converter name must not be empty", argument="name", **context)
    return name


def _read_types(arguments, context):
    if "types" not in arguments:
        raise MissingRequiredArgument("Converter annotation requires types", argument="types", **context)

    types = arguments["types"]
    if isinstance(types, EnumReference):
        # Kotlin allows a single vararg-style value
        types = [types]
    if not isinstance(types, list):
        raise InvalidArgument("Converter types must be an array of ConverterType entries", argument="types", **context)
    if not types:
        raise MissingRequiredArgument("Converter types must not be empty", argument="types", **context)

    variants = set()
    unsupported = set()
    for item in types:
        if not isinstance(item, EnumReference):
            raise InvalidArgument(
                f"Converter type {item!r} is not a ConverterType entry", argument="types", **context
            )
        kind = VariantKind.parse(item.entry)
        if kind is None:
            unsupported.add(item.entry)
        else:
            variants.add(kind)
    return variants, unsupported


def _read_imports(arguments, context) -> tuple:
    imports = arguments.get("imports")
    if imports is None:
        return ()
    if isinstance(imports, str):
        imports = [imports]
    if not isinstance(imports, list) or not all(isinstance(i, str) and i for i in imports):
        raise InvalidArgument("Converter imports must be an array of non-empty strings", argument="imports", **context)
    return tuple(imports)


def _read_value_type(descriptor, environment, context):
    value_type = environment.resolve_first_supertype_value_type(descriptor)
    if value_type is None:
        raise NoSupertype(
            "Converter must declare its value type as the first type argument of its first supertype",
            **context,
        )
    if not value_type.is_resolved:
        raise UnresolvedValueType(
            f"Converter value type '{value_type.render()}' is not a concrete type",
            **context,
        )
    return value_type
