"""
TextX object processors for converter declaration sources.

Object processors run during model construction and reject constructs the
Kotlin compiler would reject before the generator ever sees them.
"""

from textx import get_location, TextXSemanticError


def annotation_obj_processor(annotation):
    """
    Validate the argument list of an annotation usage.

    Rules:
    1) A named argument may only be passed once.
    2) Positional arguments may not follow named ones.
    """
    seen = set()
    named_started = False

    for argument in getattr(annotation, "arguments", []) or []:
        key = getattr(argument, "key", None)

        if not key:
            if named_started:
                raise TextXSemanticError(
                    f"Annotation '@{annotation.type}': positional argument after named arguments.",
                    **get_location(argument),
                )
            continue

        named_started = True
        if key in seen:
            raise TextXSemanticError(
                f"Annotation '@{annotation.type}': argument '{key}' is already passed.",
                **get_location(argument),
            )
        seen.add(key)


def type_parameter_list_obj_processor(type_params):
    """Type parameter names must be unique within one declaration."""
    seen = set()
    for param in getattr(type_params, "parameters", []) or []:
        if param.name in seen:
            raise TextXSemanticError(
                f"Type parameter '{param.name}' is declared twice.",
                **get_location(param),
            )
        seen.add(param.name)


def get_obj_processors():
    """Return object processor configuration for the metamodel."""
    return {
        "Annotation": annotation_obj_processor,
        "TypeParameterList": type_parameter_list_obj_processor,
    }
