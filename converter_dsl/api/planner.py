"""
Variant planning: which builder functions a converter gets.

Plans are ordered by variant name so the generated file does not depend on
the order the annotation listed its types in.
"""

from .converter_spec import PlanEntry, VariantKind
from .errors import IncompatibleVariants
from .gen_logging import get_logger

logger = get_logger(__name__)


def plan_variants(spec) -> list[PlanEntry]:
    """
    Produce the ordered plan for a ConverterSpec.

    Rules:
    1) CHOICE never yields an entry of its own; it marks every other entry.
    2) LIST together with CHOICE is rejected: there are no list choice converters.
    3) Unknown variant names yield a placeholder entry (kind=None).

    Raises:
        IncompatibleVariants: LIST and CHOICE were both requested
    """
    has_choice = spec.has_choice
    declaration = spec.declaration

    if has_choice and VariantKind.LIST in spec.variants:
        raise IncompatibleVariants(
            "Choice converters are incompatible with list converters",
            declaration=declaration.qualified_name,
            argument="types",
            location=declaration.location,
        )

    names = {kind.value: kind for kind in spec.variants}
    for name in spec.unsupported_variants:
        names[name] = None

    entries = []
    for name in sorted(names):
        kind = names[name]
        if kind is VariantKind.CHOICE:
            continue
        if kind is None:
            logger.warning(f"[UNSUPPORTED] {declaration.qualified_name}: converter type '{name}' is not supported")
        entries.append(PlanEntry(variant_name=name, kind=kind, has_choice=has_choice))

    logger.debug(
        f"[PLAN] {declaration.qualified_name}: "
        + (", ".join(e.variant_name + ("+CHOICE" if e.has_choice else "") for e in entries) or "(nothing)")
    )
    return entries
