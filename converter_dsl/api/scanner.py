"""Discovery of annotated converter declarations."""

from .gen_logging import get_logger

logger = get_logger(__name__)


def scan(environment, annotation: str):
    """
    Partition the declarations carrying `annotation` into valid and deferred.

    A declaration is valid when the environment can resolve every type it
    mentions in this pass. Deferred symbols are reported and handed back so
    the caller can retry them once more sources are available.

    Returns:
        (valid descriptors, deferred symbols), both in discovery order
    """
    valid = []
    deferred = []

    for symbol in environment.symbols_with_annotation(annotation):
        missing = environment.unresolved_types(symbol)
        if missing:
            logger.warning(
                f"[DEFERRED] Unable to validate {symbol.qualified_name} "
                f"({symbol.location}): unresolved {', '.join(missing)}"
            )
            deferred.append(symbol)
            continue

        valid.append(environment.describe(symbol))

    logger.debug(f"[SCAN] {len(valid)} valid, {len(deferred)} deferred declaration(s)")
    return valid, deferred
