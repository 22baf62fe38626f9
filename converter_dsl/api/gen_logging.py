"""
Logging for the converter generation pipeline.

Usage in generator modules:
    from converter_dsl.api.gen_logging import get_logger
    logger = get_logger(__name__)

Every logger lives under "cdsl.gen". Output is shaped like compiler
diagnostics so it reads naturally next to a Kotlin build log:

    w: [DEFERRED] Unable to validate com.example.FooConverter (...)
    e: [FAILED] Foo.kt:8:1: com.example.FooConverter: ...
    [GENERATED] com.example.FooConverterFunctions -> out/com/example/FooConverterFunctions.kt
"""

import logging
import sys

_LOGGER_NAME = "cdsl.gen"

# Same severity prefixes kotlinc and KSP put on their messages
_SEVERITY_PREFIXES = {
    logging.DEBUG: "v: ",
    logging.WARNING: "w: ",
    logging.ERROR: "e: ",
    logging.CRITICAL: "e: ",
}


def get_logger(name: str = None) -> logging.Logger:
    """Return the cdsl.gen logger for a module ("converter_dsl.api.planner" -> "cdsl.gen.planner")."""
    if name is None or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    short = name.rsplit(".", 1)[-1]
    return logging.getLogger(f"{_LOGGER_NAME}.{short}")


def configure_gen_logging(verbose: bool = False, quiet: bool = False, stream=None) -> logging.Handler:
    """
    Route the cdsl.gen hierarchy to a single diagnostics handler.

    Levels:
        --verbose / -v  -> DEBUG   (arguments, plans, every synthesized signature)
        (default)       -> INFO    (one line per written artifact + summary)
        --quiet / -q    -> WARNING (deferred, unsupported, failed, skipped)

    Calling it again replaces the handler installed by the previous call
    and binds the new one to the current stderr (or `stream`).

    Returns:
        The handler in use.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    root_logger = logging.getLogger(_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.propagate = False

    # The previous stream may already be closed (e.g. a finished CLI run)
    for existing in list(root_logger.handlers):
        if isinstance(existing.formatter, _DiagnosticFormatter):
            root_logger.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_DiagnosticFormatter())
    root_logger.addHandler(handler)
    return handler


class _DiagnosticFormatter(logging.Formatter):
    """Message as-is, behind a compiler-style severity prefix (none for INFO)."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return _SEVERITY_PREFIXES.get(record.levelno, "") + message
