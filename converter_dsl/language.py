"""
Metamodel and model builders for converter declaration sources.

Declaration sources are written in a small subset of Kotlin (see
grammar/kotlin.tx). This module provides the entry points for parsing and
validating them; cross-object checks live in the validation/ package and
per-object checks in the processors/ package.
"""

from os.path import join, dirname, abspath
from pathlib import Path
from textx import metamodel_from_file, get_children_of_type

from converter_dsl.processors import get_obj_processors
from converter_dsl.validation import (
    verify_unique_declarations,
    verify_unique_imports,
)


# ------------------------------------------------------------------------------
# Constants

THIS_DIR = dirname(abspath(__file__))
GRAMMAR_DIR = join(THIS_DIR, "grammar")
SOURCE_SUFFIXES = (".kt", ".kts")


# ------------------------------------------------------------------------------
# Public model builders

def build_model(model_path: str):
    """Parse & validate a declaration source from a file path."""
    return ConverterMetaModel.model_from_file(str(model_path))


def build_model_str(model_str: str, file_name: str = None):
    """Parse & validate a declaration source from a string."""
    return ConverterMetaModel.model_from_str(model_str, file_name=file_name)


def collect_source_files(paths) -> list[Path]:
    """
    Expand files and directories into a sorted, de-duplicated list of sources.

    Directories are searched recursively for *.kt files. Explicit file paths
    are kept regardless of their suffix.
    """
    found = []
    seen = set()
    for raw in paths:
        path = Path(raw).resolve()
        if path.is_dir():
            candidates = sorted(
                p for p in path.rglob("*") if p.suffix in SOURCE_SUFFIXES and p.is_file()
            )
        elif path.exists():
            candidates = [path]
        else:
            raise FileNotFoundError(f"Source not found: {path}")

        for candidate in candidates:
            if candidate not in seen:
                seen.add(candidate)
                found.append(candidate)
    return found


# ------------------------------------------------------------------------------
# Model element getters

def get_model_declarations(model):
    return get_children_of_type("ClassDeclaration", model)


def get_model_imports(model):
    return list(getattr(model, "imports", []) or [])


def get_model_package(model) -> str:
    return getattr(model, "package", None) or ""


# ------------------------------------------------------------------------------
# Model-wide validation (runs after all objects are constructed)

def model_processor(model, metamodel=None):
    """
    Main model processor - runs after parsing to perform cross-object validation.
    Order matters: declarations -> imports
    """
    verify_unique_declarations(model)
    verify_unique_imports(model)


# ------------------------------------------------------------------------------
# Metamodel creation

def get_metamodel(debug: bool = False):
    """
    Load the textX metamodel from grammar/kotlin.tx.
    Registers object processors and the model processor.
    """
    mm = metamodel_from_file(
        join(GRAMMAR_DIR, "kotlin.tx"),
        autokwd=True,
        auto_init_attributes=True,
        textx_tools_support=True,
        debug=debug,
    )

    # Object processors run during model construction
    mm.register_obj_processors(get_obj_processors())

    # Model processors run after the whole model is built
    mm.register_model_processor(model_processor)

    return mm


# Create the global metamodel instance
ConverterMetaModel = get_metamodel(debug=False)
