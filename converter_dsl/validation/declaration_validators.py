"""
Declaration-level validation for converter sources.
"""

from textx import get_children_of_type, get_location, TextXSemanticError


def import_binding(imp):
    """
    Return the simple name an import binds, or None for wildcard imports.

    `import a.b.C` binds "C", `import a.b.C as D` binds "D".
    """
    path = imp.path
    if path.endswith(".*"):
        return None
    return getattr(imp, "alias", None) or path.rsplit(".", 1)[-1]


def verify_unique_declarations(model):
    """Ensure class names are unique within a source file."""
    seen = set()
    for decl in get_children_of_type("ClassDeclaration", model):
        if decl.name in seen:
            raise TextXSemanticError(
                f"Redeclaration: class '{decl.name}' already exists in this file.",
                **get_location(decl),
            )
        seen.add(decl.name)


def verify_unique_imports(model):
    """
    Reject imports that bind the same simple name to different paths.

    Repeating the exact same import is harmless and allowed.
    """
    bindings = {}
    for imp in getattr(model, "imports", []) or []:
        bound = import_binding(imp)
        if bound is None:
            continue

        previous = bindings.get(bound)
        if previous is not None and previous != imp.path:
            raise TextXSemanticError(
                f"Conflicting import: '{bound}' is imported from both '{previous}' and '{imp.path}'.",
                **get_location(imp),
            )
        bindings[bound] = imp.path
