"""
Validation module for converter declaration sources.

Model-wide checks that need the whole file:
- declaration_validators: unique class names, conflicting imports
"""

from converter_dsl.validation.declaration_validators import (
    verify_unique_declarations,
    verify_unique_imports,
)

__all__ = [
    "verify_unique_declarations",
    "verify_unique_imports",
]
