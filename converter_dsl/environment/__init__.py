"""Host environment: parsed declaration sources behind a read-only query interface."""

from .symbols import (
    AnnotationCall,
    ClassReference,
    ConverterDescriptor,
    DeclarationSymbol,
    EnumReference,
    TypeRef,
)
from .resolver import AnnotationArgumentError, SourceEnvironment, SymbolEnvironment

__all__ = [
    "AnnotationArgumentError",
    "AnnotationCall",
    "ClassReference",
    "ConverterDescriptor",
    "DeclarationSymbol",
    "EnumReference",
    "TypeRef",
    "SourceEnvironment",
    "SymbolEnvironment",
]
