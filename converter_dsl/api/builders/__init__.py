"""Structured builders for generated source."""

from .function_builder import DocComment, FunctionBuilder, FunctionSpec, Parameter, INDENT

__all__ = [
    "DocComment",
    "FunctionBuilder",
    "FunctionSpec",
    "Parameter",
    "INDENT",
]
