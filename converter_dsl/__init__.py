"""Converter DSL: generates typed argument builder functions for annotated converters."""

__version__ = "0.1.0"
