"""
Processors module for converter declaration sources.

This module contains textX object processors that run during model
construction to validate individual model elements.
"""

from converter_dsl.processors.object_processors import (
    get_obj_processors,
    annotation_obj_processor,
    type_parameter_list_obj_processor,
)

__all__ = [
    "get_obj_processors",
    "annotation_obj_processor",
    "type_parameter_list_obj_processor",
]
