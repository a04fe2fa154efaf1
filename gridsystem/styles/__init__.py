"""
Style object module exports.
"""

from gridsystem.styles.object_map import EMULATE_KEY, HIDE_KEY, ObjectMap, grid_variables
from gridsystem.styles.style_object import StyleObject

__all__ = [
    "StyleObject",
    "ObjectMap",
    "EMULATE_KEY",
    "HIDE_KEY",
    "grid_variables",
]
