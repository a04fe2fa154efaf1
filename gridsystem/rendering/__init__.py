"""
Rendering module exports.
"""

from gridsystem.rendering.context import (
    HIDDEN_DECLARATIONS,
    LAST_COL_DECLARATIONS,
    build_template_context,
)
from gridsystem.rendering.controller import GridController

__all__ = [
    "build_template_context",
    "GridController",
    "HIDDEN_DECLARATIONS",
    "LAST_COL_DECLARATIONS",
]
