"""
Core module exports.
"""

from gridsystem.core.expressions import VARIABLE_SIGIL, ExpressionEvaluator
from gridsystem.core.interfaces import TemplateRenderer
from gridsystem.core.types import (
    OutputConfig,
    RangeCriteria,
    ScalingInterval,
    ScalingMethod,
    is_number,
    normalize_number,
    upper_bound,
)

__all__ = [
    # Interfaces
    "TemplateRenderer",
    # Expressions
    "VARIABLE_SIGIL",
    "ExpressionEvaluator",
    # Types
    "ScalingMethod",
    "ScalingInterval",
    "RangeCriteria",
    "OutputConfig",
    "is_number",
    "normalize_number",
    "upper_bound",
]
