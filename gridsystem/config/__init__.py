"""
Configuration module exports.
"""

from gridsystem.config.definitions import (
    DeclarationSet,
    GridDefinition,
    GridSystemDefinition,
    ObjectDefinition,
    ObjectKind,
)
from gridsystem.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "GridSystemDefinition",
    "GridDefinition",
    "ObjectDefinition",
    "ObjectKind",
    "DeclarationSet",
]
