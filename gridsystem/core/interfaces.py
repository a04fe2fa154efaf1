"""
Core interfaces for collaborators outside the grid system core.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping


class TemplateRenderer(ABC):
    """Abstract base class for the template engine that turns a grid system into CSS."""

    @abstractmethod
    def render(self, template: str, context: Mapping[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template: Template identifier understood by the engine
            context: Read-only data built from a grid system

        Returns:
            Rendered output text
        """
        pass
