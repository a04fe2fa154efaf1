"""
Styleable entities identified by a selector.
"""

from typing import Any, Dict, Mapping, Optional


class StyleObject:
    """A selector plus declarations that apply at every breakpoint."""

    def __init__(
        self, selector: str, base_declarations: Optional[Mapping[str, Any]] = None
    ) -> None:
        self._selector = str(selector).strip()
        self._base_declarations: Dict[str, Any] = dict(base_declarations or {})

    @property
    def selector(self) -> str:
        return self._selector

    @property
    def base_declarations(self) -> Dict[str, Any]:
        return dict(self._base_declarations)

    def set_base_declarations(self, declarations: Mapping[str, Any]) -> None:
        """Replace the base declarations as a whole."""
        self._base_declarations = dict(declarations)

    def __repr__(self) -> str:
        return f"StyleObject({self._selector!r})"
