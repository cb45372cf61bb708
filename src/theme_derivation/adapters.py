"""Adapters between host colour types and the engine's ``Rgba``.

The derivation code works on ``Rgba`` only. A host toolkit plugs in its own
display colour type by providing an object with ``to_rgba`` and
``from_rgba``; ``derive_theme(..., adapter=...)`` applies it at the boundary.
The Qt adapter lives in ``theme_derivation.qt`` so importing this package
does not pull in PyQt6.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .color_space import Rgba

__all__ = ["ColorAdapter", "RgbaAdapter", "HexColorAdapter"]


@runtime_checkable
class ColorAdapter(Protocol):
    def to_rgba(self, color: Any) -> Rgba: ...

    def from_rgba(self, rgba: Rgba) -> Any: ...


class RgbaAdapter:
    """Identity adapter; rejects anything that is not already ``Rgba``."""

    def to_rgba(self, color: Any) -> Rgba:
        if not isinstance(color, Rgba):
            raise TypeError(f"Expected Rgba, got {type(color).__name__}")
        return color

    def from_rgba(self, rgba: Rgba) -> Rgba:
        return rgba


class HexColorAdapter:
    """Hex strings as used in design token maps (``#rrggbb`` / ``#rrggbbaa``)."""

    def __init__(self, *, include_alpha: bool = True) -> None:
        self.include_alpha = include_alpha

    def to_rgba(self, color: str) -> Rgba:
        return Rgba.from_hex(color)

    def from_rgba(self, rgba: Rgba) -> str:
        return rgba.to_hex(include_alpha=self.include_alpha)
