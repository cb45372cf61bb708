"""PyQt6 ``QColor`` adapter.

Lets a Qt application feed ``QColor`` seeds straight into ``derive_theme``
and receive a theme of ``QColor`` values back::

    result = derive_theme(selection_of_qcolors, adapter=QColorAdapter())
"""

from __future__ import annotations

from PyQt6.QtGui import QColor

from .color_space import Rgba

__all__ = ["QColorAdapter"]


class QColorAdapter:
    def to_rgba(self, color: QColor) -> Rgba:
        if not isinstance(color, QColor) or not color.isValid():
            raise ValueError(f"Invalid QColor: {color!r}")
        return Rgba(color.redF(), color.greenF(), color.blueF(), color.alphaF())

    def from_rgba(self, rgba: Rgba) -> QColor:
        c = rgba.clamped()
        return QColor.fromRgbF(c.r, c.g, c.b, c.a)
