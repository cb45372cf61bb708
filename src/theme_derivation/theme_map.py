"""Flattened semantic colour maps for derived themes.

Design token consumers work with ``{"group.role": "#rrggbbaa"}`` maps rather
than nested records. ``flatten_theme`` produces such a map and
``audit_theme_contrast`` checks the text-on-surface pairs of a theme against
a WCAG threshold.

Key layout:
    background.base, background.divider, background.on, background.small_widget,
    background.component.<state>, primary.*, secondary.*,
    accent.<state>, destructive.<state>, warning.<state>, success.<state>
"""

from __future__ import annotations

from dataclasses import fields
from typing import Dict, List, Optional

from .adapters import ColorAdapter
from .color_space import Rgba, contrast_ratio
from .model import Component, Theme

__all__ = ["flatten_theme", "audit_theme_contrast"]


def _component_entries(prefix: str, component: Component) -> Dict[str, str]:
    return {f"{prefix}.{f.name}": getattr(component, f.name).to_hex() for f in fields(component)}


def _as_rgba(theme: Theme, adapter: Optional[ColorAdapter]) -> Theme:
    return theme if adapter is None else theme.map_colors(adapter.to_rgba)


def flatten_theme(theme: Theme, adapter: Optional[ColorAdapter] = None) -> Dict[str, str]:
    """Map every colour of a theme to a dotted semantic key.

    Pass the ``adapter`` the theme was derived with when its colours are not
    ``Rgba``.
    """
    theme = _as_rgba(theme, adapter)
    out: Dict[str, str] = {}
    for name, container in theme.containers().items():
        out[f"{name}.base"] = container.base.to_hex()
        out[f"{name}.divider"] = container.divider.to_hex()
        out[f"{name}.on"] = container.on.to_hex()
        out[f"{name}.small_widget"] = container.small_widget.to_hex()
        out.update(_component_entries(f"{name}.component", container.component))
    for name, component in theme.components().items():
        out.update(_component_entries(name, component))
    return out


def _check(label: str, fg: Rgba, bg: Rgba, threshold: float, failures: List[str]) -> None:
    ratio = contrast_ratio(fg, bg)
    if ratio < threshold:
        failures.append(
            f"[contrast-fail] {label}: ratio={ratio:.2f} < {threshold} "
            f"(fg={fg.to_hex()} bg={bg.to_hex()})"
        )


def audit_theme_contrast(
    theme: Theme, threshold: float = 4.5, adapter: Optional[ColorAdapter] = None
) -> List[str]:
    """Return failure messages for text that misses ``threshold`` (empty if all pass)."""
    theme = _as_rgba(theme, adapter)
    failures: List[str] = []
    for name, container in theme.containers().items():
        _check(f"{name}.on on {name}.base", container.on, container.base, threshold, failures)
        comp = container.component
        _check(f"{name}.component.on on pressed", comp.on, comp.pressed, threshold, failures)
        _check(
            f"{name}.component.selected_text on selected",
            comp.selected_text,
            comp.selected,
            threshold,
            failures,
        )
    for name, comp in theme.components().items():
        _check(f"{name}.on on pressed", comp.on, comp.pressed, threshold, failures)
        _check(f"{name}.selected_text on selected", comp.selected_text, comp.selected, threshold, failures)
    return failures
