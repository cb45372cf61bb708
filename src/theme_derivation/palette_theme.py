"""Ramp based theme building.

``build_palette_theme`` is the lookup counterpart of ``derive_theme``: instead
of contrast searches it reads every surface and text colour off lightness ramps
(``palette_steps``) and layers translucent state overlays with ``over``. It is
fast and never fails, but gives no contrast guarantee; run
``audit_theme_contrast`` on the result when that matters.

Ramps used:
    surface ramp  steps(container base), 100 entries
    neutral ramp  steps(neutral tint or black), 100 entries, small widget fills
    control ramp  steps(neutral tint or black), 11 entries, reversed for light
                  themes so index 0 is always the colour nearest the text
    text ramp     steps(text tint), optional, replaces the surface ramp for text
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .adapters import ColorAdapter, RgbaAdapter
from .color_space import BLACK, Rgba, over, rgb_to_lch
from .model import Component, Container, Selection, Theme
from .palette_steps import (
    color_index,
    get_small_widget_color,
    get_surface_color,
    get_text,
    steps,
)
from .settings import DISABLED_ALPHA, NEAR_WHITE_INDEX, RAMP_LENGTH, SMALL_WIDGET_STEPS

_logger = logging.getLogger(__name__)

__all__ = ["build_palette_theme"]

CONTROL_RAMP_LENGTH = 11

# State overlay opacities
HOVER_OVERLAY_ALPHA = 0.1
PRESSED_OVERLAY_ALPHA = 0.2
BUTTON_HOVER_ALPHA = 0.2
BUTTON_PRESSED_ALPHA = 0.5
ON_DIVIDER_ALPHA = 0.2

# Ramp steps from a container base to its component surface
_BACKGROUND_COMPONENT_STEPS = 8
_PRIMARY_STEPS, _PRIMARY_COMPONENT_STEPS = 5, 6
_SECONDARY_STEPS, _SECONDARY_COMPONENT_STEPS = 10, 3


def _half_alpha(color: Rgba) -> Rgba:
    return color.with_alpha(color.a * 0.5)


def _layer(overlay: Rgba, base: Rgba) -> Rgba:
    # Fully transparent bases (icon buttons) show the bare overlay
    if base.a < 0.001:
        return overlay
    return over(overlay, base)


def _surface_component(
    base: Rgba, accent: Rgba, on: Rgba, hovered: Rgba, pressed: Rgba, border: Rgba
) -> Component:
    return Component(
        base=base,
        hover=_layer(hovered, base),
        pressed=_layer(pressed, base),
        selected=_layer(hovered, base),
        selected_text=accent,
        focus=accent,
        divider=on.with_alpha(ON_DIVIDER_ALPHA),
        on=on,
        disabled=over(_half_alpha(base), base),
        on_disabled=over(on.with_alpha(DISABLED_ALPHA), base),
        border=border,
        disabled_border=_half_alpha(border),
    )


def _colored_component(
    base: Rgba, neutral: Rgba, accent: Rgba, hovered: Rgba, pressed: Rgba
) -> Component:
    """Filled widget (accent, destructive, ...) with neutral text on top."""
    return Component(
        base=base,
        hover=over(hovered, base),
        pressed=over(pressed, base),
        selected=over(hovered, base),
        selected_text=accent,
        focus=accent,
        divider=neutral,
        on=neutral,
        disabled=over(_half_alpha(base), base),
        on_disabled=over(neutral.with_alpha(DISABLED_ALPHA), base),
        border=base,
        disabled_border=_half_alpha(base),
    )


class _Ramps:
    def __init__(
        self, is_dark: bool, neutral_tint: Optional[Rgba], text_tint: Optional[Rgba]
    ) -> None:
        tint = neutral_tint if neutral_tint is not None else BLACK
        self.is_dark = is_dark
        self.control: List[Rgba] = steps(tint, CONTROL_RAMP_LENGTH)
        if not is_dark:
            self.control.reverse()
        self.neutral = steps(tint, RAMP_LENGTH)
        self.text: Optional[Sequence[Rgba]] = (
            steps(text_tint, RAMP_LENGTH) if text_tint is not None else None
        )

    def text_for(self, index: int, ramp: Sequence[Rgba]) -> Rgba:
        return get_text(index, ramp, self.control[8], self.text)

    def overlays(self, base_index: int) -> tuple[Rgba, Rgba]:
        hovered = self.control[10] if base_index < NEAR_WHITE_INDEX else self.control[0]
        return (
            hovered.with_alpha(HOVER_OVERLAY_ALPHA),
            hovered.with_alpha(PRESSED_OVERLAY_ALPHA),
        )

    def container(
        self, base: Rgba, component_steps: int, component_fallback: Rgba, accent: Rgba
    ) -> Container:
        ramp = steps(base, RAMP_LENGTH)
        base_index = color_index(base, RAMP_LENGTH)
        component_base = get_surface_color(
            base_index, component_steps, ramp, self.is_dark, component_fallback
        )
        hovered, pressed = self.overlays(base_index)
        on_component = self.text_for(color_index(component_base, RAMP_LENGTH), ramp)
        on = self.text_for(base_index, ramp)
        return Container(
            base=base,
            divider=over(on.with_alpha(ON_DIVIDER_ALPHA), base),
            on=on,
            component=_surface_component(
                component_base, accent, on_component, hovered, pressed, self.control[8]
            ),
            small_widget=get_small_widget_color(
                base_index, SMALL_WIDGET_STEPS, self.neutral, self.control[6]
            ),
        )


def build_palette_theme(
    background,
    accent,
    destructive,
    warning,
    success,
    *,
    primary_container=None,
    secondary_container=None,
    neutral_tint=None,
    text_tint=None,
    is_dark: Optional[bool] = None,
    adapter: Optional[ColorAdapter] = None,
    name: str = "palette",
) -> Theme:
    """Build a theme from seed colours by ramp lookups.

    Parameters
    ----------
    background, accent, destructive, warning, success
        Seed colours in the ``adapter``'s colour type.
    primary_container, secondary_container : optional
        Container backgrounds; stepped off the background ramp when omitted.
    neutral_tint : optional
        Tint of the neutral and control ramps; pure grey when omitted.
    text_tint : optional
        Tint of text colours; text comes from each surface's own ramp when
        omitted.
    is_dark : bool, optional
        Defaults to the background's LCH lightness being below 50.
    """
    adapter = adapter or RgbaAdapter()

    def seed(color):
        return None if color is None else adapter.to_rgba(color)

    bg = adapter.to_rgba(background)
    accent_c = adapter.to_rgba(accent)
    if is_dark is None:
        is_dark = rgb_to_lch(bg).l < 50.0
    ramps = _Ramps(is_dark, seed(neutral_tint), seed(text_tint))
    control = ramps.control

    bg_ramp = steps(bg, RAMP_LENGTH)
    bg_index = color_index(bg, RAMP_LENGTH)
    primary_bg = seed(primary_container)
    if primary_bg is None:
        primary_bg = get_surface_color(bg_index, _PRIMARY_STEPS, bg_ramp, is_dark, control[1])
    secondary_bg = seed(secondary_container)
    if secondary_bg is None:
        secondary_bg = get_surface_color(
            bg_index, _SECONDARY_STEPS, bg_ramp, is_dark, control[2]
        )

    button_hovered = control[5].with_alpha(BUTTON_HOVER_ALPHA)
    button_pressed = control[2].with_alpha(BUTTON_PRESSED_ALPHA)

    def colored(color) -> Component:
        return _colored_component(
            adapter.to_rgba(color), control[0], accent_c, button_hovered, button_pressed
        )

    theme = Theme(
        background=ramps.container(bg, _BACKGROUND_COMPONENT_STEPS, control[2], accent_c),
        primary=ramps.container(primary_bg, _PRIMARY_COMPONENT_STEPS, control[3], accent_c),
        secondary=ramps.container(
            secondary_bg, _SECONDARY_COMPONENT_STEPS, control[4], accent_c
        ),
        accent=colored(accent),
        destructive=colored(destructive),
        warning=colored(warning),
        success=colored(success),
        palette=Selection(
            background=bg,
            primary_container=primary_bg,
            secondary_container=secondary_bg,
            accent=accent_c,
            destructive=adapter.to_rgba(destructive),
            warning=adapter.to_rgba(warning),
            success=adapter.to_rgba(success),
        ),
        is_dark=is_dark,
        name=name,
    )
    _logger.info("Built palette theme %r (dark=%s)", name, is_dark)
    return theme.map_colors(adapter.from_rgba)
