"""Theme derivation tree.

Builds a full ``Theme`` from a ``Selection`` of seed colours and a set of
``ThemeConstraints``::

    derive_theme
     ├─ derive_container(Background | Primary | Secondary)
     │    ├─ divider, text
     │    └─ derive_component(elevated component colour)
     └─ derive_component(accent | destructive | warning | success)

Every level returns a ``Derivation``: the best-effort value plus the errors
met on the way. Callers merge child errors into their own list, so a failed
contrast target never aborts the tree; it only adds a diagnostic.

Component state rules (hover, pressed) are fixed lightness offsets rather
than contrast searches. ``selected`` equals ``base`` and ``focus`` equals
``selected``.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .adapters import ColorAdapter, RgbaAdapter
from .color_picker import DEFAULT_PICKER, ColorPicker
from .color_space import Rgba, rgb_to_lch
from .errors import DerivationStepError, ThemeDerivationError
from .gamut import nearest_in_gamut
from .model import (
    Component,
    Container,
    ContainerType,
    Derivation,
    Selection,
    Theme,
    ThemeConstraints,
)
from .palette_steps import color_index, get_small_widget_color, steps
from .settings import DISABLED_ALPHA, RAMP_LENGTH, SMALL_WIDGET_STEPS, STATE_LIGHTNESS_STEP

_logger = logging.getLogger(__name__)

__all__ = ["derive_theme", "derive_container", "derive_component"]


def _shift(color: Rgba, lighten: bool) -> Rgba:
    lch = rgb_to_lch(color)
    lch = lch.lighten(STATE_LIGHTNESS_STEP) if lighten else lch.darken(STATE_LIGHTNESS_STEP)
    return nearest_in_gamut(lch)


def derive_component(
    default: Rgba,
    constraints: ThemeConstraints,
    *,
    picker: ColorPicker = DEFAULT_PICKER,
) -> Derivation[Component]:
    errors: List[ThemeDerivationError] = []
    lighten = constraints.lighten

    hover = _shift(default, lighten)
    pressed = _shift(hover, lighten)
    selected = default

    divider, err = picker.pick_graphic(
        pressed, constraints.divider_contrast_ratio, constraints.divider_gray_scale, lighten
    )
    if err is not None:
        errors.append(err)

    text, err = picker.pick_text(
        pressed, True, None, contrast=constraints.text_contrast_ratio
    )
    if err is not None:
        errors.append(err)

    selected_text, err = picker.pick_text(
        selected, True, None, contrast=constraints.text_contrast_ratio
    )
    if err is not None:
        errors.append(err)

    component = Component(
        base=default,
        hover=hover,
        pressed=pressed,
        selected=selected,
        selected_text=selected_text,
        focus=selected,
        divider=divider,
        on=text,
        disabled=default.with_alpha(DISABLED_ALPHA),
        on_disabled=text.with_alpha(DISABLED_ALPHA),
        border=default,
        disabled_border=default.with_alpha(default.a * 0.5),
    )
    return Derivation(component, errors)


def derive_container(
    container_type: ContainerType,
    base: Rgba,
    constraints: ThemeConstraints,
    *,
    picker: ColorPicker = DEFAULT_PICKER,
) -> Derivation[Container]:
    errors: List[ThemeDerivationError] = []

    def record(field_name: str, err: Optional[ThemeDerivationError]) -> None:
        if err is not None:
            errors.append(
                DerivationStepError(
                    f'{container_type} => "{field_name}" failed: {err}', cause=err
                )
            )

    divider, err = picker.pick_graphic(
        base,
        constraints.divider_contrast_ratio,
        constraints.divider_gray_scale,
        constraints.lighten,
    )
    record("container divider", err)

    text, err = picker.pick_text(base, True, None, contrast=constraints.text_contrast_ratio)
    record("container text", err)

    component_default, err = picker.pick_graphic(
        base, constraints.elevated_contrast_ratio, False, constraints.lighten
    )
    record("container component", err)

    component = derive_component(component_default, constraints, picker=picker)
    for sub in component.errors:
        record("container component derivation", sub)

    small_widget = get_small_widget_color(
        color_index(base, RAMP_LENGTH), SMALL_WIDGET_STEPS, steps(base), component_default
    )

    return Derivation(
        Container(
            base=base,
            divider=divider,
            on=text,
            component=component.derived,
            small_widget=small_widget,
        ),
        errors,
    )


def derive_theme(
    selection: Selection,
    constraints: Optional[ThemeConstraints] = None,
    *,
    adapter: Optional[ColorAdapter] = None,
    picker: ColorPicker = DEFAULT_PICKER,
    name: str = "custom",
) -> Derivation[Theme]:
    """Derive every theme colour from the seed ``selection``.

    Parameters
    ----------
    selection : Selection
        Seed colours, in whatever type ``adapter`` understands.
    constraints : ThemeConstraints, optional
        Contrast targets; defaults to ``ThemeConstraints()``.
    adapter : ColorAdapter, optional
        Converts seeds to ``Rgba`` and derived colours back. When omitted the
        seeds must already be ``Rgba``.

    Returns
    -------
    Derivation[Theme]
        Always a complete theme. ``errors`` lists every target that could
        not be met, in derivation order.
    """
    constraints = constraints or ThemeConstraints()
    adapter = adapter or RgbaAdapter()
    seeds = selection.map_colors(adapter.to_rgba)

    errors: List[ThemeDerivationError] = []
    containers = {}
    for container_type, base in (
        (ContainerType.BACKGROUND, seeds.background),
        (ContainerType.PRIMARY, seeds.primary_container),
        (ContainerType.SECONDARY, seeds.secondary_container),
    ):
        result = derive_container(container_type, base, constraints, picker=picker)
        containers[container_type] = result.derived
        errors.extend(result.errors)

    components = {}
    for role in ("accent", "destructive", "warning", "success"):
        result = derive_component(getattr(seeds, role), constraints, picker=picker)
        components[role] = result.derived
        errors.extend(result.errors)

    theme = Theme(
        background=containers[ContainerType.BACKGROUND],
        primary=containers[ContainerType.PRIMARY],
        secondary=containers[ContainerType.SECONDARY],
        palette=seeds,
        is_dark=rgb_to_lch(seeds.background).l < 50.0,
        name=name,
        **components,
    )
    _logger.info("Derived theme %r with %d diagnostic(s)", name, len(errors))
    for err in errors:
        _logger.debug("theme %r: %s", name, err)
    return Derivation(theme.map_colors(adapter.from_rgba), errors)
