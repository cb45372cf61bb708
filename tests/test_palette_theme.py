import pytest

from theme_derivation import (
    BLACK,
    HexColorAdapter,
    Rgba,
    audit_theme_contrast,
    build_palette_theme,
    color_index,
    flatten_theme,
    over,
    rgb_to_lch,
    steps,
)
from theme_derivation.color_space import contrast_ratio, is_in_gamut

DARK_BG = Rgba.from_hex("#1b1b1b")
LIGHT_BG = Rgba.from_hex("#f2f2f2")
ACCENT = Rgba.from_hex("#3584e4")
RED = Rgba.from_hex("#e01b24")
YELLOW = Rgba.from_hex("#f6d32d")
GREEN = Rgba.from_hex("#33d17a")


@pytest.fixture(scope="module")
def dark_palette_theme():
    return build_palette_theme(DARK_BG, ACCENT, RED, YELLOW, GREEN)


def _colors(theme):
    for container in theme.containers().values():
        yield container.base
        yield container.divider
        yield container.on
        yield container.small_widget
        yield from vars(container.component).values()
    for comp in theme.components().values():
        yield from vars(comp).values()


def test_dark_theme_from_ramps(dark_palette_theme):
    theme = dark_palette_theme
    assert theme.is_dark
    assert theme.name == "palette"
    assert theme.background.base == DARK_BG
    assert all(is_in_gamut(c) for c in _colors(theme))
    ramp = steps(DARK_BG)
    index = color_index(DARK_BG, 100)
    assert theme.background.component.base == ramp[index + 8]
    assert theme.palette.primary_container == ramp[index + 5]
    assert theme.palette.secondary_container == ramp[index + 10]
    assert theme.primary.base == theme.palette.primary_container


def test_dark_theme_text_is_readable(dark_palette_theme):
    for container in dark_palette_theme.containers().values():
        assert contrast_ratio(container.on, container.base) >= 4.5
        assert rgb_to_lch(container.on).l > rgb_to_lch(container.base).l


def test_state_overlays_are_composited(dark_palette_theme):
    comp = dark_palette_theme.background.component
    # lightest entry of the grey control ramp
    white = steps(BLACK, 11)[10]
    assert comp.hover == over(white.with_alpha(0.1), comp.base)
    assert comp.pressed == over(white.with_alpha(0.2), comp.base)
    assert rgb_to_lch(comp.pressed).l > rgb_to_lch(comp.hover).l > rgb_to_lch(comp.base).l
    assert comp.on_disabled == over(comp.on.with_alpha(0.5), comp.base)
    assert comp.selected_text == ACCENT and comp.focus == ACCENT


def test_colored_components_use_control_ramp(dark_palette_theme):
    accent = dark_palette_theme.accent
    assert accent.base == ACCENT
    # index 0 of the dark control ramp is black
    assert accent.on.to_bytes() == (0, 0, 0, 255)
    assert accent.on_disabled == over(accent.on.with_alpha(0.5), ACCENT)
    assert accent.disabled_border.a == pytest.approx(0.5)
    assert dark_palette_theme.destructive.base == RED


def test_small_widgets_are_muted(dark_palette_theme):
    for container in dark_palette_theme.containers().values():
        assert rgb_to_lch(container.small_widget).c <= 0.03 * 128 + 1e-3


def test_light_theme_reverses_control_ramp():
    theme = build_palette_theme(LIGHT_BG, ACCENT, RED, YELLOW, GREEN)
    assert not theme.is_dark
    assert theme.accent.on.to_bytes() == (255, 255, 255, 255)
    assert rgb_to_lch(theme.background.on).l < 50


def test_explicit_containers_and_text_tint():
    primary = Rgba.from_hex("#2e2e2e")
    text_tint = Rgba.from_hex("#99c1f1")
    theme = build_palette_theme(
        DARK_BG,
        ACCENT,
        RED,
        YELLOW,
        GREEN,
        primary_container=primary,
        text_tint=text_tint,
        name="tinted",
    )
    assert theme.primary.base == primary
    assert theme.name == "tinted"
    tint_ramp = steps(text_tint)
    assert theme.background.on in tint_ramp


def test_palette_theme_with_adapter():
    adapter = HexColorAdapter()
    theme = build_palette_theme(
        "#1b1b1b", "#3584e4", "#e01b24", "#f6d32d", "#33d17a", adapter=adapter
    )
    assert theme.background.base == "#1b1b1bff"
    flat = flatten_theme(theme, adapter)
    assert len(flat) == 96
    assert not any("background.on on" in f for f in audit_theme_contrast(theme, adapter=adapter))
