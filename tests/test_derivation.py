import pytest

from theme_derivation import (
    ContainerType,
    Rgba,
    Selection,
    ThemeConstraints,
    derive_component,
    derive_container,
    derive_theme,
    rgb_to_lch,
)
from theme_derivation.color_picker import contrast_matches
from theme_derivation.color_space import contrast_ratio, is_in_gamut
from theme_derivation.errors import DerivationStepError


def _all_components(theme):
    comps = list(theme.components().values())
    comps += [c.component for c in theme.containers().values()]
    return comps


def test_theme_is_complete(dark_theme_result):
    theme = dark_theme_result.derived
    assert theme.is_dark
    assert theme.name == "custom"
    assert theme.palette.accent == Rgba.from_hex("#3584e4")
    for comp in _all_components(theme):
        for value in vars(comp).values():
            assert isinstance(value, Rgba)
            assert is_in_gamut(value)


def test_text_stays_visible(dark_theme_result):
    for comp in _all_components(dark_theme_result.derived):
        assert comp.on.a > 0
        assert comp.on_disabled.a > 0
        assert comp.selected_text.a > 0


def test_component_state_rules(dark_theme_result):
    theme = dark_theme_result.derived
    accent = theme.accent
    assert accent.base == Rgba.from_hex("#3584e4")
    assert accent.selected == accent.base
    assert accent.focus == accent.selected
    assert accent.disabled == accent.base.with_alpha(0.5)
    assert accent.on_disabled == accent.on.with_alpha(0.5)
    # lighten=True by default: hover and pressed step toward white
    base_l = rgb_to_lch(accent.base).l
    hover_l = rgb_to_lch(accent.hover).l
    pressed_l = rgb_to_lch(accent.pressed).l
    assert hover_l == pytest.approx(base_l + 10.0, abs=1e-3)
    assert pressed_l == pytest.approx(base_l + 20.0, abs=1e-3)


def test_component_darkens_when_not_lightening():
    constraints = ThemeConstraints(lighten=False)
    base = Rgba.from_hex("#3584e4")
    comp = derive_component(base, constraints).derived
    assert rgb_to_lch(comp.hover).l < rgb_to_lch(base).l
    assert rgb_to_lch(comp.pressed).l < rgb_to_lch(comp.hover).l


def test_container_component_is_elevated():
    base = Rgba.from_hex("#1b1b1b")
    constraints = ThemeConstraints()
    container = derive_container(ContainerType.BACKGROUND, base, constraints).derived
    assert container.base == base
    assert contrast_matches(1.1, contrast_ratio(base, container.component.base))
    assert rgb_to_lch(container.component.base).l > rgb_to_lch(base).l
    assert contrast_matches(1.51, contrast_ratio(base, container.divider))
    assert contrast_ratio(base, container.on) >= 4.5


def test_container_errors_name_their_location(mid_gray):
    result = derive_container(ContainerType.PRIMARY, mid_gray, ThemeConstraints())
    messages = [str(e) for e in result.errors]
    assert any(m.startswith('Primary => "container text" failed: AAA text contrast') for m in messages)
    assert all(isinstance(e, DerivationStepError) for e in result.errors)


def test_derivation_is_deterministic(dark_selection, dark_theme_result):
    again = derive_theme(dark_selection, ThemeConstraints())
    assert again.derived == dark_theme_result.derived
    assert [str(e) for e in again.errors] == [str(e) for e in dark_theme_result.errors]


def test_adversarial_constraints_still_produce_a_theme(mid_gray):
    selection = Selection(
        background=mid_gray,
        primary_container=mid_gray,
        secondary_container=mid_gray,
        accent=mid_gray,
        destructive=mid_gray,
        warning=mid_gray,
        success=mid_gray,
    )
    constraints = ThemeConstraints(
        elevated_contrast_ratio=21.0, divider_contrast_ratio=21.0, text_contrast_ratio=21.0
    )
    result = derive_theme(selection, constraints)
    assert not result.ok
    theme = result.derived
    for comp in _all_components(theme):
        assert comp.on.a > 0 and comp.selected_text.a > 0
    prefixes = {str(e).split(" => ")[0] for e in result.errors if " => " in str(e)}
    assert prefixes == {"Background", "Primary", "Secondary"}


def test_light_background_is_not_dark():
    light = Rgba.from_hex("#f2f2f2")
    selection = Selection(light, light, light, light, light, light, light)
    theme = derive_theme(selection, ThemeConstraints(lighten=False)).derived
    assert not theme.is_dark


def test_seed_must_match_adapter(dark_selection):
    selection = Selection("#000000", "#000000", "#000000", "#000000", "#000000", "#000000", "#000000")
    with pytest.raises(TypeError):
        derive_theme(selection)


def test_container_small_widget_is_muted(dark_theme_result):
    for container in dark_theme_result.derived.containers().values():
        assert rgb_to_lch(container.small_widget).c <= 0.03 * 128 + 1e-3
        assert is_in_gamut(container.small_widget)
