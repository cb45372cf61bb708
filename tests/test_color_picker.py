import pytest

from theme_derivation.color_picker import (
    ColorPicker,
    PickerStrategy,
    contrast_matches,
    pick,
    pick_graphic,
    pick_text,
)
from theme_derivation.color_space import BLACK, WHITE, Rgba, contrast_ratio, is_in_gamut, rgb_to_lch
from theme_derivation.errors import ContrastUnreachableError, DerivationStepError, error_chain


def test_pick_reaches_target_from_white():
    result = pick(WHITE, 4.5, False, None)
    assert contrast_matches(4.5, contrast_ratio(WHITE, result))
    assert is_in_gamut(result)
    assert rgb_to_lch(result).l < rgb_to_lch(WHITE).l


def test_pick_reaches_target_from_colored_source():
    blue = Rgba.from_hex("#3584e4")
    result = pick(blue, 1.51, False, True)
    assert contrast_matches(1.51, contrast_ratio(blue, result))
    assert rgb_to_lch(result).l > rgb_to_lch(blue).l


def test_pick_without_target_maximizes_contrast():
    assert pick(WHITE, None) == BLACK
    assert pick(BLACK, None) == WHITE
    assert pick(Rgba(0.9, 0.9, 0.2), None) == BLACK


def test_pick_unreachable_target_raises(mid_gray):
    with pytest.raises(ContrastUnreachableError) as info:
        pick(mid_gray, 21.0, False, None)
    err = info.value
    assert err.target == 21.0
    assert err.source == mid_gray
    assert "21.0" in str(err) and mid_gray.to_hex() in str(err)


def test_pick_direction_bounds_search():
    # Nothing is lighter than white or darker than black
    with pytest.raises(ContrastUnreachableError):
        pick(WHITE, 4.5, False, True)
    with pytest.raises(ContrastUnreachableError):
        pick(BLACK, 4.5, False, False)
    darker = pick(WHITE, 4.5, False, False)
    assert contrast_matches(4.5, contrast_ratio(WHITE, darker))


def test_pick_grayscale_drops_chroma():
    orange = Rgba.from_hex("#ff7800")
    result = pick(orange, 3.0, True, False)
    assert rgb_to_lch(result).c < 0.01
    assert contrast_matches(3.0, contrast_ratio(orange, result))


def test_picked_colors_are_opaque():
    translucent = Rgba(0.2, 0.3, 0.8, 0.1)
    assert pick(translucent, 4.5, False, None).a == 1.0
    assert pick(translucent, None).a == 1.0


def test_pick_text_falls_back_with_diagnostics(mid_gray):
    color, err = pick_text(mid_gray, False, None)
    assert is_in_gamut(color)
    # AAA is out of reach for mid grey; AA is not
    assert contrast_ratio(mid_gray, color) >= 4.5 * (1 - 1e-5)
    assert isinstance(err, DerivationStepError)
    chain = error_chain(err)
    assert chain and chain[0].startswith("AAA text contrast failed")
    assert any("Failed to derive color with contrast 7.0" in m for m in chain)


def test_pick_text_without_errors_on_dark_surface():
    color, err = pick_text(Rgba.from_hex("#1b1b1b"))
    assert err is None
    assert contrast_matches(7.0, contrast_ratio(Rgba.from_hex("#1b1b1b"), color))


def test_pick_text_lower_first_target():
    picker = ColorPicker()
    surface = Rgba.from_hex("#1b1b1b")
    color, err = picker.pick_text(surface, True, None, contrast=4.5)
    assert err is None
    assert contrast_matches(4.5, contrast_ratio(surface, color))


def test_pick_graphic_falls_back_to_max_contrast(mid_gray):
    color, err = pick_graphic(mid_gray, 21.0, False, None)
    assert color in (BLACK, WHITE)
    assert err is not None
    assert str(err).startswith("Graphic contrast 21.0 failed")
    assert isinstance(err.__cause__, ContrastUnreachableError)


def test_pick_graphic_success_has_no_error():
    color, err = pick_graphic(Rgba.from_hex("#1b1b1b"), 1.1, False, True)
    assert err is None
    assert contrast_matches(1.1, contrast_ratio(Rgba.from_hex("#1b1b1b"), color))


def test_picker_strategy_default_is_exact():
    assert ColorPicker().strategy is PickerStrategy.EXACT
    assert ColorPicker(PickerStrategy.EXACT).pick(WHITE, None) == BLACK
