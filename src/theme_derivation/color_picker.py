"""Contrast constrained colour picking.

Given a source colour, the picker searches LCH lightness (hue kept, chroma
optionally dropped) for a colour whose WCAG contrast against the source meets
a target ratio.

Entry points:
    pick(color, contrast, grayscale, lighten) -> Rgba
        Strict. Raises ContrastUnreachableError when the ratio cannot be met.
        With ``contrast=None`` returns black or white for maximum contrast.
    pick_text(color, grayscale, lighten) -> (Rgba, error | None)
        Tries AAA (7.0), then AA (4.5), then maximum contrast. Never raises.
    pick_graphic(color, contrast, grayscale, lighten) -> (Rgba, error | None)
        Tries the given ratio, then maximum contrast. Never raises.

``lighten`` restricts the search to lighter (True) or darker (False) colours
than the source; None searches the whole lightness range.

Picked colours are always fully opaque so text stays visible on translucent
surfaces.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
import logging
from typing import Callable, Dict, Optional, Tuple

from .color_space import BLACK, WHITE, Rgba, contrast_ratio, rgb_to_lch
from .errors import ContrastUnreachableError, DerivationStepError, ThemeDerivationError
from .gamut import nearest_in_gamut
from .settings import (
    AA_TEXT_CONTRAST,
    AAA_TEXT_CONTRAST,
    CONTRAST_SEARCH_ITERATIONS,
    CONTRAST_TOLERANCE,
)

_logger = logging.getLogger(__name__)

__all__ = [
    "PickerStrategy",
    "ColorPicker",
    "contrast_matches",
    "pick",
    "pick_text",
    "pick_graphic",
]

PickResult = Tuple[Rgba, Optional[ThemeDerivationError]]

_TEXT_LEVELS = {AAA_TEXT_CONTRAST: "AAA", AA_TEXT_CONTRAST: "AA"}


class PickerStrategy(Enum):
    EXACT = "exact"


def contrast_matches(target: float, actual: float) -> bool:
    return abs(target - actual) <= CONTRAST_TOLERANCE * max(abs(target), abs(actual))


def _pick_exact(
    color: Rgba, contrast: Optional[float], grayscale: bool, lighten: Optional[bool]
) -> Rgba:
    lch = replace(rgb_to_lch(color), alpha=1.0)
    if grayscale:
        lch = lch.with_chroma(0.0)

    if contrast is None:
        return BLACK if lch.l > 50.0 else WHITE

    if lighten is None:
        low, high = 0.0, 100.0
    elif lighten:
        low, high = lch.l, 100.0
    else:
        low, high = 0.0, lch.l

    candidate = None
    for _ in range(CONTRAST_SEARCH_ITERATIONS):
        guess_l = (low + high) / 2.0
        guess = lch.with_lightness(guess_l)
        cur = contrast_ratio(color, nearest_in_gamut(guess))
        if contrast_matches(contrast, cur):
            candidate = guess
            break
        more_contrast = contrast > cur
        moved_up = lch.l < guess_l
        if moved_up == more_contrast:
            low = guess_l
        else:
            high = guess_l
    if candidate is None:
        candidate = lch.with_lightness((low + high) / 2.0)

    result = nearest_in_gamut(candidate)
    actual = contrast_ratio(color, result)
    if not contrast_matches(contrast, actual):
        raise ContrastUnreachableError(contrast, color, lighten=lighten, achieved=actual)
    return result


_STRATEGIES: Dict[PickerStrategy, Callable[[Rgba, Optional[float], bool, Optional[bool]], Rgba]] = {
    PickerStrategy.EXACT: _pick_exact,
}


@dataclass(frozen=True)
class ColorPicker:
    strategy: PickerStrategy = PickerStrategy.EXACT

    def pick(
        self,
        color: Rgba,
        contrast: Optional[float] = None,
        grayscale: bool = False,
        lighten: Optional[bool] = None,
    ) -> Rgba:
        return _STRATEGIES[self.strategy](color, contrast, grayscale, lighten)

    def pick_graphic(
        self,
        color: Rgba,
        contrast: float,
        grayscale: bool = False,
        lighten: Optional[bool] = None,
    ) -> PickResult:
        try:
            return self.pick(color, contrast, grayscale, lighten), None
        except ContrastUnreachableError as exc:
            err = DerivationStepError(f"Graphic contrast {contrast} failed: {exc}", cause=exc)
            _logger.debug("%s; falling back to maximum contrast", err)
        return self.pick(color, None, grayscale, lighten), err

    def pick_text(
        self,
        color: Rgba,
        grayscale: bool = True,
        lighten: Optional[bool] = None,
        *,
        contrast: float = AAA_TEXT_CONTRAST,
    ) -> PickResult:
        targets = [contrast]
        if contrast > AA_TEXT_CONTRAST:
            targets.append(AA_TEXT_CONTRAST)
        err: Optional[DerivationStepError] = None
        for target in targets:
            try:
                return self.pick(color, target, grayscale, lighten), err
            except ContrastUnreachableError as exc:
                label = _TEXT_LEVELS.get(target, str(target))
                err = DerivationStepError(
                    f"{label} text contrast failed: {exc}", cause=exc, previous=err
                )
                _logger.debug("%s", err)
        return self.pick(color, None, grayscale, lighten), err


DEFAULT_PICKER = ColorPicker()


def pick(
    color: Rgba,
    contrast: Optional[float] = None,
    grayscale: bool = False,
    lighten: Optional[bool] = None,
) -> Rgba:
    return DEFAULT_PICKER.pick(color, contrast, grayscale, lighten)


def pick_text(color: Rgba, grayscale: bool = True, lighten: Optional[bool] = None) -> PickResult:
    return DEFAULT_PICKER.pick_text(color, grayscale, lighten)


def pick_graphic(
    color: Rgba, contrast: float, grayscale: bool = False, lighten: Optional[bool] = None
) -> PickResult:
    return DEFAULT_PICKER.pick_graphic(color, contrast, grayscale, lighten)
