"""Palette step ramps (lightness ladders) and index helpers.

``steps`` holds a seed colour's Oklch hue and chroma fixed and walks lightness
from 0 to 1 in evenly spaced steps, gamut mapping each one. Index 0 is black
and the last index is white.

Note: only the *requested* lightness is strictly monotonic. Gamut mapping
reduces chroma, never lightness, but the resulting sRGB colours are not
guaranteed to be strictly ordered by any other lightness measure.

The index helpers let consumers pick related surfaces, small widget fills and
text colours by stepping along a 100 entry ramp instead of running contrast
searches:

    ramp = steps(bg)
    base = color_index(bg, len(ramp))
    card = get_surface_color(base, 8, ramp, is_dark, fallback)
    text = get_text(color_index(card, len(ramp)), ramp, fallback)
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Sequence, Union

from .color_space import Oklch, Rgba, rgb_to_lch, rgb_to_oklch
from .gamut import nearest_in_gamut
from .settings import (
    LCH_MAX_CHROMA,
    NEAR_WHITE_INDEX,
    RAMP_LENGTH,
    SMALL_WIDGET_CHROMA_RATIO,
)

_logger = logging.getLogger(__name__)

__all__ = [
    "ramp_lightness",
    "steps",
    "color_index",
    "get_index",
    "get_surface_color",
    "get_small_widget_color",
    "get_text",
]

# Offsets tried, in order, when stepping from a surface to its text colour
_TEXT_OFFSETS = (70, 50)


def ramp_lightness(count: int) -> List[float]:
    """Requested Oklch lightness for each entry of a ``count`` long ramp."""
    if count < 1:
        raise ValueError("count must be at least 1")
    if count == 1:
        return [0.0]
    return [i / (count - 1) for i in range(count)]


def steps(seed: Union[Rgba, Oklch], count: int = RAMP_LENGTH) -> List[Rgba]:
    base = seed if isinstance(seed, Oklch) else rgb_to_oklch(seed)
    base = replace(base, alpha=1.0)
    return [nearest_in_gamut(base.with_lightness(l)) for l in ramp_lightness(count)]  # noqa: E741


def color_index(color: Rgba, array_len: int) -> int:
    if array_len < 1:
        raise ValueError("array_len must be at least 1")
    idx = int(rgb_to_oklch(color).l * array_len + 0.5)
    return max(0, min(array_len - 1, idx))


def get_index(base_index: int, steps: int, array_len: int, is_dark: bool) -> Optional[int]:
    """Step up (dark themes) or down (light themes) from ``base_index``.

    Returns None when the result would leave ``[0, array_len)``.
    """
    idx = base_index + steps if is_dark else base_index - steps
    if 0 <= idx < array_len:
        return idx
    return None


def _require_ramp(ramp: Sequence[Rgba]) -> None:
    if len(ramp) != RAMP_LENGTH:
        raise ValueError(f"ramp must have {RAMP_LENGTH} entries, got {len(ramp)}")


def _lookup(ramp: Sequence[Rgba], index: Optional[int], fallback: Rgba, what: str) -> Rgba:
    if index is None:
        _logger.debug("%s index out of range; using fallback %s", what, fallback.to_hex())
        return fallback
    return ramp[index]


def get_surface_color(
    base_index: int,
    steps: int,
    ramp: Sequence[Rgba],
    is_dark: bool,
    fallback: Rgba,
) -> Rgba:
    _require_ramp(ramp)
    is_dark = is_dark or base_index < NEAR_WHITE_INDEX
    index = get_index(base_index, steps, len(ramp), is_dark)
    return _lookup(ramp, index, fallback, "surface")


def get_small_widget_color(
    base_index: int,
    steps: int,
    ramp: Sequence[Rgba],
    fallback: Rgba,
) -> Rgba:
    """Low saturation fill for small decorative widgets.

    Chroma is capped at 3% of the LCH maximum.
    """
    _require_ramp(ramp)
    is_dark = base_index <= 40 or 51 <= base_index < 65
    index = get_index(base_index, steps, len(ramp), is_dark)
    res = _lookup(ramp, index, fallback, "small widget")
    lch = rgb_to_lch(res)
    limit = SMALL_WIDGET_CHROMA_RATIO * LCH_MAX_CHROMA
    if lch.c > limit:
        res = nearest_in_gamut(lch.with_chroma(limit))
    return res


def get_text(
    base_index: int,
    ramp: Sequence[Rgba],
    fallback: Rgba,
    tint_ramp: Optional[Sequence[Rgba]] = None,
) -> Rgba:
    """Text colour for a surface at ``base_index``, read from ``tint_ramp`` if given.

    Tries each text offset, then the far end of a full ramp. A tint ramp too
    short to hold the chosen index yields ``fallback``.
    """
    _require_ramp(ramp)
    source = tint_ramp if tint_ramp is not None else ramp
    is_dark = base_index < 60
    for offset in _TEXT_OFFSETS:
        index = get_index(base_index, offset, RAMP_LENGTH, is_dark)
        if index is not None:
            break
    else:
        index = RAMP_LENGTH - 1 if is_dark else 0
    if index >= len(source):
        _logger.debug("text index %d outside ramp; using fallback %s", index, fallback.to_hex())
        return fallback
    return source[index]
