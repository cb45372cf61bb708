"""Gamut mapping by chroma reduction.

A perceptual colour that falls outside sRGB is pulled back by holding its
lightness and hue and binary-searching the largest chroma that still converts
to a valid sRGB colour. The search depth is fixed so results are reproducible.
"""

from __future__ import annotations

from typing import Union

from .color_space import Lch, Oklch, Rgba, is_in_gamut
from .settings import GAMUT_SEARCH_ITERATIONS

__all__ = ["nearest_in_gamut", "PerceptualColor"]

PerceptualColor = Union[Lch, Oklch]


def nearest_in_gamut(color: PerceptualColor) -> Rgba:
    """Return the in-gamut sRGB colour nearest in chroma to ``color``.

    In-gamut input is returned unchanged apart from clamping round-off at the
    channel boundaries.
    """
    rgba = color.to_rgba()
    if is_in_gamut(rgba):
        return rgba.clamped()

    low_chroma = 0.0
    high_chroma = color.c
    for _ in range(GAMUT_SEARCH_ITERATIONS):
        mid = (low_chroma + high_chroma) / 2.0
        if is_in_gamut(color.with_chroma(mid).to_rgba()):
            low_chroma = mid
        else:
            high_chroma = mid
    # Lightness outside the displayable range is out of gamut even at zero
    # chroma; clamping still yields the closest grey.
    return color.with_chroma(low_chroma).to_rgba().clamped()
