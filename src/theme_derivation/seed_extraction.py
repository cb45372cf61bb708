"""Seed colour extraction from raw pixels.

Pixels (0-255 RGB tuples, e.g. read from a wallpaper by the host) are
quantized in Oklab so buckets split where the eye sees a difference, not where
an sRGB channel happens to span the widest range. Identical pixels are merged
into weighted samples first, and each bucket is split at its weighted median
along its widest Oklab axis.

A bucket is represented by the real pixel colour nearest its weighted Oklab
mean, never by an average that appears nowhere in the source. Buckets are
ranked most populous first, darker first on ties, which is the order
``Selection.from_colors`` expects (background first).
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
import math
from typing import Iterable, List, Sequence, Tuple

from .color_space import Rgba, rgb_to_oklch

__all__ = ["SeedExtractionResult", "extract_seed_colors"]

Oklab = Tuple[float, float, float]


@dataclass(frozen=True)
class SeedExtractionResult:
    colors: List[Rgba]
    populations: List[int]
    source_count: int  # pixels sampled


@dataclass(frozen=True)
class _Sample:
    color: Rgba
    lab: Oklab
    weight: int


def _to_sample(rgb: Tuple[int, int, int], weight: int) -> _Sample:
    color = Rgba.from_bytes(*rgb)
    lch = rgb_to_oklch(color)
    hue = math.radians(lch.h)
    return _Sample(color, (lch.l, lch.c * math.cos(hue), lch.c * math.sin(hue)), weight)


def _spread(bucket: Sequence[_Sample]) -> Tuple[float, int]:
    """Widest Oklab axis extent of ``bucket`` and that axis."""
    best = (0.0, 0)
    for axis in range(3):
        values = [s.lab[axis] for s in bucket]
        best = max(best, (max(values) - min(values), axis))
    return best


def _split(bucket: List[_Sample], axis: int) -> Tuple[List[_Sample], List[_Sample]]:
    ordered = sorted(bucket, key=lambda s: s.lab[axis])
    half = sum(s.weight for s in ordered) / 2.0
    seen = 0
    cut = len(ordered) - 1
    for i, sample in enumerate(ordered):
        seen += sample.weight
        if seen >= half:
            cut = i + 1
            break
    cut = min(max(cut, 1), len(ordered) - 1)
    return ordered[:cut], ordered[cut:]


def _representative(bucket: Sequence[_Sample]) -> Rgba:
    total = sum(s.weight for s in bucket)
    mean = tuple(sum(s.lab[axis] * s.weight for s in bucket) / total for axis in range(3))
    return min(bucket, key=lambda s: math.dist(s.lab, mean)).color


def _sample_pixels(pixels: Iterable[Sequence[int]], max_pixels: int) -> List[Tuple[int, int, int]]:
    clamped = [tuple(min(255, max(0, int(v))) for v in p[:3]) for p in pixels]
    if len(clamped) > max_pixels:
        # even stride over the whole image rather than its first rows
        stride = math.ceil(len(clamped) / max_pixels)
        clamped = clamped[::stride]
    return clamped  # type: ignore[return-value]


def extract_seed_colors(
    pixels: Iterable[Sequence[int]],
    *,
    count: int = 8,
    max_pixels: int = 4096,
) -> SeedExtractionResult:
    """Quantize ``pixels`` into at most ``count`` seed colours."""
    if count < 1:
        raise ValueError("count must be at least 1")
    sampled = _sample_pixels(pixels, max_pixels)
    if not sampled:
        return SeedExtractionResult(colors=[], populations=[], source_count=0)

    buckets: List[List[_Sample]] = [
        [_to_sample(rgb, n) for rgb, n in Counter(sampled).items()]
    ]
    while len(buckets) < count:
        spreads = [_spread(b) for b in buckets]
        widest = max(range(len(buckets)), key=lambda i: spreads[i][0])
        extent, axis = spreads[widest]
        if extent == 0.0:
            break
        low, high = _split(buckets.pop(widest), axis)
        buckets.extend((low, high))

    ranked = sorted(
        ((_representative(b), sum(s.weight for s in b)) for b in buckets),
        key=lambda t: (-t[1], rgb_to_oklch(t[0]).l),
    )
    return SeedExtractionResult(
        colors=[color for color, _n in ranked],
        populations=[n for _color, n in ranked],
        source_count=len(sampled),
    )
