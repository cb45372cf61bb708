"""Colour space conversions for theme derivation.

Value types
-----------
- ``Rgba``: non-linear sRGB with straight (compositing) alpha, channels nominally
  in [0, 1]. Values outside that range are allowed while a colour is in flight
  between perceptual spaces; anything handed back to callers as a final colour
  goes through :func:`theme_derivation.gamut.nearest_in_gamut` or ``clamped()``.
- ``Lch``: CIE LCh(ab) under D65, lightness 0-100.
- ``Oklch``: cylindrical Oklab, lightness 0-1.

Hue is stored in degrees in [0, 360). Conversions are analytic and each pair is
a round trip within floating tolerance for in-gamut colours.

Public API:
    rgb_to_lch(rgba) -> Lch
    lch_to_rgb(lch) -> Rgba
    rgb_to_oklch(rgba) -> Oklch
    oklch_to_rgb(oklch) -> Rgba
    relative_luminance(rgba) -> float
    contrast_ratio(a, b) -> float
    is_in_gamut(rgba) -> bool
    over(a, b) -> Rgba
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import math
import re

from .settings import GAMUT_TOLERANCE

__all__ = [
    "Rgba",
    "Lch",
    "Oklch",
    "BLACK",
    "WHITE",
    "rgb_to_lch",
    "lch_to_rgb",
    "rgb_to_oklch",
    "oklch_to_rgb",
    "relative_luminance",
    "contrast_ratio",
    "is_in_gamut",
    "over",
]


_HEX_BODY_RE = re.compile(r"[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8}")


def _clamp(v: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, v))


def _to_byte(c: float) -> int:
    return int(round(_clamp(c) * 255))


@dataclass(frozen=True)
class Rgba:
    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_hex(cls, color: str) -> "Rgba":
        """Parse ``#rgb``, ``#rgba``, ``#rrggbb`` or ``#rrggbbaa``.

        Raises ValueError for anything else.
        """
        if not isinstance(color, str):
            raise ValueError("color must be a string")
        c = color.strip()
        if not c.startswith("#"):
            raise ValueError(f"hex color must start with '#': {color}")
        c = c[1:]
        # int(..., 16) alone would accept signs and underscores
        if not _HEX_BODY_RE.fullmatch(c):
            raise ValueError(f"invalid hex color: {color}")
        if len(c) in (3, 4):
            parts = [int(ch * 2, 16) for ch in c]
        else:
            parts = [int(c[i : i + 2], 16) for i in range(0, len(c), 2)]
        if len(parts) == 3:
            parts.append(255)
        r, g, b, a = (p / 255.0 for p in parts)
        return cls(r, g, b, a)

    @classmethod
    def from_bytes(cls, r: int, g: int, b: int, a: int = 255) -> "Rgba":
        return cls(r / 255.0, g / 255.0, b / 255.0, a / 255.0)

    def to_bytes(self) -> tuple[int, int, int, int]:
        return _to_byte(self.r), _to_byte(self.g), _to_byte(self.b), _to_byte(self.a)

    def to_hex(self, *, include_alpha: bool = True) -> str:
        r, g, b, a = self.to_bytes()
        if include_alpha:
            return f"#{r:02x}{g:02x}{b:02x}{a:02x}"
        return f"#{r:02x}{g:02x}{b:02x}"

    def with_alpha(self, alpha: float) -> "Rgba":
        return replace(self, a=alpha)

    def clamped(self) -> "Rgba":
        return Rgba(_clamp(self.r), _clamp(self.g), _clamp(self.b), _clamp(self.a))

    def to_lch(self) -> "Lch":
        return rgb_to_lch(self)

    def to_oklch(self) -> "Oklch":
        return rgb_to_oklch(self)


BLACK = Rgba(0.0, 0.0, 0.0, 1.0)
WHITE = Rgba(1.0, 1.0, 1.0, 1.0)


@dataclass(frozen=True)
class Lch:
    l: float  # noqa: E741
    c: float
    h: float
    alpha: float = 1.0

    MAX_LIGHTNESS = 100.0

    def with_lightness(self, l: float) -> "Lch":  # noqa: E741
        return replace(self, l=l)

    def with_chroma(self, c: float) -> "Lch":
        return replace(self, c=c)

    def lighten(self, amount: float) -> "Lch":
        """Raise lightness by ``amount`` of the full scale (0.1 == 10 L units)."""
        return replace(self, l=_clamp(self.l + amount * self.MAX_LIGHTNESS, 0.0, self.MAX_LIGHTNESS))

    def darken(self, amount: float) -> "Lch":
        return replace(self, l=_clamp(self.l - amount * self.MAX_LIGHTNESS, 0.0, self.MAX_LIGHTNESS))

    def to_rgba(self) -> Rgba:
        return lch_to_rgb(self)


@dataclass(frozen=True)
class Oklch:
    l: float  # noqa: E741
    c: float
    h: float
    alpha: float = 1.0

    MAX_LIGHTNESS = 1.0

    def with_lightness(self, l: float) -> "Oklch":  # noqa: E741
        return replace(self, l=l)

    def with_chroma(self, c: float) -> "Oklch":
        return replace(self, c=c)

    def to_rgba(self) -> Rgba:
        return oklch_to_rgb(self)


# sRGB transfer ---------------------------------------------------------------


def _srgb_to_linear(c: float) -> float:
    if c <= 0.04045:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def _linear_to_srgb(c: float) -> float:
    if c <= 0.0031308:
        return 12.92 * c
    return 1.055 * (c ** (1 / 2.4)) - 0.055


def _cbrt(v: float) -> float:
    return math.copysign(abs(v) ** (1 / 3), v)


def _hue_degrees(a: float, b: float) -> float:
    return math.degrees(math.atan2(b, a)) % 360.0


# CIE LCh -----------------------------------------------------------------------

# D65 reference white, consistent with the matrices below
_XN, _YN, _ZN = 0.9504559270516716, 1.0, 1.0890577507598784
_LAB_EPSILON = 216 / 24389
_LAB_KAPPA = 24389 / 27


def _lab_f(t: float) -> float:
    return _cbrt(t) if t > _LAB_EPSILON else (_LAB_KAPPA * t + 16) / 116


def _lab_f_inv(ft: float) -> float:
    t = ft**3
    return t if t > _LAB_EPSILON else (116 * ft - 16) / _LAB_KAPPA


def rgb_to_lch(rgba: Rgba) -> Lch:
    r = _srgb_to_linear(rgba.r)
    g = _srgb_to_linear(rgba.g)
    b = _srgb_to_linear(rgba.b)
    x = r * 0.41239079926595934 + g * 0.357584339383878 + b * 0.1804807884018343
    y = r * 0.21263900587151027 + g * 0.715168678767756 + b * 0.07219231536073371
    z = r * 0.01933081871559182 + g * 0.11919477979462598 + b * 0.9505321522496607
    fx = _lab_f(x / _XN)
    fy = _lab_f(y / _YN)
    fz = _lab_f(z / _ZN)
    L = 116 * fy - 16
    a_ = 500 * (fx - fy)
    b_ = 200 * (fy - fz)
    return Lch(L, math.hypot(a_, b_), _hue_degrees(a_, b_), rgba.a)


def lch_to_rgb(lch: Lch) -> Rgba:
    """Convert without clamping; the result may be outside the sRGB gamut."""
    h = math.radians(lch.h)
    a_ = lch.c * math.cos(h)
    b_ = lch.c * math.sin(h)
    fy = (lch.l + 16) / 116
    fx = fy + a_ / 500
    fz = fy - b_ / 200
    if lch.l > _LAB_KAPPA * _LAB_EPSILON:
        yr = fy**3
    else:
        yr = lch.l / _LAB_KAPPA
    x = _lab_f_inv(fx) * _XN
    y = yr * _YN
    z = _lab_f_inv(fz) * _ZN
    r = x * 3.2409699419045226 + y * -1.537383177570094 + z * -0.4986107602930034
    g = x * -0.9692436362808796 + y * 1.8759675015077202 + z * 0.04155505740717559
    b = x * 0.05563007969699366 + y * -0.20397695888897652 + z * 1.0569715142428786
    return Rgba(_linear_to_srgb(r), _linear_to_srgb(g), _linear_to_srgb(b), lch.alpha)


# Oklch -------------------------------------------------------------------------


def rgb_to_oklch(rgba: Rgba) -> Oklch:
    r = _srgb_to_linear(rgba.r)
    g = _srgb_to_linear(rgba.g)
    b = _srgb_to_linear(rgba.b)
    l_ = _cbrt(0.4122214708 * r + 0.5363325363 * g + 0.0514459929 * b)
    m_ = _cbrt(0.2119034982 * r + 0.6806995451 * g + 0.1073969566 * b)
    s_ = _cbrt(0.0883024619 * r + 0.2817188376 * g + 0.6299787005 * b)
    L = 0.2104542553 * l_ + 0.7936177850 * m_ - 0.0040720468 * s_
    a_ = 1.9779984951 * l_ - 2.4285922050 * m_ + 0.4505937099 * s_
    b_ = 0.0259040371 * l_ + 0.7827717662 * m_ - 0.8086757660 * s_
    return Oklch(L, math.hypot(a_, b_), _hue_degrees(a_, b_), rgba.a)


def oklch_to_rgb(oklch: Oklch) -> Rgba:
    """Convert without clamping; the result may be outside the sRGB gamut."""
    h = math.radians(oklch.h)
    a_ = oklch.c * math.cos(h)
    b_ = oklch.c * math.sin(h)
    l_ = oklch.l + 0.3963377774 * a_ + 0.2158037573 * b_
    m_ = oklch.l - 0.1055613458 * a_ - 0.0638541728 * b_
    s_ = oklch.l - 0.0894841775 * a_ - 1.2914855480 * b_
    l3, m3, s3 = l_**3, m_**3, s_**3
    r = 4.0767416621 * l3 - 3.3077115913 * m3 + 0.2309699292 * s3
    g = -1.2684380046 * l3 + 2.6097574011 * m3 - 0.3413193965 * s3
    b = -0.0041960863 * l3 - 0.7034186147 * m3 + 1.7076147010 * s3
    return Rgba(_linear_to_srgb(r), _linear_to_srgb(g), _linear_to_srgb(b), oklch.alpha)


# WCAG contrast -----------------------------------------------------------------


def relative_luminance(rgba: Rgba) -> float:
    # Rec. 709 coefficients used by WCAG
    return (
        0.2126 * _srgb_to_linear(rgba.r)
        + 0.7152 * _srgb_to_linear(rgba.g)
        + 0.0722 * _srgb_to_linear(rgba.b)
    )


def contrast_ratio(a: Rgba, b: Rgba) -> float:
    """WCAG 2.1 contrast ratio; symmetric and always >= 1."""
    l1 = relative_luminance(a)
    l2 = relative_luminance(b)
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def _channel_in_gamut(c: float) -> bool:
    return (
        math.isclose(c, 0.0, abs_tol=GAMUT_TOLERANCE)
        or math.isclose(c, 1.0, abs_tol=GAMUT_TOLERANCE)
        or 0.0 <= c <= 1.0
    )


def is_in_gamut(rgba: Rgba) -> bool:
    return _channel_in_gamut(rgba.r) and _channel_in_gamut(rgba.g) and _channel_in_gamut(rgba.b)


# Compositing -------------------------------------------------------------------


def over(a: Rgba, b: Rgba) -> Rgba:
    """Straight alpha "A over B" on non-linear sRGB."""
    out_a = _clamp(a.a + b.a * (1 - a.a))
    if out_a == 0:
        return Rgba(0.0, 0.0, 0.0, 0.0)

    def channel(ca: float, cb: float) -> float:
        return _clamp((ca * a.a + cb * b.a * (1 - a.a)) / out_a)

    return Rgba(channel(a.r, b.r), channel(a.g, b.g), channel(a.b, b.b), out_a)
