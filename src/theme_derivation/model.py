"""Theme data model.

All records are frozen dataclasses created fresh for each derivation. Colour
fields hold ``Rgba`` inside the engine; ``map_colors`` converts a whole record
to (or from) a host toolkit colour type in one pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Callable, Generic, List, Mapping, Sequence, TypeVar

from .color_space import Rgba, rgb_to_lch
from .errors import ConstraintValidationError, ThemeDerivationError
from .settings import (
    DEFAULT_DIVIDER_CONTRAST_RATIO,
    DEFAULT_DIVIDER_GRAY_SCALE,
    DEFAULT_ELEVATED_CONTRAST_RATIO,
    DEFAULT_LIGHTEN,
    DEFAULT_TEXT_CONTRAST_RATIO,
)

__all__ = [
    "ContainerType",
    "Selection",
    "ThemeConstraints",
    "Component",
    "Container",
    "Theme",
    "Derivation",
]

T = TypeVar("T")


class ContainerType(Enum):
    BACKGROUND = "Background"
    PRIMARY = "Primary"
    SECONDARY = "Secondary"

    def __str__(self) -> str:  # noqa: D401 - used in diagnostics
        return self.value


def _map_fields(obj: Any, fn: Callable[[Any], Any]) -> dict[str, Any]:
    return {f.name: fn(getattr(obj, f.name)) for f in fields(obj)}


# Reference hues used to sort arbitrary colour lists into semantic seeds
_CRIMSON = Rgba.from_hex("#dc143c")
_YELLOW = Rgba.from_hex("#ffff00")
_GREEN = Rgba.from_hex("#008000")
_ACHROMATIC_CHROMA = 1.0


def _hue_distance(a: float, b: float) -> float:
    d = abs(a - b) % 360.0
    return min(d, 360.0 - d)


@dataclass(frozen=True)
class Selection:
    """Seed colours chosen by the caller."""

    background: Any
    primary_container: Any
    secondary_container: Any
    accent: Any
    destructive: Any
    warning: Any
    success: Any

    def map_colors(self, fn: Callable[[Any], Any]) -> "Selection":
        return Selection(**_map_fields(self, fn))

    @classmethod
    def from_colors(cls, colors: Sequence[Rgba]) -> "Selection":
        """Build a selection from colours ordered most common first.

        The colours closest in hue to crimson, yellow and green (never the
        first, which is kept as the background) become destructive, warning
        and success. The remaining colours fill background, primary
        container, accent and secondary container in that order.
        """
        if len(colors) < 8:
            raise ValueError("at least 8 colors are required to build a selection")
        remaining = list(colors)
        picked: List[Rgba] = []
        for reference in (_CRIMSON, _YELLOW, _GREEN):
            ref_hue = rgb_to_lch(reference).h

            def key(i: int) -> tuple[bool, float]:
                lch = rgb_to_lch(remaining[i])
                # hue is meaningless for greys, rank them last
                return lch.c < _ACHROMATIC_CHROMA, _hue_distance(lch.h, ref_hue)

            idx = min(range(1, len(remaining)), key=key)
            picked.append(remaining.pop(idx))
        red, yellow, green = picked
        return cls(
            background=remaining[0],
            primary_container=remaining[1],
            secondary_container=remaining[3],
            accent=remaining[2],
            destructive=red,
            warning=yellow,
            success=green,
        )


@dataclass(frozen=True)
class ThemeConstraints:
    """Numeric targets used when picking derived colours.

    Attributes
    ----------
    elevated_contrast_ratio : float
        Contrast of a container's component surface against the container.
    divider_contrast_ratio : float
        Contrast of dividers against the surface they sit on.
    text_contrast_ratio : float
        First text contrast attempted before the AA fallback.
    divider_gray_scale : bool
        Dividers drop all chroma when True.
    lighten : bool
        Elevated surfaces, hover and pressed states move toward white when
        True, toward black otherwise.
    """

    elevated_contrast_ratio: float = DEFAULT_ELEVATED_CONTRAST_RATIO
    divider_contrast_ratio: float = DEFAULT_DIVIDER_CONTRAST_RATIO
    text_contrast_ratio: float = DEFAULT_TEXT_CONTRAST_RATIO
    divider_gray_scale: bool = DEFAULT_DIVIDER_GRAY_SCALE
    lighten: bool = DEFAULT_LIGHTEN

    _RATIOS = ("elevated_contrast_ratio", "divider_contrast_ratio", "text_contrast_ratio")
    _FLAGS = ("divider_gray_scale", "lighten")

    def __post_init__(self) -> None:
        for name in self._RATIOS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConstraintValidationError(f"{name} must be a number, got {value!r}")
            if not value >= 1.0:
                raise ConstraintValidationError(f"{name} must be >= 1, got {value}")
        for name in self._FLAGS:
            if not isinstance(getattr(self, name), bool):
                raise ConstraintValidationError(f"{name} must be a bool")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ThemeConstraints":
        if not isinstance(data, Mapping):
            raise ConstraintValidationError("constraints must be a mapping")
        known = set(cls._RATIOS) | set(cls._FLAGS)
        unknown = sorted(k for k in data if k not in known)
        if unknown:
            raise ConstraintValidationError(f"Unknown constraint keys: {', '.join(unknown)}")
        return cls(**dict(data))


@dataclass(frozen=True)
class Component:
    """Per-state colours for one interactive element."""

    base: Any
    hover: Any
    pressed: Any
    selected: Any
    selected_text: Any
    focus: Any
    divider: Any
    on: Any
    disabled: Any
    on_disabled: Any
    border: Any
    disabled_border: Any

    def map_colors(self, fn: Callable[[Any], Any]) -> "Component":
        return Component(**_map_fields(self, fn))


@dataclass(frozen=True)
class Container:
    base: Any
    divider: Any
    on: Any
    component: Component
    small_widget: Any  # muted fill for small decorative widgets

    def map_colors(self, fn: Callable[[Any], Any]) -> "Container":
        return Container(
            base=fn(self.base),
            divider=fn(self.divider),
            on=fn(self.on),
            component=self.component.map_colors(fn),
            small_widget=fn(self.small_widget),
        )


@dataclass(frozen=True)
class Theme:
    background: Container
    primary: Container
    secondary: Container
    accent: Component
    destructive: Component
    warning: Component
    success: Component
    palette: Selection
    is_dark: bool
    name: str = "custom"

    def containers(self) -> dict[str, Container]:
        return {"background": self.background, "primary": self.primary, "secondary": self.secondary}

    def components(self) -> dict[str, Component]:
        return {
            "accent": self.accent,
            "destructive": self.destructive,
            "warning": self.warning,
            "success": self.success,
        }

    def map_colors(self, fn: Callable[[Any], Any]) -> "Theme":
        return Theme(
            background=self.background.map_colors(fn),
            primary=self.primary.map_colors(fn),
            secondary=self.secondary.map_colors(fn),
            accent=self.accent.map_colors(fn),
            destructive=self.destructive.map_colors(fn),
            warning=self.warning.map_colors(fn),
            success=self.success.map_colors(fn),
            palette=self.palette.map_colors(fn),
            is_dark=self.is_dark,
            name=self.name,
        )


@dataclass(frozen=True)
class Derivation(Generic[T]):
    """A derived value plus the non-fatal errors met while deriving it."""

    derived: T
    errors: List[ThemeDerivationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
