"""Theme colour derivation engine.

Turns a handful of seed colours into a complete, contrast checked set of UI
colours, and provides lightness ramps for palette based theming.
"""

from .color_space import (  # noqa: F401
    BLACK,
    WHITE,
    Lch,
    Oklch,
    Rgba,
    contrast_ratio,
    is_in_gamut,
    lch_to_rgb,
    oklch_to_rgb,
    over,
    relative_luminance,
    rgb_to_lch,
    rgb_to_oklch,
)
from .gamut import nearest_in_gamut  # noqa: F401
from .errors import (  # noqa: F401
    ConstraintValidationError,
    ContrastUnreachableError,
    DerivationStepError,
    ThemeDerivationError,
    error_chain,
)
from .color_picker import (  # noqa: F401
    ColorPicker,
    PickerStrategy,
    pick,
    pick_graphic,
    pick_text,
)
from .model import (  # noqa: F401
    Component,
    Container,
    ContainerType,
    Derivation,
    Selection,
    Theme,
    ThemeConstraints,
)
from .adapters import ColorAdapter, HexColorAdapter, RgbaAdapter  # noqa: F401
from .derivation import derive_component, derive_container, derive_theme  # noqa: F401
from .palette_theme import build_palette_theme  # noqa: F401
from .palette_steps import (  # noqa: F401
    color_index,
    get_index,
    get_small_widget_color,
    get_surface_color,
    get_text,
    ramp_lightness,
    steps,
)
from .seed_extraction import SeedExtractionResult, extract_seed_colors  # noqa: F401
from .theme_map import audit_theme_contrast, flatten_theme  # noqa: F401
