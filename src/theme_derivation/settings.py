"""Constants shared by the colour derivation engine."""

from __future__ import annotations

from typing import Final

# Binary search depths. Fixed so derived themes are reproducible bit for bit.
CONTRAST_SEARCH_ITERATIONS: Final = 100
GAMUT_SEARCH_ITERATIONS: Final = 64

# WCAG 2.1 text targets
AAA_TEXT_CONTRAST: Final = 7.0
AA_TEXT_CONTRAST: Final = 4.5

# Relative tolerance equivalent to 4 ULPs of a single precision float
CONTRAST_TOLERANCE: Final = 4 * 2.0**-23
GAMUT_TOLERANCE: Final = 1e-6

# Component state rules
STATE_LIGHTNESS_STEP: Final = 0.1  # fraction of the full lightness scale
DISABLED_ALPHA: Final = 0.5

# Default ThemeConstraints values
DEFAULT_ELEVATED_CONTRAST_RATIO: Final = 1.1
DEFAULT_DIVIDER_CONTRAST_RATIO: Final = 1.51
DEFAULT_TEXT_CONTRAST_RATIO: Final = AAA_TEXT_CONTRAST
DEFAULT_DIVIDER_GRAY_SCALE: Final = True
DEFAULT_LIGHTEN: Final = True

# Palette ramps
RAMP_LENGTH: Final = 100
LCH_MAX_CHROMA: Final = 128.0
SMALL_WIDGET_CHROMA_RATIO: Final = 0.03
NEAR_WHITE_INDEX: Final = 91
SMALL_WIDGET_STEPS: Final = 5
