# Shared fixtures for the theme derivation tests.
# Qt adapter tests run headless; the offscreen platform keeps QtGui from
# looking for a display.

import os

import pytest

from theme_derivation import Rgba, Selection, ThemeConstraints, derive_theme

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def dark_selection():
    return Selection(
        background=Rgba.from_hex("#1b1b1b"),
        primary_container=Rgba.from_hex("#2e2e2e"),
        secondary_container=Rgba.from_hex("#3a3a3a"),
        accent=Rgba.from_hex("#3584e4"),
        destructive=Rgba.from_hex("#e01b24"),
        warning=Rgba.from_hex("#f6d32d"),
        success=Rgba.from_hex("#33d17a"),
    )


@pytest.fixture(scope="session")
def mid_gray():
    return Rgba(0.5, 0.5, 0.5, 1.0)


@pytest.fixture(scope="session")
def dark_theme_result(dark_selection):
    # Derivation is pure, so one result can be shared across tests
    return derive_theme(dark_selection, ThemeConstraints())
