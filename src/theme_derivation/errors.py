"""Exceptions raised or collected while deriving theme colours.

Only the strict picker raises to its caller. Everything above it records these
as diagnostics on a ``Derivation`` and keeps going.
"""

from __future__ import annotations

from typing import List, Optional

from .color_space import Rgba

__all__ = [
    "ThemeDerivationError",
    "ContrastUnreachableError",
    "DerivationStepError",
    "ConstraintValidationError",
    "error_chain",
]


class ThemeDerivationError(RuntimeError):
    """Base class for colour derivation failures."""


class ContrastUnreachableError(ThemeDerivationError):
    def __init__(
        self,
        target: float,
        source: Rgba,
        *,
        lighten: Optional[bool] = None,
        achieved: Optional[float] = None,
    ) -> None:
        self.target = target
        self.source = source
        self.lighten = lighten
        self.achieved = achieved
        direction = {None: "", True: " (lightening)", False: " (darkening)"}[lighten]
        msg = f"Failed to derive color with contrast {target} from {source.to_hex()}{direction}"
        if achieved is not None:
            msg += f", closest was {achieved:.3f}"
        super().__init__(msg)


class DerivationStepError(ThemeDerivationError):
    """A failure annotated with where in the derivation it happened.

    The underlying error is kept as ``__cause__``. ``previous`` links an
    earlier fallback attempt that also failed.
    """

    def __init__(
        self,
        message: str,
        *,
        cause: Optional[BaseException] = None,
        previous: Optional["DerivationStepError"] = None,
    ) -> None:
        super().__init__(message)
        self.previous = previous
        if cause is not None:
            self.__cause__ = cause


class ConstraintValidationError(ThemeDerivationError):
    """Raised when theme constraints are malformed."""


def error_chain(exc: BaseException) -> List[str]:
    """Messages of ``exc``, its causes and earlier failed attempts, outermost first."""
    nodes: List[BaseException] = []
    cur: Optional[BaseException] = exc
    while cur is not None:
        nodes.append(cur)
        cur = cur.__cause__
    out = [str(n) for n in nodes]
    for node in nodes:
        previous = getattr(node, "previous", None)
        if previous is not None:
            out.extend(error_chain(previous))
    return out
