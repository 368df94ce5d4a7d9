"""
Contrast Reference — the (low, high) color pair used as candidate text colors.

In auto mode the pair is read from the neutral ramp at (low_step, high_step);
in manual mode it is whatever the caller supplied. The state object keeps
both the steps and the manual colors across mode switches, so toggling twice
restores the previous manual pair.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Literal, Sequence, Union

from .color_format import BLACK, WHITE, Swatch, try_parse_color

logger = logging.getLogger(__name__)

ContrastModeName = Literal["auto", "manual"]

DEFAULT_LOW = "#ffffff"
DEFAULT_HIGH = "#000000"


@dataclass(frozen=True)
class AutoContrast:
    low_step: int
    high_step: int


@dataclass(frozen=True)
class ManualContrast:
    low: str
    high: str


ContrastMode = Union[AutoContrast, ManualContrast]


def clamp_step(step: int, num_colors: int) -> int:
    if num_colors <= 0:
        return 0
    return max(0, min(num_colors - 1, int(step)))


@dataclass(frozen=True)
class ContrastReference:
    mode: ContrastModeName = "auto"
    low_step: int = 0
    high_step: int = 10
    manual_low: str = DEFAULT_LOW
    manual_high: str = DEFAULT_HIGH

    def variant(self) -> ContrastMode:
        if self.mode == "manual":
            return ManualContrast(low=self.manual_low, high=self.manual_high)
        return AutoContrast(low_step=self.low_step, high_step=self.high_step)

    def with_step(self, kind: Literal["low", "high"], step: int,
                  num_colors: int) -> "ContrastReference":
        """Move one anchor step (clamped into the ramp) and switch to auto."""
        step = clamp_step(step, num_colors)
        if kind == "low":
            return replace(self, mode="auto", low_step=step)
        return replace(self, mode="auto", high_step=step)

    def with_manual(self, low: str, high: str) -> "ContrastReference":
        return replace(self, mode="manual", manual_low=low, manual_high=high)

    def with_mode(self, mode: ContrastModeName) -> "ContrastReference":
        if mode not in ("auto", "manual"):
            logger.warning(f"Unknown contrast mode {mode!r}, keeping {self.mode!r}")
            return self
        return replace(self, mode=mode)

    def toggled(self) -> "ContrastReference":
        return self.with_mode("manual" if self.mode == "auto" else "auto")

    def clamped(self, num_colors: int) -> "ContrastReference":
        return replace(
            self,
            low_step=clamp_step(self.low_step, num_colors),
            high_step=clamp_step(self.high_step, num_colors),
        )

    def resolve(self, neutrals: Sequence[Swatch]) -> tuple[Swatch, Swatch]:
        """Return the (low, high) reference colors for this state."""
        mode = self.variant()
        if isinstance(mode, ManualContrast):
            return (_manual_color(mode.low, WHITE), _manual_color(mode.high, BLACK))
        if not neutrals:
            return WHITE, BLACK
        n = len(neutrals)
        return neutrals[clamp_step(mode.low_step, n)], neutrals[clamp_step(mode.high_step, n)]


def _manual_color(value: str, default: Swatch) -> Swatch:
    swatch = try_parse_color(value, default)
    if swatch is default:
        logger.warning(f"Manual contrast color {value!r} unreadable, using {default.hex}")
    return swatch
