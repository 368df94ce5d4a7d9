"""
Ramp Engine — neutral and hue ramps from a ColorParams record.

Every ramp shares one lightness profile: the bezier-eased position of each
step, shifted by that step's lightness nudger. The neutral ramp adds a faint
warmth tint; hue ramps add chroma at a fixed hue. Both are clamped to the
target gamut, and both start at pure white and end at pure black (reversed
in the dark theme).

generate() rebuilds the whole GeneratedState from the params on every call.
Nothing is carried over between calls.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

from .bezier import ease
from .color_format import BLACK, WHITE, Swatch, css_display, parse_color
from .color_matcher import palette_name
from .contrast import ContrastAlgorithm, printable_contrast
from .gamut import clamp_to_gamut, max_chroma_in_gamut
from .params import ColorParams, coerce_params

logger = logging.getLogger(__name__)

# Neutral tint: chroma per unit of warmth at mid lightness
WARMTH_CHROMA_PER_UNIT = 0.0008
WARM_HUE = 60.0
COOL_HUE = 250.0


@dataclass(frozen=True)
class GeneratedState:
    neutrals: tuple[Swatch, ...]
    palettes: tuple[tuple[Swatch, ...], ...]
    contrast_low: Swatch
    contrast_high: Swatch
    palette_names: tuple[str, ...]
    steps: tuple[int, ...]

    def neutrals_hex(self) -> list[str]:
        return [s.hex for s in self.neutrals]

    def palettes_hex(self) -> list[list[str]]:
        return [[s.hex for s in ramp] for ramp in self.palettes]

    def to_dict(self, display_space: Optional[str] = None, gamut: str = "srgb") -> dict[str, Any]:
        data: dict[str, Any] = {
            "neutrals": self.neutrals_hex(),
            "palettes": self.palettes_hex(),
            "contrastLow": self.contrast_low.hex,
            "contrastHigh": self.contrast_high.hex,
            "paletteNames": list(self.palette_names),
            "steps": list(self.steps),
        }
        if display_space:
            data["display"] = {
                "neutrals": [css_display(s, display_space, gamut) for s in self.neutrals],
                "palettes": [[css_display(s, display_space, gamut) for s in ramp]
                             for ramp in self.palettes],
            }
        return data


# ─────────────────────────────────────────────────────────────────────────────
# Lightness profile
# ─────────────────────────────────────────────────────────────────────────────

def step_labels(num_colors: int) -> list[int]:
    """0..100 step labels; 0, 10, ..., 100 for an 11-color ramp."""
    if num_colors <= 1:
        return [0] * max(num_colors, 0)
    return [int(math.floor(i * 100 / (num_colors - 1) + 0.5)) for i in range(num_colors)]


def _position(index: int, num_colors: int) -> float:
    if num_colors <= 1:
        return 0.0
    return index / (num_colors - 1)


def _is_endpoint(index: int, num_colors: int) -> bool:
    return index == 0 or index == num_colors - 1


def _endpoint(index: int, params: ColorParams) -> Swatch:
    lightest_first = params.theme != "dark"
    if index == 0:
        return WHITE if lightest_first else BLACK
    return BLACK if lightest_first else WHITE


def lightness_profile(params: ColorParams) -> list[float]:
    """OKLCH lightness per step, nudgers applied, endpoints pinned to 1.0/0.0."""
    n = params.num_colors
    profile: list[float] = []
    for i in range(n):
        if _is_endpoint(i, n):
            profile.append(_endpoint(i, params).l)
            continue
        eased = ease(_position(i, n), *params.bezier)
        lightness = eased if params.theme == "dark" else 1.0 - eased
        lightness += params.lightness_nudger(i)
        profile.append(min(1.0, max(0.0, lightness)))
    return profile


# ─────────────────────────────────────────────────────────────────────────────
# Neutral ramp
# ─────────────────────────────────────────────────────────────────────────────

def warmth_tint(lightness: float, warmth: float) -> tuple[float, float]:
    """(chroma, hue) of the warmth tint, fading to 0 at white and black."""
    if warmth == 0:
        return 0.0, 0.0
    taper = 4.0 * lightness * (1.0 - lightness)
    hue = WARM_HUE if warmth > 0 else COOL_HUE
    return abs(warmth) * WARMTH_CHROMA_PER_UNIT * taper, hue


def generate_neutrals(params: ColorParams) -> list[Swatch]:
    n = params.num_colors
    neutrals: list[Swatch] = []
    for i, lightness in enumerate(lightness_profile(params)):
        if _is_endpoint(i, n):
            neutrals.append(_endpoint(i, params))
            continue
        chroma, hue = warmth_tint(lightness, params.warmth)
        l, c, h = clamp_to_gamut(lightness, chroma, hue, params.gamut)
        neutrals.append(Swatch(l, c, h))
    return neutrals


# ─────────────────────────────────────────────────────────────────────────────
# Hue ramps
# ─────────────────────────────────────────────────────────────────────────────

def palette_hue_offsets(num_palettes: int) -> list[float]:
    """Evenly spaced rotations around the hue wheel, starting at the base hue."""
    if num_palettes <= 0:
        return []
    return [360.0 * i / num_palettes for i in range(num_palettes)]


def relative_saturation(base: Swatch, gamut: str) -> float:
    """Base chroma as a fraction of the most the gamut allows at its L and H."""
    limit = max_chroma_in_gamut(base.l, base.h, gamut)
    if limit <= 0.0:
        return 0.0
    return min(1.0, base.c / limit)


def _base_swatch(params: ColorParams) -> Swatch:
    try:
        return parse_color(params.base_color)
    except ValueError:
        logger.warning(f"Base color {params.base_color!r} unreadable, using default")
        return parse_color(ColorParams().base_color)


def generate_palette(
    params: ColorParams,
    hue_offset: float,
    palette_index: Optional[int] = None,
) -> list[Swatch]:
    """
    One hue ramp: constant hue, the shared lightness profile, and chroma
    following the gamut boundary scaled by the base color's saturation and
    the chroma multiplier.
    """
    base = _base_swatch(params)
    nudge = params.hue_nudger(palette_index) if palette_index is not None else 0.0
    hue = (base.h + hue_offset + nudge) % 360.0
    saturation = relative_saturation(base, params.gamut) * max(0.0, params.chroma_multiplier)

    n = params.num_colors
    ramp: list[Swatch] = []
    for i, lightness in enumerate(lightness_profile(params)):
        if _is_endpoint(i, n):
            ramp.append(_endpoint(i, params))
            continue
        chroma = saturation * max_chroma_in_gamut(lightness, hue, params.gamut)
        l, c, h = clamp_to_gamut(lightness, chroma, hue, params.gamut)
        ramp.append(Swatch(l, c, h))
    return ramp


def generate_palettes(params: ColorParams) -> list[list[Swatch]]:
    return [
        generate_palette(params, offset, palette_index=p)
        for p, offset in enumerate(palette_hue_offsets(params.num_palettes))
    ]


# ─────────────────────────────────────────────────────────────────────────────
# Pipeline
# ─────────────────────────────────────────────────────────────────────────────

def generate(params: ColorParams | dict | None = None) -> GeneratedState:
    """Build the full state bundle from scratch for one parameter record."""
    if not isinstance(params, ColorParams):
        params = coerce_params(params)

    neutrals = generate_neutrals(params)
    palettes = generate_palettes(params)
    low, high = params.contrast.resolve(neutrals)
    names = [palette_name(ramp) for ramp in palettes]

    logger.debug(
        f"Generated {len(neutrals)} neutrals and {len(palettes)} palettes "
        f"(theme={params.theme}, gamut={params.gamut})")

    return GeneratedState(
        neutrals=tuple(neutrals),
        palettes=tuple(tuple(ramp) for ramp in palettes),
        contrast_low=low,
        contrast_high=high,
        palette_names=tuple(names),
        steps=tuple(step_labels(params.num_colors)),
    )


def swatch_contrast(
    state: GeneratedState,
    algorithm: ContrastAlgorithm | str = ContrastAlgorithm.WCAG21,
) -> dict[str, Any]:
    """
    Printable contrast of every swatch (as background) against the low and
    high reference colors (as foreground).
    """
    def _pair(swatch: Swatch) -> dict[str, float]:
        return {
            "low": printable_contrast(swatch, state.contrast_low, algorithm),
            "high": printable_contrast(swatch, state.contrast_high, algorithm),
        }

    return {
        "algorithm": ContrastAlgorithm(algorithm).value,
        "neutrals": [_pair(s) for s in state.neutrals],
        "palettes": [[_pair(s) for s in ramp] for ramp in state.palettes],
    }
