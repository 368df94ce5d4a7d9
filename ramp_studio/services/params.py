"""
Params — the immutable parameter record fed to the ramp engine.

coerce_params() is the boundary: partial or out-of-range input from the UI
is clamped or replaced by preset defaults, never rejected.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Literal, Mapping, Sequence

from .color_format import parse_color
from .contrast import ContrastAlgorithm
from .contrast_reference import ContrastReference
from .gamut import GAMUT_SPACES

logger = logging.getLogger(__name__)

Theme = Literal["light", "dark"]

MAX_COLORS = 100
MAX_PALETTES = 100
WARMTH_BOUNDS = (-20.0, 20.0)
LIGHTNESS_NUDGER_BOUNDS = (-0.5, 0.5)
HUE_NUDGER_BOUNDS = (-180.0, 180.0)

CHROMA_MULTIPLIER_MIN = 0.0
CHROMA_MULTIPLIER_MAX_BY_GAMUT: dict[str, float] = {
    "srgb": 1.3,
    "p3": 1.6,
    "rec2020": 1.7,
}

THEME_PRESETS: dict[str, dict[str, Any]] = {
    "light": {
        "numColors": 11,
        "numPalettes": 11,
        "baseColor": "#1862E6",
        "warmth": -7,
        "x1": 0.16,
        "y1": 0.0,
        "x2": 0.28,
        "y2": 0.38,
        "chromaMultiplier": 1.14,
        "theme": "light",
        "contrastMode": "auto",
        "lowStep": 0,
        "highStep": 10,
        "manualLow": "#ffffff",
        "manualHigh": "#000000",
        "lightnessNudgers": [],
        "hueNudgers": [],
        "gamutSpace": "srgb",
        "contrastAlgorithm": "WCAG21",
    },
    "dark": {
        "numColors": 11,
        "numPalettes": 11,
        "baseColor": "#1862E6",
        "warmth": -7,
        "x1": 0.45,
        "y1": 0.08,
        "x2": 0.77,
        "y2": 0.96,
        "chromaMultiplier": 0.83,
        "theme": "dark",
        "contrastMode": "auto",
        "lowStep": 2,
        "highStep": 10,
        "manualLow": "#071531",
        "manualHigh": "#ffffff",
        "lightnessNudgers": [],
        "hueNudgers": [],
        "gamutSpace": "srgb",
        "contrastAlgorithm": "WCAG21",
    },
}


def chroma_multiplier_bounds(gamut: str = "srgb") -> tuple[float, float]:
    return (CHROMA_MULTIPLIER_MIN,
            CHROMA_MULTIPLIER_MAX_BY_GAMUT.get(gamut, CHROMA_MULTIPLIER_MAX_BY_GAMUT["srgb"]))


def clamp_chroma_multiplier(value: float, gamut: str = "srgb") -> float:
    lo, hi = chroma_multiplier_bounds(gamut)
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        return lo
    return max(lo, min(hi, float(value)))


def clamp_nudgers(values: Sequence[Any] | None, length: int,
                  bounds: tuple[float, float]) -> tuple[float, ...]:
    """Pad/truncate to length; clamp each entry; non-numbers become 0."""
    if values is not None and not isinstance(values, (list, tuple)):
        logger.warning(f"Nudgers {values!r} are not a list, using zeros")
        values = None
    values = list(values or [])
    return tuple(
        _clamp_nudger(values[i] if i < len(values) else 0.0, bounds)
        for i in range(length)
    )


def _clamp_nudger(value: Any, bounds: tuple[float, float]) -> float:
    lo, hi = bounds
    if not isinstance(value, (int, float)) or isinstance(value, bool) or not math.isfinite(value):
        return 0.0
    return max(lo, min(hi, float(value)))


@dataclass(frozen=True)
class ColorParams:
    num_colors: int = 11
    num_palettes: int = 11
    base_color: str = "#1862e6"
    warmth: float = -7.0
    x1: float = 0.16
    y1: float = 0.0
    x2: float = 0.28
    y2: float = 0.38
    chroma_multiplier: float = 1.14
    theme: Theme = "light"
    lightness_nudgers: tuple[float, ...] = ()
    hue_nudgers: tuple[float, ...] = ()
    gamut: str = "srgb"
    contrast_algorithm: ContrastAlgorithm = ContrastAlgorithm.WCAG21
    contrast: ContrastReference = field(default_factory=ContrastReference)

    @property
    def bezier(self) -> tuple[float, float, float, float]:
        return self.x1, self.y1, self.x2, self.y2

    def lightness_nudger(self, index: int) -> float:
        if 0 <= index < len(self.lightness_nudgers):
            return _clamp_nudger(self.lightness_nudgers[index], LIGHTNESS_NUDGER_BOUNDS)
        return 0.0

    def hue_nudger(self, index: int) -> float:
        if 0 <= index < len(self.hue_nudgers):
            return _clamp_nudger(self.hue_nudgers[index], HUE_NUDGER_BOUNDS)
        return 0.0

    def with_lightness_nudger(self, index: int, value: float) -> "ColorParams":
        nudgers = list(clamp_nudgers(self.lightness_nudgers, self.num_colors,
                                     LIGHTNESS_NUDGER_BOUNDS))
        if 0 <= index < len(nudgers):
            nudgers[index] = value
        return replace(self, lightness_nudgers=clamp_nudgers(
            nudgers, self.num_colors, LIGHTNESS_NUDGER_BOUNDS))

    def with_hue_nudger(self, index: int, value: float) -> "ColorParams":
        nudgers = list(clamp_nudgers(self.hue_nudgers, self.num_palettes, HUE_NUDGER_BOUNDS))
        if 0 <= index < len(nudgers):
            nudgers[index] = value
        return replace(self, hue_nudgers=clamp_nudgers(
            nudgers, self.num_palettes, HUE_NUDGER_BOUNDS))

    def to_record(self) -> dict[str, Any]:
        """Flat camelCase record, the shape coerce_params() accepts."""
        return {
            "numColors": self.num_colors,
            "numPalettes": self.num_palettes,
            "baseColor": self.base_color,
            "warmth": self.warmth,
            "x1": self.x1,
            "y1": self.y1,
            "x2": self.x2,
            "y2": self.y2,
            "chromaMultiplier": self.chroma_multiplier,
            "theme": self.theme,
            "lightnessNudgers": list(self.lightness_nudgers),
            "hueNudgers": list(self.hue_nudgers),
            "gamutSpace": self.gamut,
            "contrastAlgorithm": self.contrast_algorithm.value,
            "contrastMode": self.contrast.mode,
            "lowStep": self.contrast.low_step,
            "highStep": self.contrast.high_step,
            "manualLow": self.contrast.manual_low,
            "manualHigh": self.contrast.manual_high,
        }


# ─────────────────────────────────────────────────────────────────────────────
# Boundary coercion
# ─────────────────────────────────────────────────────────────────────────────

def _number(raw: Mapping[str, Any], key: str, default: float) -> float:
    value = raw.get(key)
    if value is None:
        return float(default)
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Param {key}={value!r} is not a number, using {default}")
        return float(default)
    if not math.isfinite(number):
        logger.warning(f"Param {key}={value!r} is not finite, using {default}")
        return float(default)
    return number


def _clamped(key: str, value: float, lo: float, hi: float) -> float:
    clamped = max(lo, min(hi, value))
    if clamped != value:
        logger.warning(f"Param {key}={value} clamped to {clamped}")
    return clamped


def preset(theme: str = "light") -> dict[str, Any]:
    base = THEME_PRESETS.get(theme, THEME_PRESETS["light"])
    return {k: (list(v) if isinstance(v, list) else v) for k, v in base.items()}


def coerce_params(raw: Mapping[str, Any] | None = None) -> ColorParams:
    """
    Build ColorParams from a flat camelCase record. Missing fields come from
    the preset of the requested theme; out-of-range values are clamped.
    """
    raw = dict(raw or {})
    theme = raw.get("theme")
    if theme not in ("light", "dark"):
        if theme is not None:
            logger.warning(f"Unknown theme {theme!r}, using 'light'")
        theme = "light"
    defaults = THEME_PRESETS[theme]

    num_colors = int(_clamped("numColors", round(_number(raw, "numColors", defaults["numColors"])),
                              1, MAX_COLORS))
    num_palettes = int(_clamped("numPalettes",
                                round(_number(raw, "numPalettes", defaults["numPalettes"])),
                                0, MAX_PALETTES))

    base_raw = raw.get("baseColor", defaults["baseColor"])
    try:
        base_color = parse_color(base_raw).hex
    except ValueError:
        logger.warning(f"Base color {base_raw!r} unreadable, using {defaults['baseColor']}")
        base_color = parse_color(defaults["baseColor"]).hex

    gamut = raw.get("gamutSpace", defaults["gamutSpace"])
    if not isinstance(gamut, str) or gamut not in GAMUT_SPACES:
        logger.warning(f"Unknown gamut {gamut!r}, using 'srgb'")
        gamut = "srgb"

    algorithm_raw = raw.get("contrastAlgorithm", defaults["contrastAlgorithm"])
    try:
        algorithm = ContrastAlgorithm(algorithm_raw)
    except ValueError:
        logger.warning(f"Unknown contrast algorithm {algorithm_raw!r}, using WCAG21")
        algorithm = ContrastAlgorithm.WCAG21

    chroma_multiplier = clamp_chroma_multiplier(
        _number(raw, "chromaMultiplier", defaults["chromaMultiplier"]), gamut)

    bezier = [
        _clamped(key, _number(raw, key, defaults[key]), 0.0, 1.0)
        for key in ("x1", "y1", "x2", "y2")
    ]

    contrast = ContrastReference(
        mode="auto",
        low_step=int(round(_number(raw, "lowStep", defaults["lowStep"]))),
        high_step=int(round(_number(raw, "highStep", defaults["highStep"]))),
        manual_low=str(raw.get("manualLow") or defaults["manualLow"]),
        manual_high=str(raw.get("manualHigh") or defaults["manualHigh"]),
    ).with_mode(raw.get("contrastMode", defaults["contrastMode"])).clamped(num_colors)

    return ColorParams(
        num_colors=num_colors,
        num_palettes=num_palettes,
        base_color=base_color,
        warmth=_clamped("warmth", _number(raw, "warmth", defaults["warmth"]), *WARMTH_BOUNDS),
        x1=bezier[0],
        y1=bezier[1],
        x2=bezier[2],
        y2=bezier[3],
        chroma_multiplier=chroma_multiplier,
        theme=theme,
        lightness_nudgers=clamp_nudgers(raw.get("lightnessNudgers"), num_colors,
                                        LIGHTNESS_NUDGER_BOUNDS),
        hue_nudgers=clamp_nudgers(raw.get("hueNudgers"), num_palettes, HUE_NUDGER_BOUNDS),
        gamut=gamut,
        contrast_algorithm=algorithm,
        contrast=contrast,
    )
