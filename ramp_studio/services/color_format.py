"""
Color Format — the engine's color value (Swatch) and its renderings.

A Swatch is an OKLCH triple. Hex/RGB/HSL renderings are sRGB; a swatch built
for a wider gamut is chroma-reduced into sRGB first, keeping lightness and hue.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from coloraide import Color

from .gamut import clamp_to_gamut, gamut_space

DISPLAY_SPACES = ("hex", "rgb", "hsl", "oklch")
ACHROMATIC_CHROMA = 1e-6
ACHROMATIC_RGB = 1e-7


def _fmt(value: float, digits: int) -> str:
    """Fixed-point number without trailing zeros ('-0' collapses to '0')."""
    text = f"{value:.{digits}f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _unit(v: float) -> float:
    return 0.0 if v < 0.0 else 1.0 if v > 1.0 else v


@dataclass(frozen=True)
class Swatch:
    l: float
    c: float
    h: float

    @classmethod
    def from_color(cls, color: Color) -> "Swatch":
        ok = color.convert("oklch")
        l, c, h = ok[0], ok[1], ok[2]
        if math.isnan(c) or c < ACHROMATIC_CHROMA:
            c = 0.0
        # Grays come back with NaN or noise hue
        if math.isnan(h) or c == 0.0:
            h = 0.0
        return cls(l=float(l), c=max(0.0, float(c)), h=float(h) % 360.0)

    def to_color(self) -> Color:
        return Color("oklch", [self.l, self.c, self.h])

    def srgb(self) -> tuple[float, float, float]:
        """sRGB channels in [0, 1] after chroma reduction into sRGB."""
        l, c, h = clamp_to_gamut(_unit(self.l), self.c, self.h, "srgb")
        rgb = Color("oklch", [l, c, h]).convert("srgb")
        return _unit(rgb[0]), _unit(rgb[1]), _unit(rgb[2])

    def rgb(self) -> tuple[int, int, int]:
        r, g, b = self.srgb()
        return (int(math.floor(r * 255 + 0.5)),
                int(math.floor(g * 255 + 0.5)),
                int(math.floor(b * 255 + 0.5)))

    @property
    def hex(self) -> str:
        r, g, b = self.rgb()
        return f"#{r:02x}{g:02x}{b:02x}"

    def hsl(self) -> tuple[float, float, float]:
        """(hue degrees, saturation %, lightness %)."""
        r, g, b = self.srgb()
        hi, lo = max(r, g, b), min(r, g, b)
        # Round-trip noise on grays would otherwise read as full saturation
        if hi - lo < ACHROMATIC_RGB:
            return 0.0, 0.0, (hi + lo) * 50.0
        hsl = Color("srgb", [r, g, b]).convert("hsl")
        h, s, lightness = hsl[0], hsl[1], hsl[2]
        if math.isnan(h):
            h = 0.0
        return h % 360.0, s * 100.0, lightness * 100.0

    def oklch(self) -> tuple[float, float, float]:
        return self.l, self.c, self.h


WHITE = Swatch(1.0, 0.0, 0.0)
BLACK = Swatch(0.0, 0.0, 0.0)


def parse_color(value: str | Swatch) -> Swatch:
    """Parse any CSS color string; raises ValueError when it cannot be read."""
    if isinstance(value, Swatch):
        return value
    text = str(value).strip()
    if text and text[0] != "#" and len(text) in (3, 6) and all(
            ch in "0123456789abcdefABCDEF" for ch in text):
        text = "#" + text
    try:
        color = Color(text)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Unrecognized color {value!r}") from e
    return Swatch.from_color(color)


def try_parse_color(value: str | Swatch | None, default: Swatch) -> Swatch:
    if value is None:
        return default
    try:
        return parse_color(value)
    except ValueError:
        return default


# ─────────────────────────────────────────────────────────────────────────────
# CSS renderings
# ─────────────────────────────────────────────────────────────────────────────

def css_hex(swatch: Swatch) -> str:
    return swatch.hex


def css_rgb(swatch: Swatch) -> str:
    r, g, b = swatch.srgb()
    return f"rgb({_fmt(r * 100, 2)}% {_fmt(g * 100, 2)}% {_fmt(b * 100, 2)}%)"


def css_hsl(swatch: Swatch) -> str:
    h, s, lightness = swatch.hsl()
    return f"hsl({_fmt(h, 2)} {_fmt(s, 2)}% {_fmt(lightness, 2)}%)"


def css_oklch(swatch: Swatch) -> str:
    return f"oklch({_fmt(swatch.l * 100, 2)}% {_fmt(swatch.c, 3)} {_fmt(swatch.h, 2)})"


def _css_wide(swatch: Swatch, gamut: str, label: str) -> str:
    space = gamut_space(gamut)
    l, c, h = clamp_to_gamut(_unit(swatch.l), swatch.c, swatch.h, gamut)
    wide = Color("oklch", [l, c, h]).convert(space)
    channels = " ".join(_fmt(_unit(wide[i]), 4) for i in range(3))
    return f"color({label} {channels})"


def css_p3(swatch: Swatch) -> str:
    return _css_wide(swatch, "p3", "display-p3")


def css_rec2020(swatch: Swatch) -> str:
    return _css_wide(swatch, "rec2020", "rec2020")


def css_display(swatch: Swatch, space: str = "hex", gamut: str = "srgb") -> str:
    """
    Render for display. OKLCH is gamut independent; the other spaces fall
    back to color(display-p3 ...) / color(rec2020 ...) for wide gamuts since
    hex, rgb() and hsl() cannot express them.
    """
    if space == "oklch":
        return css_oklch(swatch)
    if gamut == "p3":
        return css_p3(swatch)
    if gamut == "rec2020":
        return css_rec2020(swatch)
    if space == "rgb":
        return css_rgb(swatch)
    if space == "hsl":
        return css_hsl(swatch)
    return css_hex(swatch)
