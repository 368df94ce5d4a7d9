"""
Gamut Clamp — chroma reduction of OKLCH colors into an RGB gamut.

Lightness and hue are preserved; only chroma moves. The search assumes that,
at fixed lightness and hue, raising chroma never re-enters the gamut once it
has left it. OKLCH behaves that way for the gamuts used here.
"""
from __future__ import annotations

import math
from functools import lru_cache

from coloraide import Color

# Public gamut names → coloraide color spaces
GAMUT_SPACES: dict[str, str] = {
    "srgb": "srgb",
    "p3": "display-p3",
    "rec2020": "rec2020",
}
DEFAULT_GAMUT = "srgb"

# Upper bound for the max-chroma search; Rec.2020 peaks around 0.37.
MAX_CHROMA_SEARCH = 0.5
SEARCH_ITERATIONS = 24


def gamut_space(gamut: str) -> str:
    """Map a gamut name to its coloraide space, falling back to sRGB."""
    return GAMUT_SPACES.get(gamut, GAMUT_SPACES[DEFAULT_GAMUT])


def in_gamut(l: float, c: float, h: float, gamut: str = DEFAULT_GAMUT) -> bool:
    if l < 0.0 or l > 1.0:
        return False
    return Color("oklch", [l, c, h]).in_gamut(gamut_space(gamut))


def clamp_to_gamut(
    l: float, c: float, h: float, gamut: str = DEFAULT_GAMUT,
) -> tuple[float, float, float]:
    """
    Return (l, c', h) with the largest c' <= c that is displayable in gamut.

    Falls back to chroma 0 when no in-gamut chroma exists at this lightness.
    """
    c = max(0.0, c)
    if math.isnan(h):
        h = 0.0
    if in_gamut(l, c, h, gamut):
        return l, c, h
    if not in_gamut(l, 0.0, h, gamut):
        return l, 0.0, h

    lo, hi = 0.0, c
    for _ in range(SEARCH_ITERATIONS):
        mid = 0.5 * (lo + hi)
        if in_gamut(l, mid, h, gamut):
            lo = mid
        else:
            hi = mid
    return l, lo, h


@lru_cache(maxsize=16384)
def _max_chroma_cached(l: float, h: float, space: str) -> float:
    hi = MAX_CHROMA_SEARCH
    if Color("oklch", [l, hi, h]).in_gamut(space):
        return hi
    lo = 0.0
    for _ in range(SEARCH_ITERATIONS):
        mid = 0.5 * (lo + hi)
        if Color("oklch", [l, mid, h]).in_gamut(space):
            lo = mid
        else:
            hi = mid
    return lo


def max_chroma_in_gamut(l: float, h: float, gamut: str = DEFAULT_GAMUT) -> float:
    """Largest OKLCH chroma at lightness l and hue h that fits the gamut."""
    if l <= 0.0 or l >= 1.0:
        return 0.0
    if math.isnan(h):
        h = 0.0
    return _max_chroma_cached(float(l), float(h) % 360.0, gamut_space(gamut))
