"""
Contrast Evaluator — WCAG 2.1 luminance ratio and APCA lightness contrast.

Call order everywhere in this module is (background, foreground), except
apca_contrast() which follows the APCA reference signature (text, background).
"""
from __future__ import annotations

import logging
import math
from enum import Enum

import numpy as np
from coloraide import Color

from .color_format import BLACK, WHITE, Swatch, parse_color

logger = logging.getLogger(__name__)


class ContrastAlgorithm(str, Enum):
    WCAG21 = "WCAG21"
    APCA = "APCA"


# APCA-W3 0.0.98G-4g constants
APCA_MAIN_TRC = 2.4
APCA_COEFFS = np.array([0.2126729, 0.7151522, 0.0721750])
APCA_NORM_BG = 0.56
APCA_NORM_TXT = 0.57
APCA_REV_TXT = 0.62
APCA_REV_BG = 0.65
APCA_BLK_THRS = 0.022
APCA_BLK_CLMP = 1.414
APCA_SCALE_BOW = 1.14
APCA_SCALE_WOB = 1.14
APCA_LO_BOW_OFFSET = 0.027
APCA_LO_WOB_OFFSET = 0.027
APCA_DELTA_Y_MIN = 0.0005
APCA_LO_CLIP = 0.1

WCAG_MIN = 1.0
WCAG_MAX = 21.0


def _swatch(value: str | Swatch) -> Swatch | None:
    try:
        return parse_color(value)
    except ValueError:
        logger.warning(f"Contrast requested for unreadable color {value!r}")
        return None


def relative_luminance(color: str | Swatch) -> float:
    """WCAG relative luminance of the sRGB rendition (0 for unreadable input)."""
    swatch = _swatch(color)
    if swatch is None:
        return 0.0
    return float(_display_color(swatch).luminance())


def wcag21_contrast(a: str | Swatch, b: str | Swatch) -> float:
    """Luminance ratio in [1, 21]; symmetric in its arguments."""
    sa, sb = _swatch(a), _swatch(b)
    if sa is None or sb is None:
        return WCAG_MIN
    ratio = float(_display_color(sa).contrast(_display_color(sb), method="wcag21"))
    return min(WCAG_MAX, max(WCAG_MIN, ratio))


def _display_color(swatch: Swatch) -> Color:
    # Contrast is measured on what is displayed: the 8-bit sRGB rendition.
    r, g, b = swatch.rgb()
    return Color("srgb", [r / 255.0, g / 255.0, b / 255.0])


def _apca_y(swatch: Swatch) -> float:
    rgb = np.array(swatch.rgb(), dtype=float) / 255.0
    y = float(np.dot(APCA_COEFFS, np.power(rgb, APCA_MAIN_TRC)))
    if y < APCA_BLK_THRS:
        y += (APCA_BLK_THRS - y) ** APCA_BLK_CLMP
    return y


def apca_contrast(text: str | Swatch, background: str | Swatch) -> float:
    """
    Signed APCA Lc. Positive for dark text on a light background, negative
    for light text on a dark background; 0 when the difference is too small.
    """
    st, sb = _swatch(text), _swatch(background)
    if st is None or sb is None:
        return 0.0
    y_txt = _apca_y(st)
    y_bg = _apca_y(sb)
    if abs(y_bg - y_txt) < APCA_DELTA_Y_MIN:
        return 0.0

    if y_bg > y_txt:
        sapc = (y_bg ** APCA_NORM_BG - y_txt ** APCA_NORM_TXT) * APCA_SCALE_BOW
        out = 0.0 if sapc < APCA_LO_CLIP else sapc - APCA_LO_BOW_OFFSET
    else:
        sapc = (y_bg ** APCA_REV_BG - y_txt ** APCA_REV_TXT) * APCA_SCALE_WOB
        out = 0.0 if sapc > -APCA_LO_CLIP else sapc + APCA_LO_WOB_OFFSET
    return out * 100.0


def contrast(
    background: str | Swatch,
    foreground: str | Swatch,
    algorithm: ContrastAlgorithm | str = ContrastAlgorithm.WCAG21,
) -> float:
    algorithm = ContrastAlgorithm(algorithm)
    if algorithm is ContrastAlgorithm.APCA:
        return apca_contrast(foreground, background)
    return wcag21_contrast(background, foreground)


def printable_contrast(
    background: str | Swatch,
    foreground: str | Swatch,
    algorithm: ContrastAlgorithm | str = ContrastAlgorithm.WCAG21,
) -> float:
    """WCAG ratio truncated to 2 decimals; APCA Lc rounded to a whole number."""
    value = contrast(background, foreground, algorithm)
    if ContrastAlgorithm(algorithm) is ContrastAlgorithm.APCA:
        return float(round(value))
    return math.trunc(100 * value + 1e-9) / 100


def readable_text_color(background: str | Swatch) -> Swatch:
    """Black text on light backgrounds, white text on dark ones."""
    return BLACK if relative_luminance(background) > 0.5 else WHITE
