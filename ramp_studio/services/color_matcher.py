"""
Color Matcher — maps arbitrary colors to entries of a named-color dictionary.

Uses CIEDE2000 color difference for perceptually accurate matching. The
dictionary is a versioned data asset (JSON), not part of the algorithm.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Sequence

from coloraide import Color

from .color_format import Swatch, parse_color

logger = logging.getLogger(__name__)

DATA_PATH = Path(os.environ.get(
    "RAMP_STUDIO_NAMED_COLORS",
    Path(__file__).parent.parent / "data" / "css_named_colors.json",
))
UNNAMED = "Unnamed"


def _color_distance(a: Color, b: Color) -> float:
    """CIEDE2000 difference between two colors."""
    return float(a.delta_e(b, method="2000"))


class NamedColorMatcher:
    def __init__(self, data_path: Path | None = None) -> None:
        self._data_path = Path(data_path) if data_path is not None else DATA_PATH
        self._entries: list[dict] = []
        self._colors: list[Color] = []
        self._version = ""
        self._loaded = False

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        if self._data_path.exists():
            data = json.loads(self._data_path.read_text(encoding="utf-8"))
            self._version = str(data.get("version", ""))
            entries = data.get("colors", [])
        else:
            logger.warning(
                f"Named color dictionary not found at {self._data_path}, using built-in set")
            self._version = "builtin"
            entries = _builtin_dictionary()

        for entry in entries:
            try:
                color = Color(entry["hex"])
            except (KeyError, ValueError) as e:
                logger.warning(f"Skipping named color entry {entry!r}: {e}")
                continue
            self._entries.append({"name": entry["name"], "hex": entry["hex"]})
            self._colors.append(color)
        self._loaded = True

    @property
    def version(self) -> str:
        self._ensure_loaded()
        return self._version

    def match(self, color: str | Swatch) -> dict:
        """Return the closest dictionary entry {name, hex}; first entry wins ties."""
        self._ensure_loaded()
        if not self._entries:
            return {"name": UNNAMED, "hex": ""}
        target = parse_color(color).to_color()
        best_index = 0
        best_distance = float("inf")
        for i, candidate in enumerate(self._colors):
            d = _color_distance(target, candidate)
            if d < best_distance:
                best_index, best_distance = i, d
        return self._entries[best_index]

    def name_of(self, color: str | Swatch) -> str:
        try:
            return self.match(color)["name"]
        except ValueError as e:
            logger.warning(f"Cannot name color: {e}")
            return UNNAMED

    def dictionary(self) -> list[dict]:
        self._ensure_loaded()
        return list(self._entries)


def representative_step(ramp: Sequence[Swatch]) -> int:
    """
    Index of the most chromatic step (lowest index on ties). Endpoints of a
    generated ramp are pure white/black, so this lands in the midtones.
    Falls back to the 60% position for an achromatic ramp.
    """
    best, best_chroma = -1, 0.0
    for i, swatch in enumerate(ramp):
        if swatch.c > best_chroma + 1e-12:
            best, best_chroma = i, swatch.c
    if best < 0:
        return min(round(len(ramp) * 0.6), len(ramp) - 1)
    return best


def palette_name(
    ramp: Sequence[str | Swatch],
    reference_step: Optional[int] = None,
    matcher: NamedColorMatcher | None = None,
) -> str:
    """Name a ramp after the nearest named color of a representative step."""
    if not ramp:
        return UNNAMED
    matcher = matcher or _matcher
    try:
        swatches = [parse_color(c) for c in ramp]
    except ValueError as e:
        logger.warning(f"Cannot name palette: {e}")
        return UNNAMED

    if reference_step is None:
        index = representative_step(swatches)
    else:
        index = max(0, min(len(swatches) - 1, int(reference_step)))
    return matcher.name_of(swatches[index])


_matcher = NamedColorMatcher()


def name_of(color: str | Swatch) -> str:
    return _matcher.name_of(color)


def match_named(color: str | Swatch) -> dict:
    return _matcher.match(color)


def get_dictionary() -> list[dict]:
    return _matcher.dictionary()


def dictionary_version() -> str:
    return _matcher.version


def _builtin_dictionary() -> list[dict]:
    """Small fallback dictionary when the JSON file is missing."""
    return [
        {"name": "white", "hex": "#ffffff"},
        {"name": "black", "hex": "#000000"},
        {"name": "gray", "hex": "#808080"},
        {"name": "silver", "hex": "#c0c0c0"},
        {"name": "red", "hex": "#ff0000"},
        {"name": "maroon", "hex": "#800000"},
        {"name": "orange", "hex": "#ffa500"},
        {"name": "gold", "hex": "#ffd700"},
        {"name": "yellow", "hex": "#ffff00"},
        {"name": "olive", "hex": "#808000"},
        {"name": "lime", "hex": "#00ff00"},
        {"name": "green", "hex": "#008000"},
        {"name": "teal", "hex": "#008080"},
        {"name": "turquoise", "hex": "#40e0d0"},
        {"name": "skyblue", "hex": "#87ceeb"},
        {"name": "blue", "hex": "#0000ff"},
        {"name": "navy", "hex": "#000080"},
        {"name": "royalblue", "hex": "#4169e1"},
        {"name": "purple", "hex": "#800080"},
        {"name": "orchid", "hex": "#da70d6"},
        {"name": "pink", "hex": "#ffc0cb"},
        {"name": "brown", "hex": "#a52a2a"},
    ]
