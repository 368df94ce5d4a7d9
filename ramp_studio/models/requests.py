from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, Optional


class GenerateRequest(BaseModel):
    """Flat parameter record; omitted fields fall back to the theme preset."""
    model_config = ConfigDict(populate_by_name=True)

    num_colors: Optional[int] = Field(default=None, alias="numColors")
    num_palettes: Optional[int] = Field(default=None, alias="numPalettes")
    base_color: Optional[str] = Field(default=None, alias="baseColor")
    warmth: Optional[float] = None
    x1: Optional[float] = None
    y1: Optional[float] = None
    x2: Optional[float] = None
    y2: Optional[float] = None
    chroma_multiplier: Optional[float] = Field(default=None, alias="chromaMultiplier")
    theme: Optional[str] = None
    lightness_nudgers: Optional[list[float]] = Field(default=None, alias="lightnessNudgers")
    hue_nudgers: Optional[list[float]] = Field(default=None, alias="hueNudgers")
    contrast_mode: Optional[str] = Field(default=None, alias="contrastMode")
    low_step: Optional[int] = Field(default=None, alias="lowStep")
    high_step: Optional[int] = Field(default=None, alias="highStep")
    manual_low: Optional[str] = Field(default=None, alias="manualLow")
    manual_high: Optional[str] = Field(default=None, alias="manualHigh")
    gamut_space: Optional[str] = Field(default=None, alias="gamutSpace")
    contrast_algorithm: Optional[str] = Field(default=None, alias="contrastAlgorithm")

    # Response shaping, not engine input
    display_space: Optional[Literal["hex", "rgb", "hsl", "oklch"]] = Field(
        default=None, alias="displaySpace")
    include_contrast: bool = Field(default=False, alias="includeContrast")

    def to_record(self) -> dict:
        return self.model_dump(
            by_alias=True,
            exclude_none=True,
            exclude={"display_space", "include_contrast"},
        )


class ContrastRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    background: str
    foreground: str
    algorithm: Literal["WCAG21", "APCA"] = "WCAG21"


class NameRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    color: Optional[str] = None
    ramp: Optional[list[str]] = None
    reference_step: Optional[int] = Field(default=None, alias="referenceStep")
