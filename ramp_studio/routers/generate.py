"""POST /api/generate — parameter record → neutral + hue ramps."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from ..models.requests import GenerateRequest
from ..services import params as color_params
from ..services import ramp_engine

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


@router.post("/generate")
async def generate_ramps(req: GenerateRequest) -> dict[str, Any]:
    """
    Generate the full palette state for one parameter record.

    Flow:
      1. Coerce the record (clamp ranges, fill preset defaults)
      2. Build neutral ramp + hue ramps
      3. Resolve contrast references, name the palettes
      4. Optionally render display strings and per-swatch contrast
    """
    params = color_params.coerce_params(req.to_record())
    state = ramp_engine.generate(params)

    result = state.to_dict(display_space=req.display_space, gamut=params.gamut)
    if req.include_contrast:
        result["contrast"] = ramp_engine.swatch_contrast(state, params.contrast_algorithm)
    result["params"] = params.to_record()
    return result


@router.get("/presets/{theme}")
async def get_preset(theme: str) -> dict[str, Any]:
    if theme not in color_params.THEME_PRESETS:
        raise HTTPException(status_code=404, detail=f"Unknown theme '{theme}'")
    return color_params.preset(theme)
