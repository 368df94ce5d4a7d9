"""POST /api/name — nearest named color for a color or a whole ramp."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from ..models.requests import NameRequest
from ..services import color_matcher

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


@router.post("/name")
async def name_color(req: NameRequest) -> dict[str, Any]:
    if req.ramp is not None:
        return {
            "name": color_matcher.palette_name(req.ramp, reference_step=req.reference_step),
            "dictionaryVersion": color_matcher.dictionary_version(),
        }
    if req.color is None:
        raise HTTPException(status_code=400, detail="Provide either 'color' or 'ramp'")

    try:
        entry = color_matcher.match_named(req.color)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid color: {e}")
    return {
        "name": entry["name"],
        "hex": entry["hex"],
        "dictionaryVersion": color_matcher.dictionary_version(),
    }
