"""POST /api/contrast — contrast score of a background/foreground pair."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter

from ..models.requests import ContrastRequest
from ..services import contrast

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


@router.post("/contrast")
async def contrast_score(req: ContrastRequest) -> dict[str, Any]:
    value = contrast.contrast(req.background, req.foreground, req.algorithm)
    return {
        "algorithm": req.algorithm,
        "value": value,
        "printable": contrast.printable_contrast(req.background, req.foreground, req.algorithm),
        "textColor": contrast.readable_text_color(req.background).hex,
    }
