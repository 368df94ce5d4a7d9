"""Ramp Studio — FastAPI application entry point."""
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers import generate, contrast, naming
from .services import color_matcher

LOG_LEVEL = os.environ.get("RAMP_STUDIO_LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get(
        "RAMP_STUDIO_CORS_ORIGINS",
        "http://localhost:5173,http://localhost:3000,http://127.0.0.1:5173",
    ).split(",")
    if origin.strip()
]

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Load the named-color dictionary up front so the first request doesn't pay for it
    entries = color_matcher.get_dictionary()
    logger.info(
        f"Named color dictionary loaded: {len(entries)} entries "
        f"(version {color_matcher.dictionary_version()})")
    yield


app = FastAPI(
    title="Ramp Studio",
    description="Accessible OKLCH palette ramp generator",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS — allow the Vite dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(generate.router)
app.include_router(contrast.router)
app.include_router(naming.router)


@app.get("/health")
async def health() -> dict:
    return {
        "status": "ok",
        "named_colors": len(color_matcher.get_dictionary()),
        "dictionary_version": color_matcher.dictionary_version(),
    }


@app.get("/")
async def root() -> dict:
    return {"message": "Ramp Studio API", "docs": "/docs"}
