"""Identicon microservice -- FastAPI application.

Endpoints:
    POST /identicon       -- Render a digest (or SHA-256 of text) as PNG
    POST /identicon/face  -- Render the 48x48 Face header text
    GET  /health          -- Health check

The service holds no state between requests; every response is computed
from the request body alone.
"""

from __future__ import annotations

import hashlib

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel, Field, model_validator

from .face import render_face
from .renderer import DISPLAY_SIZE, render_png

structlog.configure(
    processors=[
        structlog.dev.ConsoleRenderer(),
    ],
)

logger = structlog.get_logger(__name__)

VERSION = "0.2.0"

app = FastAPI(
    title="identicon",
    description="Deterministic identicon renderer for visual comparison of digests",
    version=VERSION,
)


# --------------------------------------------------------------------------
# Request / Response models
# --------------------------------------------------------------------------


class DigestRequest(BaseModel):
    """Digest source shared by all render requests.

    Exactly one of ``text`` or ``digest_hex`` must be given. Text is
    hashed with SHA-256 before rendering.
    """

    text: str | None = Field(
        default=None,
        description="Text to hash with SHA-256",
        examples=["mySecret123"],
    )
    digest_hex: str | None = Field(
        default=None,
        description="Hex-encoded digest (canonically 32 bytes)",
    )
    model: str = Field(
        default="classic",
        description="Color model: classic or palette",
        examples=["classic", "palette"],
    )

    @model_validator(mode="after")
    def _one_source(self) -> DigestRequest:
        if (self.text is None) == (self.digest_hex is None):
            raise ValueError("Provide exactly one of text or digest_hex")
        return self

    def digest(self) -> bytes:
        if self.text is not None:
            return hashlib.sha256(self.text.encode("utf-8")).digest()
        return bytes.fromhex(self.digest_hex)


class IdenticonRequest(DigestRequest):
    """Request body for /identicon."""

    size: int = Field(
        default=DISPLAY_SIZE,
        ge=16,
        le=2048,
        description="Output image size in pixels (square)",
    )
    dark: bool = Field(default=False, description="Use the dark background table")
    transparent: bool = Field(default=False, description="Transparent background")
    indexed: bool = Field(default=False, description="Write a 4-color indexed PNG")


class FaceRequest(DigestRequest):
    """Request body for /identicon/face."""

    model: str = Field(
        default="palette",
        description="Color model: classic or palette",
    )
    transparent: bool = Field(default=True, description="Transparent background")


class HealthResponse(BaseModel):
    """Response body for /health."""

    status: str
    service: str
    version: str


# --------------------------------------------------------------------------
# Endpoints
# --------------------------------------------------------------------------


@app.post(
    "/identicon",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "PNG-encoded identicon"},
        422: {"description": "Invalid input"},
    },
)
async def identicon_png(request: IdenticonRequest) -> Response:
    """Render an identicon PNG."""
    try:
        png_bytes = render_png(
            request.digest(),
            size=request.size,
            model=request.model,
            dark=request.dark,
            transparent=request.transparent,
            indexed=request.indexed,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("identicon_png_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Rendering failed")

    return Response(content=png_bytes, media_type="image/png")


@app.post(
    "/identicon/face",
    response_class=PlainTextResponse,
    responses={
        200: {"content": {"text/plain": {}}, "description": "Face header text"},
        422: {"description": "Invalid input"},
    },
)
async def identicon_face(request: FaceRequest) -> PlainTextResponse:
    """Render the 48x48 identicon as a Face header."""
    try:
        header = render_face(
            request.digest(),
            transparent=request.transparent,
            model=request.model,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("identicon_face_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Rendering failed")

    return PlainTextResponse(content=header)


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for Docker and load balancer probes."""
    return HealthResponse(
        status="healthy",
        service="identicon",
        version=VERSION,
    )
