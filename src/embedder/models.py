# -----------------------------------------------------------
# Matryoshka Embedding Service
# Pydantic models for the HTTP request and response payloads.
#
# (C) 2025-2026 Juan-Francisco Reyes, Cottbus, Germany
# Released under MIT License
# email pacoreyes@protonmail.com
# -----------------------------------------------------------

"""Pydantic models for the HTTP request and response payloads."""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field

from embedder.configuration import VALID_DIMENSIONS


class EmbedRequest(BaseModel):
    """Incoming payload for ``POST /embed``."""
    text: str = Field(description="The text to embed.")
    size: int = Field(
        default=VALID_DIMENSIONS[0],
        description="Output dimension: 768, 512, 256, or 128.",
    )


class EmbedResponse(BaseModel):
    """Embedding vector and its dimension."""
    embedding: List[float]
    size: int


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    model_path: str
    dimensions: List[int]

    model_config = {"protected_namespaces": ()}
