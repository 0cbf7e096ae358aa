# -----------------------------------------------------------
# Matryoshka Embedding Service
# Fixed pipeline configuration for the embedding model.
#
# (C) 2025-2026 Juan-Francisco Reyes, Cottbus, Germany
# Released under MIT License
# email pacoreyes@protonmail.com
# -----------------------------------------------------------

"""Fixed pipeline configuration for the embedding model."""

from __future__ import annotations

from dataclasses import dataclass, field

# Matryoshka output sizes the model was trained for, largest first
VALID_DIMENSIONS: tuple[int, ...] = (768, 512, 256, 128)

MAX_SEQUENCE_LENGTH = 8192
MAX_TEXT_LENGTH = 100_000

# EmbeddingGemma document prompt
DOCUMENT_PROMPT = "title: none | text: {text}"


@dataclass(frozen=True)
class Configuration:
    """Pipeline limits and prompt format, decoupled from environment settings."""

    valid_dimensions: tuple[int, ...] = field(
        default=VALID_DIMENSIONS,
        metadata={"description": "Embedding sizes accepted by embed()."},
    )
    max_sequence_length: int = field(
        default=MAX_SEQUENCE_LENGTH,
        metadata={"description": "Maximum tokenized length, special tokens included."},
    )
    max_text_length: int = field(
        default=MAX_TEXT_LENGTH,
        metadata={"description": "Maximum input length in characters."},
    )
    prompt_template: str = field(
        default=DOCUMENT_PROMPT,
        metadata={"description": "Template applied to the text before tokenization."},
    )
    default_size: int = field(
        default=VALID_DIMENSIONS[0],
        metadata={"description": "Embedding size used when a request omits it."},
    )
