# -----------------------------------------------------------
# Matryoshka Embedding Service
# Text embeddings with Matryoshka truncation on ONNX Runtime.
#
# (C) 2025-2026 Juan-Francisco Reyes, Cottbus, Germany
# Released under MIT License
# email pacoreyes@protonmail.com
# -----------------------------------------------------------

"""Text embeddings with Matryoshka truncation on ONNX Runtime.

This module exposes the embedding pipeline.
"""

from embedder.pipeline import Embedder

__all__ = ["Embedder"]
