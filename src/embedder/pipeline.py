# -----------------------------------------------------------
# Matryoshka Embedding Service
# Text-to-embedding pipeline.
#
# (C) 2025-2026 Juan-Francisco Reyes, Cottbus, Germany
# Released under MIT License
# email pacoreyes@protonmail.com
# -----------------------------------------------------------

"""Text-to-embedding pipeline.

Validates the request, then, holding the session guard, tokenizes with the
document prompt, runs one forward pass, mean-pools the hidden states and
returns the L2-normalized Matryoshka prefix of the requested size.
"""

from __future__ import annotations

import structlog

from embedder.configuration import Configuration
from embedder.errors import EmbedError, InternalError
from embedder.infrastructure.onnx_session import OnnxSession
from embedder.infrastructure.session_guard import SessionGuard
from embedder.infrastructure.tokenizer_client import TokenizerAdapter
from embedder.tools.embeddings import mean_pooling, truncate_and_normalize
from embedder.tools.tensors import (
    build_input_tensors,
    check_hidden_state_finite,
    check_hidden_state_shape,
)
from embedder.tools.validation import (
    validate_dimension,
    validate_sequence_length,
    validate_text,
)

logger = structlog.get_logger()


class Embedder:
    """Generates embeddings from a shared tokenizer and inference session.

    Args:
        tokenizer: Tokenizer adapter (applies the prompt template).
        session: Inference session producing last_hidden_state.
        configuration: Pipeline limits and valid dimensions.
    """

    def __init__(
        self,
        tokenizer: TokenizerAdapter,
        session: OnnxSession,
        configuration: Configuration | None = None,
    ) -> None:
        self._tokenizer = tokenizer
        self._guard = SessionGuard(session)
        self.configuration = configuration or Configuration()

    @property
    def guard(self) -> SessionGuard[OnnxSession]:
        return self._guard

    def embed(self, text: str, size: int) -> list[float]:
        """Generate a normalized embedding of dimension *size* for *text*.

        Args:
            text: The input text to embed.
            size: Output dimension, one of the configured valid dimensions.

        Returns:
            list[float]: Unit-length embedding of length *size*.

        Raises:
            EmbedError: A client error for invalid input, a server error for
                tokenizer or engine failures. Any other exception is wrapped
                in ``InternalError``.
        """
        cfg = self.configuration
        validate_dimension(size, cfg.valid_dimensions)
        validate_text(text, cfg.max_text_length)

        try:
            with self._guard.acquire() as session:
                input_ids, attention_mask = self._tokenizer.tokenize(text)
                validate_sequence_length(len(input_ids), cfg.max_sequence_length)

                inputs = build_input_tensors(input_ids, attention_mask)
                hidden_states = session.run(inputs)
                check_hidden_state_shape(hidden_states, len(input_ids), size)
                check_hidden_state_finite(hidden_states)

                pooled = mean_pooling(hidden_states, attention_mask)
                embedding = truncate_and_normalize(pooled, size)
        except EmbedError:
            raise
        except Exception as exc:
            raise InternalError(str(exc)) from exc

        logger.debug("embed_done", seq_len=len(input_ids), size=size)
        return embedding
