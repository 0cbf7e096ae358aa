# -----------------------------------------------------------
# Matryoshka Embedding Service
# Client wiring layer.
# This is the only module (besides settings.py) that reads model paths
# and instantiates infrastructure clients. All other modules receive
# injected dependencies.
#
# (C) 2025-2026 Juan-Francisco Reyes, Cottbus, Germany
# Released under MIT License
# email pacoreyes@protonmail.com
# -----------------------------------------------------------

import structlog

from embedder.configuration import Configuration
from embedder.infrastructure.embed_service_client import EmbedServiceClient
from embedder.infrastructure.onnx_session import OnnxSession
from embedder.infrastructure.tokenizer_client import TokenizerAdapter
from embedder.pipeline import Embedder
from embedder.settings import Settings

logger = structlog.get_logger()


def build_embedder(settings: Settings) -> Embedder:
    """Load tokenizer and model once and assemble the pipeline.

    Args:
        settings: Application settings with model and tokenizer paths.

    Returns:
        Embedder: Ready-to-use pipeline sharing one session.

    Raises:
        ModelLoadError: If the ONNX model cannot be loaded.
        TokenizerLoadError: If the tokenizer cannot be loaded.
    """
    configuration = Configuration()
    session = OnnxSession.from_file(
        settings.model_path,
        intra_op_num_threads=settings.intra_op_num_threads,
        inter_op_num_threads=settings.inter_op_num_threads,
        optimization_level=settings.graph_optimization_level,
    )
    tokenizer = TokenizerAdapter.from_file(
        settings.tokenizer_path, prompt_template=configuration.prompt_template
    )

    hidden_dim = session.hidden_dim
    if hidden_dim is not None and hidden_dim < max(configuration.valid_dimensions):
        logger.warning(
            "model_hidden_dim_too_small",
            hidden_dim=hidden_dim,
            largest_dimension=max(configuration.valid_dimensions),
        )

    logger.info("embedder_ready", model_path=settings.model_path, hidden_dim=hidden_dim)
    return Embedder(tokenizer, session, configuration=configuration)


def build_service_client(settings: Settings) -> EmbedServiceClient:
    """Create an HTTP client for a running embedding service."""
    return EmbedServiceClient(base_url=settings.service_url)
