# -----------------------------------------------------------
# Matryoshka Embedding Service
# HTTP entry point wired to the embedding pipeline.
#
# (C) 2025-2026 Juan-Francisco Reyes, Cottbus, Germany
# Released under MIT License
# email pacoreyes@protonmail.com
# -----------------------------------------------------------

import structlog
import uvicorn

from embedder.api import create_app
from embedder.logging_config import configure_logging
from embedder.settings import settings

configure_logging(settings.log_level, settings.log_format)
logger = structlog.get_logger(__name__)

# Model and tokenizer are loaded once, in the lifespan startup
app = create_app(app_settings=settings)


if __name__ == "__main__":
    logger.info("starting_server", host=settings.app_host, port=settings.app_port)
    uvicorn.run(app, host=settings.app_host, port=settings.app_port, workers=1)
