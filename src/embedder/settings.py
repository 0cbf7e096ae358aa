# -----------------------------------------------------------
# Matryoshka Embedding Service
# Application settings loaded from environment variables.
#
# (C) 2025-2026 Juan-Francisco Reyes, Cottbus, Germany
# Released under MIT License
# email pacoreyes@protonmail.com
# -----------------------------------------------------------

"""Application settings loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global settings for the embedding service.

    Loaded from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        protected_namespaces=(),
    )

    # Model artifacts (the .onnx file expects its .onnx_data companion next to it)
    model_path: str = "model/model_quantized.onnx"
    tokenizer_path: str = "model/tokenizer.json"

    # ONNX Runtime session
    intra_op_num_threads: int = Field(1, ge=1)
    inter_op_num_threads: int = Field(1, ge=1)
    graph_optimization_level: str = Field(
        "basic", pattern="^(disable|basic|extended|all)$"
    )

    # Development mode exposes server error details to callers
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = Field("console", pattern="^(console|json)$")

    # HTTP runtime
    app_host: str = "0.0.0.0"
    app_port: int = 8000

    # Base URL used by the service client and benchmark script
    service_url: str = "http://localhost:8000"


# Initialize singleton settings
settings = Settings()
