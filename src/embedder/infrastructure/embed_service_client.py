# -----------------------------------------------------------
# Matryoshka Embedding Service
# HTTP client for a running embedding service.
#
# (C) 2025-2026 Juan-Francisco Reyes, Cottbus, Germany
# Released under MIT License
# email pacoreyes@protonmail.com
# -----------------------------------------------------------

import asyncio

import structlog
from curl_cffi import requests

logger = structlog.get_logger()


class EmbedServiceClient:
    """Client for the ``POST /embed`` endpoint.

    Args:
        base_url: Service root, e.g. ``http://localhost:8000``.
        timeout: Request timeout in seconds.
    """

    def __init__(self, base_url: str, timeout: float = 30) -> None:
        """Initialize with the service URL."""
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._api_url = f"{self._base_url}/embed"

    async def embed(self, text: str, size: int = 768) -> list[float]:
        """Request an embedding from the service.

        Args:
            text: Text to embed.
            size: Output dimension (768, 512, 256 or 128).

        Returns:
            list[float]: The normalized embedding vector.
        """
        payload = {"text": text, "size": size}
        headers = {"Content-Type": "application/json"}

        def _make_request():
            response = requests.post(
                self._api_url,
                headers=headers,
                json=payload,
                timeout=self._timeout,
            )
            if response.status_code != 200:
                logger.error(
                    "embed_service_error",
                    status=response.status_code,
                    text=response.text,
                )
                response.raise_for_status()
            return response.json()

        result = await asyncio.to_thread(_make_request)

        embedding = result.get("embedding") if isinstance(result, dict) else None
        if isinstance(embedding, list) and len(embedding) == result.get("size"):
            return embedding

        raise ValueError(f"Unexpected response format from embedding service: {result}")
