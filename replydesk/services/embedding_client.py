"""OpenAI embeddings client with exponential backoff on rate limiting."""

from __future__ import annotations

import logging
import time
from functools import lru_cache
from typing import Callable, List, Optional, Sequence

from openai import OpenAI, RateLimitError

from ..config import get_settings
from ..exceptions import ConfigurationError, EmbeddingError, RateLimitedError

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], None]


class OpenAIEmbeddingClient:
    """Thin wrapper around the OpenAI embeddings API.

    A 429 from the API is retried with delays of ``base * 2**attempt`` seconds
    until ``max_retries`` attempts have been made. Any other failure is raised
    immediately as :class:`EmbeddingError`.
    """

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        dimensions: Optional[int] = None,
        max_retries: int = 5,
        backoff_base_seconds: float = 1.0,
        sleep_fn: SleepFn = time.sleep,
        client=None,
    ) -> None:
        if client is None:
            if not api_key:
                raise ConfigurationError(
                    "OPENAI_API_KEY must be configured to generate embeddings."
                )
            # Retries are handled here, not by the SDK
            client = OpenAI(api_key=api_key, max_retries=0)
        self._client = client
        self.model = model
        self.dimensions = dimensions
        self.max_retries = max(1, max_retries)
        self.backoff_base_seconds = backoff_base_seconds
        self.sleep_fn = sleep_fn

    def embed_texts(self, texts: Sequence[str]) -> List[List[float]]:
        if not texts:
            return []

        request = {"model": self.model, "input": list(texts)}
        if self.dimensions:
            request["dimensions"] = self.dimensions

        for attempt in range(self.max_retries):
            try:
                response = self._client.embeddings.create(**request)
                return [list(item.embedding) for item in response.data]
            except RateLimitError as exc:
                if attempt < self.max_retries - 1:
                    sleep_time = self.backoff_base_seconds * (2 ** attempt)
                    logger.warning(
                        f"Embedding rate limited (attempt {attempt + 1}/{self.max_retries}). "
                        f"Retrying in {sleep_time} seconds..."
                    )
                    self.sleep_fn(sleep_time)
                    continue
                raise RateLimitedError(
                    "Embedding request still rate limited after retries",
                    details={"attempts": self.max_retries},
                ) from exc
            except Exception as exc:
                logger.error(f"Embedding request failed: {str(exc)}")
                raise EmbeddingError(f"Embedding request failed: {exc}") from exc

        raise EmbeddingError("Embedding request failed")

    def embed_text(self, text: str) -> List[float]:
        return self.embed_texts([text])[0]


@lru_cache
def get_embedding_client() -> OpenAIEmbeddingClient:
    settings = get_settings()
    return OpenAIEmbeddingClient(
        api_key=settings.openai_api_key,
        model=settings.embedding_model_name,
        dimensions=settings.embedding_dimensions,
        max_retries=settings.embedding_max_retries,
        backoff_base_seconds=settings.embedding_backoff_base_seconds,
    )


__all__ = ["OpenAIEmbeddingClient", "get_embedding_client"]
