"""Cosine similarity search over FAQ chunks using PostgreSQL pgvector."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from sqlalchemy import text
from sqlalchemy.engine import Engine


@dataclass
class SearchResult:
    heading: str
    content: str
    similarity: float

    def to_dict(self) -> Dict[str, Any]:
        return {"heading": self.heading, "content": self.content, "similarity": self.similarity}


class VectorSearch:
    """Lightweight vector search utility backed by pgvector."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @staticmethod
    def _format_vector(values: Sequence[float]) -> str:
        if not values:
            raise ValueError("embedding must contain at least one value")
        formatted = ",".join(f"{value:.8f}" for value in values)
        return f"[{formatted}]"

    def query(
        self,
        *,
        embedding: Sequence[float],
        threshold: float = 0.7,
        top_k: int = 5,
    ) -> List[SearchResult]:
        """Chunks with cosine similarity above ``threshold``, most similar first."""
        if top_k <= 0:
            return []

        stmt = text(
            """
            SELECT heading,
                   content,
                   1 - (embedding <=> CAST(:embedding AS vector)) AS similarity
            FROM faq_chunks
            WHERE embedding IS NOT NULL
              AND 1 - (embedding <=> CAST(:embedding AS vector)) > :threshold
            ORDER BY embedding <=> CAST(:embedding AS vector)
            LIMIT :limit
            """
        )
        params = {
            "embedding": self._format_vector(embedding),
            "threshold": threshold,
            "limit": top_k,
        }

        with self._engine.connect() as connection:
            rows = connection.execute(stmt, params).all()

        return [
            SearchResult(heading=row.heading, content=row.content, similarity=float(row.similarity))
            for row in rows
        ]


__all__ = ["VectorSearch", "SearchResult"]
