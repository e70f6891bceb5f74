"""FAQ knowledge base: CSV import, retrieval and diagnostics."""

from __future__ import annotations

import csv
import io
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import case, func, or_, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from ..exceptions import EmbeddingError, ValidationError
from ..lib.vector_search import VectorSearch
from ..models import FAQChunk

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"id", "category", "section", "heading", "content"}


@dataclass
class FAQItem:
    faq_id: str
    category: str
    section: str
    heading: str
    content: str

    @property
    def embedding_text(self) -> str:
        return f"{self.heading}: {self.content}".replace("\n", " ")


def parse_faq_csv(raw: bytes | str) -> List[FAQItem]:
    """Rows of an ``id,category,section,heading,content`` CSV, skipping blank lines."""
    content = raw.decode("utf-8-sig") if isinstance(raw, bytes) else raw
    reader = csv.DictReader(io.StringIO(content))
    columns = {name.strip() for name in reader.fieldnames or []}
    missing = REQUIRED_COLUMNS - columns
    if missing:
        raise ValidationError(f"CSV is missing columns: {', '.join(sorted(missing))}")

    items = []
    for row in reader:
        row = {(key or "").strip(): (value or "") for key, value in row.items()}
        if not any(value.strip() for value in row.values()):
            continue
        items.append(
            FAQItem(
                faq_id=row["id"].strip(),
                category=row["category"],
                section=row["section"],
                heading=row["heading"],
                content=row["content"],
            )
        )
    return items


def _embed_batch(embedding_client, batch: Sequence[FAQItem]) -> List[Optional[List[float]]]:
    if embedding_client is None:
        return [None] * len(batch)
    try:
        return list(embedding_client.embed_texts([item.embedding_text for item in batch]))
    except EmbeddingError as exc:
        logger.warning(f"Batch embedding failed, retrying items one by one: {exc}")

    vectors: List[Optional[List[float]]] = []
    for item in batch:
        try:
            vectors.append(embedding_client.embed_text(item.embedding_text))
        except EmbeddingError as exc:
            logger.warning(f"Failed to generate embedding for item {item.faq_id}: {exc}")
            vectors.append(None)
    return vectors


def import_faq_chunks(
    db: Session, items: Sequence[FAQItem], embedding_client, batch_size: int = 20
) -> int:
    """Embed and store FAQ items. Items whose embedding fails are stored without one."""
    total_batches = math.ceil(len(items) / batch_size) if items else 0
    stored = 0
    for index in range(0, len(items), batch_size):
        batch = items[index : index + batch_size]
        vectors = _embed_batch(embedding_client, batch)
        db.add_all(
            FAQChunk(
                faq_id=item.faq_id,
                category=item.category,
                section=item.section,
                heading=item.heading,
                content=item.content,
                embedding=vector,
            )
            for item, vector in zip(batch, vectors)
        )
        db.commit()
        stored += len(batch)
        logger.info(f"Processed batch {index // batch_size + 1} of {total_batches}")
    return stored


def find_relevant_chunks(
    engine: Engine,
    embedding_client,
    message: str,
    threshold: float = 0.7,
    top_k: int = 5,
) -> List[Dict[str, Any]]:
    embedding = embedding_client.embed_text(message.replace("\n", " "))
    results = VectorSearch(engine).query(embedding=embedding, threshold=threshold, top_k=top_k)
    return [result.to_dict() for result in results]


def search_chunks_text(db: Session, query: str, limit: int = 5) -> List[FAQChunk]:
    """Substring match on heading, content, category and section; heading hits rank first."""
    term = f"%{query.lower()}%"
    heading = func.lower(FAQChunk.heading).like(term)
    body = func.lower(FAQChunk.content).like(term)
    rank = case((heading, 1), (body, 2), else_=3)
    stmt = (
        select(FAQChunk)
        .where(
            or_(
                heading,
                body,
                func.lower(FAQChunk.category).like(term),
                func.lower(FAQChunk.section).like(term),
            )
        )
        .order_by(rank, FAQChunk.faq_id)
        .limit(limit)
    )
    return list(db.execute(stmt).scalars())


def chunk_to_dict(chunk: FAQChunk, similarity: Optional[float] = None) -> Dict[str, Any]:
    data = {
        "id": str(chunk.id),
        "faqId": chunk.faq_id,
        "category": chunk.category,
        "section": chunk.section,
        "heading": chunk.heading,
        "content": chunk.content,
    }
    if similarity is not None:
        data["similarity"] = similarity
    return data


# Diagnostics


def faq_chunk_report(db: Session) -> Dict[str, Any]:
    total = db.execute(select(func.count()).select_from(FAQChunk)).scalar_one()
    if total == 0:
        return {"status": "empty", "message": "No FAQ chunks found in the database"}

    sample = db.execute(select(FAQChunk).order_by(FAQChunk.faq_id).limit(5)).scalars()
    categories = [
        row[0]
        for row in db.execute(
            select(FAQChunk.category).distinct().order_by(FAQChunk.category)
        )
    ]
    with_embeddings = db.execute(
        select(func.count()).select_from(FAQChunk).where(FAQChunk.embedding.is_not(None))
    ).scalar_one()

    return {
        "status": "success",
        "totalRecords": total,
        "sampleData": [
            {
                "id": str(chunk.id),
                "faq_id": chunk.faq_id,
                "heading": chunk.heading,
                "category": chunk.category,
                "contentPreview": (chunk.content or "")[:100] + "...",
                "hasEmbedding": chunk.embedding is not None,
            }
            for chunk in sample
        ],
        "categoryCount": len(categories),
        "categories": categories,
        "embeddingStats": {
            "withEmbeddings": with_embeddings,
            "withoutEmbeddings": total - with_embeddings,
        },
    }


def vector_setup_report(engine: Engine) -> Dict[str, Any]:
    """Check that pgvector is installed and the embedding column is usable."""
    report: Dict[str, Any] = {
        "pgVersion": None,
        "vectorExtension": {"installed": False, "operationTest": {"success": False, "error": None}},
        "embeddingColumn": {"exists": False, "details": None},
        "recommendation": "",
    }

    if engine.dialect.name != "postgresql":
        report["recommendation"] = "Vector search needs PostgreSQL with the pgvector extension."
        return report

    with engine.connect() as conn:
        report["pgVersion"] = conn.execute(text("SELECT version()")).scalar()
        installed = conn.execute(
            text("SELECT COUNT(*) FROM pg_extension WHERE extname = 'vector'")
        ).scalar()
        report["vectorExtension"]["installed"] = bool(installed)

        column = conn.execute(
            text(
                """
                SELECT column_name, data_type, udt_name
                FROM information_schema.columns
                WHERE table_name = 'faq_chunks' AND column_name = 'embedding'
                """
            )
        ).mappings().first()
        if column:
            report["embeddingColumn"] = {"exists": True, "details": dict(column)}

        if installed:
            try:
                conn.execute(text("SELECT '[1,2,3]'::vector <=> '[3,2,1]'::vector")).scalar()
                report["vectorExtension"]["operationTest"]["success"] = True
            except Exception as exc:
                report["vectorExtension"]["operationTest"]["error"] = str(exc)

    if not report["vectorExtension"]["installed"]:
        report["recommendation"] = "Run CREATE EXTENSION vector; on the database."
    elif not report["embeddingColumn"]["exists"]:
        report["recommendation"] = "The faq_chunks.embedding column is missing; recreate the table."
    elif not report["vectorExtension"]["operationTest"]["success"]:
        report["recommendation"] = "pgvector is installed but vector operators fail; check the extension version."
    else:
        report["recommendation"] = "Vector search is ready."
    return report


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (norm_a * norm_b)


def embedding_self_test(db: Session, engine: Engine, embedding_client, faq_id: str) -> Optional[Dict[str, Any]]:
    """Re-embed a stored chunk and see whether search finds it again."""
    chunk = db.execute(select(FAQChunk).where(FAQChunk.faq_id == faq_id).limit(1)).scalar_one_or_none()
    if chunk is None:
        return None

    item = FAQItem(chunk.faq_id, chunk.category, chunk.section, chunk.heading, chunk.content)
    generated = embedding_client.embed_text(item.embedding_text)
    stored = None if chunk.embedding is None else [float(v) for v in chunk.embedding]

    rank = None
    if stored is not None and engine.dialect.name == "postgresql":
        results = VectorSearch(engine).query(embedding=generated, threshold=-1.0, top_k=10)
        for position, result in enumerate(results, start=1):
            if result.heading == chunk.heading and result.content == chunk.content:
                rank = position
                break

    return {
        "faqId": chunk.faq_id,
        "heading": chunk.heading,
        "storedDimensions": len(stored) if stored is not None else 0,
        "generatedDimensions": len(generated),
        "cosineSimilarity": cosine_similarity(stored, generated) if stored is not None else None,
        "selfMatchRank": rank,
    }
