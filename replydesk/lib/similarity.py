"""Word-set Jaccard similarity used to match past emails."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Set

_WORD_SPLIT = re.compile(r"\W+")


def word_set(text: str) -> Set[str]:
    return {word for word in _WORD_SPLIT.split((text or "").lower()) if word}


def jaccard_similarity(text1: str, text2: str) -> float:
    """Size of the shared vocabulary over the size of the combined vocabulary."""
    words1 = word_set(text1)
    words2 = word_set(text2)
    union = words1 | words2
    if not union:
        return 0.0
    return len(words1 & words2) / len(union)


@dataclass
class SimilarMatch:
    item: Any
    similarity: float


def rank_similar(
    target: str,
    candidates: Iterable[Any],
    *,
    text_of: Callable[[Any], str],
    limit: int = 5,
) -> List[SimilarMatch]:
    """Return the ``limit`` most similar candidates, best first.

    Exact duplicates (similarity 1.0) are excluded.
    """
    matches = [
        SimilarMatch(item=candidate, similarity=jaccard_similarity(text_of(candidate), target))
        for candidate in candidates
    ]
    matches = [match for match in matches if match.similarity < 1.0]
    matches.sort(key=lambda match: match.similarity, reverse=True)
    return matches[:limit]


__all__ = ["jaccard_similarity", "rank_similar", "SimilarMatch", "word_set"]
