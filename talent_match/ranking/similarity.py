"""Similarity between two embedding vectors: cosine blended with normalized Euclidean distance."""

from typing import Sequence

import numpy as np

from talent_match.errors import DimensionMismatch
from talent_match.schemas.match import SimilarityResult


def calculate_similarity(a: Sequence[float], b: Sequence[float]) -> SimilarityResult:
    """
    cosine = dot(a, b) / (|a| * |b|)          (0.0 if either vector has zero norm)
    euclidean_normalized = 1 / (1 + |a - b|)
    score = (cosine + euclidean_normalized) / 2
    confidence = min / max of the two measures (1.0 when both are 0)
    """
    if len(a) != len(b):
        raise DimensionMismatch(len(a), len(b))

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)

    norm_product = float(np.linalg.norm(va) * np.linalg.norm(vb))
    cosine = float(np.dot(va, vb) / norm_product) if norm_product > 0 else 0.0
    euclidean = 1.0 / (1.0 + float(np.linalg.norm(va - vb)))

    score = (cosine + euclidean) / 2
    high = max(cosine, euclidean)
    low = min(cosine, euclidean)
    confidence = 1.0 if high == 0 else low / high

    return SimilarityResult(
        score=score,
        confidence=confidence,
        cosine=cosine,
        euclidean_normalized=euclidean,
    )
