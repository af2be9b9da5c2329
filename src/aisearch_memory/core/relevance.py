"""
Conversion between cosine similarity and Azure AI Search relevance scores.

For cosine-configured HNSW indexes the engine reports
``score = 1 / (1 + distance)`` where ``distance = 1 - similarity``, i.e.
``score = 1 / (2 - similarity)``. Cosine similarity lives in [-1, 1], so
engine scores live in [1/3, 1] and the mapping is always defined.

Hybrid (keyword + vector) queries return a fused rank score that is not
derived from cosine similarity; callers must not pass those through here.
"""


def score_to_cosine_similarity(score: float) -> float:
    """
    Convert an engine vector-search score to cosine similarity.

    Args:
        score: Engine relevance score, strictly positive

    Returns:
        Cosine similarity in [-1, 1] for scores produced by a cosine index
    """
    return 2 - (1 / score)


def cosine_similarity_to_score(similarity: float) -> float:
    """
    Convert a cosine similarity to the engine's vector-search score scale.

    Args:
        similarity: Cosine similarity, usually in [-1, 1]; 2 is undefined

    Returns:
        Engine relevance score
    """
    return 1 / (2 - similarity)
