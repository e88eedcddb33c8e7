from __future__ import annotations
import logging
import math
from typing import List, Optional
from .config import RankConfig
from .datatypes import Document, Embedding, SimilarityMatrix, is_sentinel, zero_embedding
from .embedding import EmbeddingProvider
from .errors import DimensionMismatchError, EmbeddingProviderError

logger = logging.getLogger(__name__)

def cosine_similarity(a: Embedding, b: Embedding) -> float:
    """dot(a, b) / (|a| * |b|); 0.0 when either norm is zero."""
    if len(a) != len(b):
        raise DimensionMismatchError(len(a), len(b))
    dot = sum(x * y for x, y in zip(a, b))
    n1 = math.sqrt(sum(x * x for x in a))
    n2 = math.sqrt(sum(y * y for y in b))
    if n1 == 0.0 or n2 == 0.0:
        return 0.0
    return dot / (n1 * n2)

def embed_sentences(doc: Document, embedder: EmbeddingProvider, cfg: Optional[RankConfig] = None) -> List[Embedding]:
    """
    One embedding per sentence, in document order.

    Sentences with fewer than `cfg.min_embed_tokens` tokens are not sent to the
    provider; they get the all-zero sentinel, sized like the real embeddings.
    """
    cfg = cfg or RankConfig()
    n = len(doc.sentences)
    vecs: List[Optional[Embedding]] = []
    for i, s in enumerate(doc.sentences):
        if i % 5 == 0:
            logger.debug("Processing sentence %d/%d", i + 1, n)
        if s.n_tokens < cfg.min_embed_tokens:
            vecs.append(None)
            continue
        try:
            vecs.append(list(embedder.embed(s.text)))
        except Exception as exc:
            raise EmbeddingProviderError(s.idx, s.text) from exc

    dim = next((len(v) for v in vecs if v is not None), cfg.sentinel_dim)
    return [v if v is not None else zero_embedding(dim) for v in vecs]

def compute_similarity_matrix(embeddings: List[Embedding]) -> SimilarityMatrix:
    """
    N x N cosine matrix. Diagonal is 1.0; any cell touching a sentinel is 0.0.
    A dimension mismatch between two real embeddings aborts the build.
    """
    n = len(embeddings)
    if n == 0:
        return []
    logger.debug("Calculating sentence similarities...")

    skipped = [is_sentinel(v) for v in embeddings]
    M = [[0.0]*n for _ in range(n)]
    for i in range(n):
        M[i][i] = 1.0
        for j in range(i+1, n):
            if skipped[i] or skipped[j]:
                continue
            M[i][j] = M[j][i] = cosine_similarity(embeddings[i], embeddings[j])
    return M
