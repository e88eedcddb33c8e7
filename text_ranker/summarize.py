from __future__ import annotations
import logging
import math
from typing import Dict, List, Optional, Tuple
from .config import RankConfig
from .datatypes import Document, SummaryResult
from .embedding import EmbeddingProvider
from .preprocessing import preprocess_text
from .features import embed_sentences, compute_similarity_matrix
from .scoring import textrank_scores

logger = logging.getLogger(__name__)

def summary_size(n: int, ratio: float) -> int:
    # halves round up (5 * 0.5 -> 3), then clamp to [1, n]; NaN saturates to 0, inf to n
    x = n * ratio
    if math.isnan(x):
        k = 0
    elif math.isinf(x):
        k = n if x > 0 else 0
    else:
        k = int(math.floor(x + 0.5))
    return min(max(k, 1), n)

def rank_order(scores: List[float]) -> List[Tuple[int, float]]:
    # score descending, ties broken by original position
    return sorted(enumerate(scores), key=lambda x: (-x[1], x[0]))

def generate_summary(doc: Document, scores: List[float], compression_ratio: float, iterations: int = 0) -> SummaryResult:
    n = len(doc.sentences)
    k = summary_size(n, compression_ratio)
    logger.info("Selecting top %d sentences for summary...", k)

    ranked = rank_order(scores)
    for pos, (idx, score) in enumerate(ranked[:5]):
        logger.debug("  %d. Score: %.4f - '%s'", pos + 1, score, doc.sentences[idx].text)

    # keyed by text: duplicate sentences collapse, the last one in rank order wins
    score_map: Dict[str, float] = {}
    for idx, score in ranked:
        score_map[doc.sentences[idx].text] = score

    selected = sorted(idx for idx, _ in ranked[:k])
    if not selected:
        first = doc.sentences[0].text if doc.sentences else doc.raw_text
        return SummaryResult(summary=first, ranked=True, iterations=iterations)

    summary = " ".join(doc.sentences[i].text for i in selected)
    return SummaryResult(summary=summary, scores=score_map, selected=selected, ranked=True, iterations=iterations)

def summarize_document(doc: Document, compression_ratio: float, embedder: EmbeddingProvider,
                       cfg: Optional[RankConfig] = None) -> SummaryResult:
    cfg = cfg or RankConfig()
    if len(doc.sentences) <= cfg.trivial_sentence_count:
        # too short to rank
        return SummaryResult(summary=doc.raw_text)

    embeddings = embed_sentences(doc, embedder, cfg)
    simM = compute_similarity_matrix(embeddings)
    scores, iterations = textrank_scores(simM, cfg)
    return generate_summary(doc, scores, compression_ratio, iterations=iterations)

def summarize(text: str, compression_ratio: float, embedder: EmbeddingProvider,
              cfg: Optional[RankConfig] = None) -> Tuple[str, Dict[str, float]]:
    # Pipeline glue
    doc = preprocess_text(text, cfg=cfg)
    result = summarize_document(doc, compression_ratio, embedder, cfg=cfg)
    return result.summary, result.scores

class Summarizer:
    """Binds an embedding provider and a config; holds no state between calls."""

    def __init__(self, embedder: EmbeddingProvider, cfg: Optional[RankConfig] = None):
        self.embedder = embedder
        self.cfg = cfg or RankConfig()

    def run(self, text: str, compression_ratio: float) -> SummaryResult:
        doc = preprocess_text(text, cfg=self.cfg)
        return summarize_document(doc, compression_ratio, self.embedder, cfg=self.cfg)

    def summarize(self, text: str, compression_ratio: float) -> Tuple[str, Dict[str, float]]:
        result = self.run(text, compression_ratio)
        return result.summary, result.scores
