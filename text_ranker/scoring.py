from __future__ import annotations
import logging
from typing import List, Optional, Tuple
from .config import RankConfig
from .datatypes import SimilarityMatrix
from .graphing import out_sums

logger = logging.getLogger(__name__)

def textrank_scores(simM: SimilarityMatrix, cfg: Optional[RankConfig] = None) -> Tuple[List[float], int]:
    """
    Weighted TextRank over a similarity matrix.

    TR(Si) = (1-d)/N + d * sum_j( sim[j][i] / outSum(j) * TR_prev(Sj) )

    where outSum(j) is the sum of row j without its diagonal. Pairs with
    sim[j][i] == 0 and rows with a non-positive outSum contribute nothing.
    Iterates until the L1 change drops below epsilon or max_iterations passes.

    Returns:
        (scores, iterations run)
    """
    cfg = cfg or RankConfig()
    n = len(simM)
    if n == 0:
        return [], 0

    d = cfg.damping
    base = (1.0 - d) / n
    scores = [1.0 / n] * n
    prev = [0.0] * n

    iterations = 0
    for iteration in range(cfg.max_iterations):
        iterations = iteration + 1
        scores, prev = prev, scores
        # outSum per row, once per pass
        sums = out_sums(simM)

        for i in range(n):
            acc = 0.0
            for j in range(n):
                if i == j or simM[j][i] == 0.0:
                    continue
                if sums[j] > 0.0:
                    acc += simM[j][i] / sums[j] * prev[j]
            scores[i] = base + d * acc

        diff = sum(abs(scores[i] - prev[i]) for i in range(n))
        if diff < cfg.epsilon:
            logger.info("TextRank converged after %d iterations", iterations)
            break
    else:
        logger.info("TextRank stopped after %d iterations without converging", iterations)

    return scores, iterations
