"""
Sentence embedding capability.

The ranking core only depends on `EmbeddingProvider.embed`. The concrete
provider here wraps a sentence-transformers model (mean pooled BERT style
encoders such as all-MiniLM-L6-v2); any other implementation with the same
contract can be passed to `summarize` instead.
"""
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from .config import EmbeddingConfig

logger = logging.getLogger(__name__)


class EmbeddingProvider(ABC):
    """
    Contract:
    - deterministic for identical input text
    - fixed output dimension across calls
    - raises on failure (the caller aborts the whole summarization)
    """

    @abstractmethod
    def embed(self, sentence: str) -> List[float]:
        raise NotImplementedError


_MODEL_CACHE: Dict[Tuple[str, Optional[str], Optional[str]], object] = {}


def _get_model(cfg: EmbeddingConfig):
    """Load and cache a SentenceTransformer model by (name, revision, device)."""
    from sentence_transformers import SentenceTransformer

    key = (cfg.model_name, cfg.revision, cfg.device)
    if key not in _MODEL_CACHE:
        logger.info("Loading embedding model %s (revision=%s)", cfg.model_name, cfg.revision or "main")
        _MODEL_CACHE[key] = SentenceTransformer(cfg.model_name, revision=cfg.revision, device=cfg.device)
        logger.info("Model loaded successfully!")
    return _MODEL_CACHE[key]


class SentenceTransformerEmbedder(EmbeddingProvider):
    def __init__(self, cfg: Optional[EmbeddingConfig] = None):
        self.cfg = cfg or EmbeddingConfig()
        self._model = None

    @property
    def model(self):
        if self._model is None:
            self._model = _get_model(self.cfg)
        return self._model

    @property
    def dimension(self) -> int:
        return int(self.model.get_sentence_embedding_dimension())

    def embed(self, sentence: str) -> List[float]:
        vec = self.model.encode(sentence, convert_to_numpy=True, show_progress_bar=False)
        return [float(x) for x in vec.tolist()]
