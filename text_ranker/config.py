from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_MODEL = "sentence-transformers/all-MiniLM-L6-v2"

@dataclass
class RankConfig:
    damping: float = 0.85
    epsilon: float = 0.0001          # L1 convergence threshold
    max_iterations: int = 50
    min_sentence_tokens: int = 2     # shorter sentences are dropped by the splitter
    min_embed_tokens: int = 3        # shorter sentences get the zero sentinel
    trivial_sentence_count: int = 3  # documents up to this size are returned verbatim
    sentinel_dim: int = 384          # used only when no sentence was embedded

    def __post_init__(self):
        if not 0.0 <= self.damping <= 1.0:
            raise ValueError(f"damping must be in [0, 1], got {self.damping}")
        if self.epsilon <= 0.0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")

@dataclass
class EmbeddingConfig:
    model_name: str = DEFAULT_MODEL
    revision: Optional[str] = None
    device: Optional[str] = None  # None lets sentence-transformers pick cuda/cpu

    @staticmethod
    def from_env() -> "EmbeddingConfig":
        return EmbeddingConfig(
            model_name=os.environ.get("TEXT_RANKER_MODEL", DEFAULT_MODEL),
            revision=os.environ.get("TEXT_RANKER_REVISION") or None,
            device=os.environ.get("TEXT_RANKER_DEVICE") or None,
        )
