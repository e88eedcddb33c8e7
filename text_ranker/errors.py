from __future__ import annotations


class SummarizerError(Exception):
    """Base class for failures that abort a summarization call."""


class DimensionMismatchError(SummarizerError, ValueError):
    def __init__(self, len_a: int, len_b: int):
        self.len_a = len_a
        self.len_b = len_b
        super().__init__(f"Embeddings have different dimensions: {len_a} vs {len_b}")


class EmbeddingProviderError(SummarizerError):
    """The embedding capability failed for one sentence; no partial summary is produced."""

    def __init__(self, idx: int, sentence: str):
        self.idx = idx
        self.sentence = sentence
        preview = sentence[:60] + "..." if len(sentence) > 60 else sentence
        super().__init__(f"Embedding failed for sentence {idx}: '{preview}'")
