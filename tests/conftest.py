"""Pytest configuration and shared fixtures."""

import re
from typing import List

import pytest

from text_ranker.embedding import EmbeddingProvider

_WORD_RE = re.compile(r"[a-z0-9]+")


class BagOfWordsEmbedder(EmbeddingProvider):
    """Deterministic hashed bag-of-words vectors; records every sentence it embeds."""

    def __init__(self, dim: int = 32):
        self.dim = dim
        self.calls: List[str] = []

    def embed(self, sentence: str) -> List[float]:
        self.calls.append(sentence)
        vec = [0.0] * self.dim
        for word in _WORD_RE.findall(sentence.lower()):
            vec[sum(word.encode("utf-8")) % self.dim] += 1.0
        return vec


class FailingEmbedder(EmbeddingProvider):
    def __init__(self, fail_on: str):
        self.fail_on = fail_on

    def embed(self, sentence: str) -> List[float]:
        if self.fail_on in sentence:
            raise RuntimeError("model forward pass failed")
        return [1.0, 0.0, 0.5]


@pytest.fixture
def embedder() -> BagOfWordsEmbedder:
    return BagOfWordsEmbedder()


@pytest.fixture
def make_embedder():
    return BagOfWordsEmbedder


@pytest.fixture
def make_failing_embedder():
    return FailingEmbedder


@pytest.fixture
def meeting_text() -> str:
    return (
        "Dr. Smith arrived early. He reviewed the agenda. The meeting started on time. "
        "Everyone was attentive. The meeting ended late."
    )


@pytest.fixture
def long_text() -> str:
    return (
        "The city council approved the new transit budget on Monday. "
        "The transit budget adds three bus lines to the northern districts. "
        "Council members debated the budget for nearly four hours. "
        "Several residents spoke in favor of more bus lines. "
        "A local bakery also celebrated its tenth anniversary. "
        "The new bus lines will start running next spring. "
        "Critics argued the budget ignores road repairs. "
        "The mayor said road repairs will be funded separately next year."
    )
