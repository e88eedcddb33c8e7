from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict

Embedding = List[float]
SimilarityMatrix = List[List[float]]

@dataclass(frozen=True)
class Sentence:
    idx: int
    text: str
    n_tokens: int = 0

@dataclass
class Document:
    raw_text: str
    sentences: List[Sentence]

@dataclass
class Edge:
    i: int
    j: int
    weight: float  # cosine similarity

@dataclass
class Graph:
    nodes: List[Sentence]
    edges: List[Edge]  # undirected weighted edges, sentinel nodes excluded

@dataclass
class SummaryResult:
    summary: str
    scores: Dict[str, float] = field(default_factory=dict)
    selected: List[int] = field(default_factory=list)  # ascending, document order
    ranked: bool = False  # False when the trivial-document shortcut was taken
    iterations: int = 0

def zero_embedding(dim: int) -> Embedding:
    return [0.0] * dim

def is_sentinel(vec: Embedding) -> bool:
    return all(x == 0.0 for x in vec)
