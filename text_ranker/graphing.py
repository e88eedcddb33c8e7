from __future__ import annotations
from typing import List, Optional
from .datatypes import Document, Edge, Graph, SimilarityMatrix

def out_sums(simM: SimilarityMatrix) -> List[float]:
    # outSum(j) = sum of sim[j][k] over k != j
    n = len(simM)
    return [sum(simM[j][k] for k in range(n) if k != j) for j in range(n)]

def build_graph(doc: Document, simM: SimilarityMatrix, threshold: Optional[float] = None) -> Graph:
    """Undirected view of the similarity matrix. Zero cells are not edges."""
    nodes = doc.sentences
    edges: List[Edge] = []
    n = len(nodes)
    for i in range(n):
        for j in range(i+1, n):
            w = simM[i][j]
            if w == 0.0:
                continue
            if threshold is not None and w < threshold:
                continue
            edges.append(Edge(i=i, j=j, weight=w))
    return Graph(nodes=nodes, edges=edges)

def build_adjacency(graph: Graph) -> List[List[int]]:
    n = len(graph.nodes)
    A = [[0]*n for _ in range(n)]
    for e in graph.edges:
        A[e.i][e.j] = 1
        A[e.j][e.i] = 1
    return A

def isolated_nodes(graph: Graph) -> List[int]:
    A = build_adjacency(graph)
    return [i for i, row in enumerate(A) if not any(row)]
