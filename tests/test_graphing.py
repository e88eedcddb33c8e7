from text_ranker.graphing import build_adjacency, build_graph, isolated_nodes, out_sums
from text_ranker.preprocessing import preprocess_text


def _doc():
    return preprocess_text("Alpha beta gamma. Delta epsilon zeta. Eta theta iota. Kappa lambda mu.")


def test_zero_cells_are_not_edges():
    simM = [
        [1.0, 0.5, 0.0, 0.0],
        [0.5, 1.0, 0.2, 0.0],
        [0.0, 0.2, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]
    graph = build_graph(_doc(), simM)
    assert [(e.i, e.j, e.weight) for e in graph.edges] == [(0, 1, 0.5), (1, 2, 0.2)]
    assert isolated_nodes(graph) == [3]
    assert build_adjacency(graph)[1] == [1, 0, 1, 0]


def test_threshold_filters_weak_and_negative_edges():
    simM = [
        [1.0, 0.5, -0.3, 0.1],
        [0.5, 1.0, 0.2, 0.0],
        [-0.3, 0.2, 1.0, 0.0],
        [0.1, 0.0, 0.0, 1.0],
    ]
    assert len(build_graph(_doc(), simM).edges) == 4
    graph = build_graph(_doc(), simM, threshold=0.3)
    assert [(e.i, e.j) for e in graph.edges] == [(0, 1)]
    assert isolated_nodes(graph) == [2, 3]


def test_out_sums_skip_diagonal():
    simM = [[1.0, 0.5, 0.25], [0.5, 1.0, 0.0], [0.25, 0.0, 1.0]]
    assert out_sums(simM) == [0.75, 0.5, 0.25]
