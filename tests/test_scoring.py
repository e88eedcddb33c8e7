import numpy as np
import pytest

from text_ranker.config import RankConfig
from text_ranker.graphing import out_sums
from text_ranker.scoring import textrank_scores


def _textrank_cubic(simM, damping=0.85, epsilon=0.0001, max_iterations=50):
    """Row sums recomputed inside the innermost loop."""
    n = len(simM)
    scores = [1.0 / n] * n
    prev = [0.0] * n
    for _ in range(max_iterations):
        scores, prev = prev, scores
        for i in range(n):
            acc = 0.0
            for j in range(n):
                if i == j or simM[j][i] == 0.0:
                    continue
                out_sum = 0.0
                for k in range(n):
                    if j != k:
                        out_sum += simM[j][k]
                if out_sum > 0.0:
                    acc += simM[j][i] / out_sum * prev[j]
            scores[i] = (1.0 - damping) / n + damping * acc
        if sum(abs(scores[i] - prev[i]) for i in range(n)) < epsilon:
            break
    return scores


@pytest.fixture
def mixed_matrix():
    return [
        [1.0, 0.6, 0.0, 0.2, -0.1],
        [0.6, 1.0, 0.4, 0.0, 0.3],
        [0.0, 0.4, 1.0, 0.7, 0.0],
        [0.2, 0.0, 0.7, 1.0, 0.5],
        [-0.1, 0.3, 0.0, 0.5, 1.0],
    ]


def test_matches_unhoisted_formula(mixed_matrix):
    scores, _ = textrank_scores(mixed_matrix)
    assert scores == pytest.approx(_textrank_cubic(mixed_matrix), abs=1e-12)


def test_matches_numpy_power_iteration_on_positive_graph():
    rng = np.random.default_rng(7)
    A = rng.uniform(0.1, 1.0, size=(6, 6))
    A = (A + A.T) / 2
    np.fill_diagonal(A, 1.0)

    cfg = RankConfig(epsilon=1e-12, max_iterations=500)
    scores, iterations = textrank_scores(A.tolist(), cfg)
    assert iterations < cfg.max_iterations

    W = A.copy()
    np.fill_diagonal(W, 0.0)
    P = W / W.sum(axis=1, keepdims=True)
    p = np.ones(6) / 6
    for _ in range(500):
        p = 0.15 / 6 + 0.85 * P.T.dot(p)
    assert scores == pytest.approx(p.tolist(), abs=1e-9)


def test_disconnected_graph_scores_are_teleport_mass():
    n = 5
    simM = [[1.0 if i == j else 0.0 for j in range(n)] for i in range(n)]
    scores, iterations = textrank_scores(simM)
    assert scores == pytest.approx([(1 - 0.85) / n] * n)
    # values are final after the first pass; the second pass confirms convergence
    assert iterations == 2


def test_fully_connected_uniform_graph_is_stationary():
    n = 4
    simM = [[1.0] * n for _ in range(n)]
    scores, iterations = textrank_scores(simM)
    assert scores == pytest.approx([1.0 / n] * n)
    assert iterations == 1


def test_central_node_scores_highest():
    # node 0 is similar to everyone, the others only to node 0
    simM = [
        [1.0, 0.9, 0.9, 0.9],
        [0.9, 1.0, 0.0, 0.0],
        [0.9, 0.0, 1.0, 0.0],
        [0.9, 0.0, 0.0, 1.0],
    ]
    scores, _ = textrank_scores(simM)
    assert scores[0] > max(scores[1:])
    assert scores[2] == pytest.approx(scores[1])
    assert scores[3] == pytest.approx(scores[1])


def test_non_positive_out_sum_contributes_nothing():
    simM = [
        [1.0, -0.5, 0.0],
        [-0.5, 1.0, 0.0],
        [0.0, 0.0, 1.0],
    ]
    assert out_sums(simM) == [-0.5, -0.5, 0.0]
    scores, _ = textrank_scores(simM)
    assert scores == pytest.approx([0.05] * 3)


def test_max_iterations_caps_the_loop(mixed_matrix):
    scores, iterations = textrank_scores(mixed_matrix, RankConfig(max_iterations=1))
    assert iterations == 1
    assert len(scores) == 5


def test_deterministic(mixed_matrix):
    assert textrank_scores(mixed_matrix) == textrank_scores(mixed_matrix)


def test_empty_matrix():
    assert textrank_scores([]) == ([], 0)
