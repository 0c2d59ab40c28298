"""
Unit tests for the Hobby Clustering Agent.
"""

from unittest.mock import Mock

import pytest

from hobbytags.agents.clustering import (
    HobbyClusterAnalyzer,
    normalize_vector,
    spherical_kmeans,
    top_terms,
)


VECTORS_BY_TEXT = {
    "chess, videogame": [1.0, 0.0],
    "videogame": [0.9, 0.1],
    "hiking": [0.0, 1.0],
    "yoga, hiking": [0.1, 0.9],
}


@pytest.fixture
def generator():
    mock = Mock()
    mock.model_name = "test-model"
    mock.embedding_dimensions = 2
    mock.generate_batch.side_effect = lambda texts: [VECTORS_BY_TEXT[t] for t in texts]
    return mock


@pytest.fixture
def records():
    return [
        {"id": 1, "alias": "a", "hobby": ["Chess", "videogame"]},
        {"id": 2, "alias": "b", "hobby": ["videogame"]},
        {"id": 3, "alias": "c", "hobby": ["hiking"]},
        {"id": 4, "alias": "d", "hobby": []},
        {"id": 5, "alias": "e", "hobby": ["yoga", " hiking "]},
    ]


def test_normalize_vector():
    assert normalize_vector([3.0, 4.0]) == pytest.approx([0.6, 0.8])
    assert normalize_vector([0.0, 0.0]) == [0.0, 0.0]


def test_spherical_kmeans_separates_directions():
    vectors = [normalize_vector(v) for v in ([1, 0], [0.9, 0.1], [0, 1], [0.1, 0.9])]
    assignments, centroids = spherical_kmeans(vectors, k=2)

    assert assignments == [0, 0, 1, 1]
    assert len(centroids) == 2


def test_spherical_kmeans_clamps_k():
    vectors = [normalize_vector(v) for v in ([1, 0], [0, 1], [1, 1])]

    assignments, centroids = spherical_kmeans(vectors, k=10)
    assert len(centroids) == 3
    assert sorted(assignments) == [0, 1, 2]

    _, centroids = spherical_kmeans(vectors, k=1)
    assert len(centroids) == 2


def test_spherical_kmeans_empty():
    assert spherical_kmeans([], k=3) == ([], [])


def test_top_terms():
    tags = ["yoga", "chess", "yoga", "art", "chess", "yoga"]
    assert top_terms(tags, 2) == [
        {"term": "yoga", "count": 3},
        {"term": "chess", "count": 2},
    ]


def test_select_members_skips_rows_without_hobbies(generator, records):
    members = HobbyClusterAnalyzer(generator).select_members(records)

    assert [m.id for m in members] == [1, 2, 3, 5]
    assert members[0].hobby == ["chess", "videogame"]
    assert members[3].hobby == ["yoga", "hiking"]


def test_analyze_groups_respondents(generator, records):
    report = HobbyClusterAnalyzer(generator, k=2).analyze(records)

    generator.generate_batch.assert_called_once_with(
        ["chess, videogame", "videogame", "hiking", "yoga, hiking"]
    )
    assert report["model"] == "test-model"
    assert report["input_rows"] == 4
    assert report["embedding_dims"] == 2
    assert report["k"] == 2

    clusters = report["clusters"]
    assert [[m.id for m in c.members] for c in clusters] == [[1, 2], [3, 5]]
    assert clusters[0].top_terms[0] == {"term": "videogame", "count": 2}
    assert clusters[1].to_simple_dict() == {
        "cluster": 1,
        "members": [{"id": 3, "alias": "c"}, {"id": 5, "alias": "e"}],
    }


def test_small_k_falls_back_to_default(generator):
    analyzer = HobbyClusterAnalyzer(generator, k=1)
    assert analyzer.k == 6


def test_analyze_without_hobby_rows(generator):
    report = HobbyClusterAnalyzer(generator).analyze([{"id": 1, "hobby": []}, {"id": 2}])

    assert report is None
    generator.generate_batch.assert_not_called()
