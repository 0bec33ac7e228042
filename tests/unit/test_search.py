from fastener_catalog.config import SearchConfig
from fastener_catalog.retrieval.search import CatalogSearch
from fastener_catalog.types import Candidate


def _candidates() -> list[Candidate]:
    return [
        Candidate("a", "Hexagon bolt DIN 931 M8x40", 0.9, {"standard": "DIN 931"}),
        Candidate("b", "Hexagon bolt DIN 933 M8x40", 0.5, {"standard": "DIN 933"}),
        Candidate("c", "Hexagon screw ISO 4017 M8x40", 0.6, {"standard": "ISO 4017"}),
    ]


def test_search_ranks_filters_and_suggests() -> None:
    response = CatalogSearch().search("DIN 933", _candidates())

    assert [item.id for item in response.results] == ["b", "c", "a"]
    assert [item.rank for item in response.results] == [1, 2, 3]
    assert response.suggestions == ["ISO 4017"]
    assert response.metrics.candidate_count == 3
    assert response.metrics.returned_count == 3
    assert response.metrics.exact_match_count == 1
    assert response.metrics.elapsed_ms >= 0.0


def test_limit_and_threshold_are_applied_before_ranking() -> None:
    search = CatalogSearch(config=SearchConfig(default_limit=1))

    limited = search.search("DIN 933", _candidates())
    assert [(item.id, item.rank) for item in limited.results] == [("b", 1)]

    thresholded = CatalogSearch().search("DIN 933", _candidates(), threshold=40)
    assert [item.id for item in thresholded.results] == ["b"]


def test_empty_candidate_list_is_not_an_error() -> None:
    response = CatalogSearch().search("hex bolt", [])

    assert response.results == []
    assert response.metrics.returned_count == 0
    assert response.as_dict()["query_type"] == "product_type"
