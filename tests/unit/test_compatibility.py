from fastener_catalog.retrieval.compatibility import CompatibilityRanker, compatibility_reasons
from fastener_catalog.types import Candidate

_SOURCE = Candidate(
    "source",
    "Hexagon bolt DIN 933 M8x40 A2-70",
    1.0,
    {"thread_type": "M8X40", "material": "A2-70", "material_family": "stainless"},
)


def test_rank_scores_and_orders_matches() -> None:
    candidates = [
        _SOURCE,
        Candidate("plain", "", 0.3, {}),
        Candidate(
            "same",
            "",
            0.5,
            {
                "thread_type": "M8X40",
                "material": "A2-70",
                "material_family": "stainless",
                "standard": "DIN 934",
            },
        ),
        Candidate(
            "a4",
            "",
            0.9,
            {"thread_type": "M8X40", "material": "A4-70", "material_family": "stainless"},
        ),
    ]

    matches = CompatibilityRanker().rank(_SOURCE, candidates)

    assert [match.id for match in matches] == ["a4", "same", "plain"]
    assert [match.compatibility_score for match in matches] == [100, 95, 30]
    assert matches[0].semantic_score == 90
    assert matches[0].reasons == (
        "Matching thread type: M8X40",
        "Compatible stainless steel materials",
    )
    assert matches[1].reasons == (
        "Matching thread type: M8X40",
        "Same material: A2-70",
        "Standard: DIN 934",
    )
    assert matches[2].reasons == ("Semantically similar product",)


def test_rank_respects_limit() -> None:
    candidates = [Candidate(f"c{i}", "", 0.1 * i, {}) for i in range(5)]

    matches = CompatibilityRanker().rank(_SOURCE, candidates, limit=2)

    assert [match.id for match in matches] == ["c4", "c3"]


def test_reasons_without_shared_attributes() -> None:
    assert compatibility_reasons({}, {"standard": "DIN 125"}) == ["Standard: DIN 125"]
