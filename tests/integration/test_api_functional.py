from fastapi.testclient import TestClient


def test_api_extract_classify_search_and_standards() -> None:
    from fastener_catalog.api.main import app

    client = TestClient(app)

    health_resp = client.get("/health")
    assert health_resp.status_code == 200
    assert health_resp.json()["standards_loaded"] > 0

    extract_resp = client.post(
        "/extract",
        json={"text": "Hexagon bolt DIN 933 M8x40 A2-70 S100 270,00 â‚¬"},
    )
    assert extract_resp.status_code == 200
    extracted = extract_resp.json()
    assert extracted["text"].endswith("€")
    assert extracted["metadata"]["standard"] == "DIN 933"
    assert extracted["metadata"]["box_quantity"] == 100
    assert extracted["metadata"]["document_id"] == "adhoc"
    assert "supplier" not in extracted["metadata"]

    classify_resp = client.post("/classify", json={"query": "DIN 933"})
    assert classify_resp.status_code == 200
    classified = classify_resp.json()
    assert classified["type"] == "standard_code"
    assert classified["requires_exact_match"] is True
    assert classified["equivalent_standards"] == ["ISO4017"]

    search_resp = client.post(
        "/search",
        json={
            "query": "DIN 933",
            "candidates": [
                {"id": "a", "content": "DIN 931 bolt", "score": 0.95, "metadata": {"standard": "DIN 931"}},
                {"id": "b", "content": "DIN 933 bolt", "score": 0.4, "metadata": {"standard": "DIN 933"}},
            ],
        },
    )
    assert search_resp.status_code == 200
    payload = search_resp.json()
    assert [item["id"] for item in payload["results"]] == ["b", "a"]
    assert payload["suggestions"] == ["ISO 4017"]
    assert payload["metrics"]["returned_count"] == 2

    standard_resp = client.get("/standards/din933")
    assert standard_resp.status_code == 200
    assert standard_resp.json()["equivalent"] == ["ISO4017"]

    missing_resp = client.get("/standards/DIN9999")
    assert missing_resp.status_code == 404


def test_api_compatibility_and_validation() -> None:
    from fastener_catalog.api.main import app

    client = TestClient(app)

    compat_resp = client.post(
        "/compatibility",
        json={
            "source": {"id": "s", "score": 1.0, "metadata": {"thread_type": "M8X40"}},
            "candidates": [
                {"id": "x", "score": 0.5, "metadata": {"thread_type": "M8X40"}},
                {"id": "y", "score": 0.6, "metadata": {}},
            ],
        },
    )
    assert compat_resp.status_code == 200
    items = compat_resp.json()["items"]
    assert [item["id"] for item in items] == ["x", "y"]
    assert items[0]["compatibility_score"] == 70

    assert client.post("/classify", json={"query": ""}).status_code == 422
    assert client.post("/search", json={"query": "DIN 933", "limit": 0}).status_code == 422


def test_api_extract_returns_storage_record() -> None:
    from fastener_catalog.api.main import app

    client = TestClient(app)

    resp = client.post(
        "/extract",
        json={
            "text": "M 8x40S100270,00 brass",
            "chunk_id": "cat-2024-p12-3",
            "document_id": "cat-2024",
            "document_name": "Catalogue 2024.pdf",
            "page_number": 12,
            "supplier": "reyher",
        },
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["chunk_id"] == "cat-2024-p12-3"
    record = body["metadata"]
    assert record["document_id"] == "cat-2024"
    assert record["document_name"] == "Catalogue 2024.pdf"
    assert record["page_number"] == 12
    assert record["supplier"] == "reyher"
    assert record["box_quantity"] == 100
    assert record["price_info"] == "€270.00 - €270.00"

    invalid = client.post("/extract", json={"text": "DIN 933", "page_number": 0})
    assert invalid.status_code == 422
