from fastener_catalog.ingest.normalizer import TextNormalizer, normalize_text


def test_repairs_latin1_mojibake() -> None:
    assert normalize_text("Ã¼ber Ã–l") == "über Öl"
    assert normalize_text("Preis 10,00 â‚¬") == "Preis 10,00 €"
    assert normalize_text("â€œHexâ€\x9d bolt") == '"Hex" bolt'


def test_replaces_pdf_symbol_glyphs() -> None:
    assert normalize_text("\uf0b7 DIN 933") == "\u2022 DIN 933"
    assert normalize_text("M8 \uf0d8 M10") == "M8 \u2192 M10"


def test_strips_control_characters_but_keeps_layout() -> None:
    assert normalize_text("DIN\x00 933\x07") == "DIN 933"
    assert normalize_text("M8\tA2\nS100") == "M8\tA2\nS100"


def test_empty_and_whitespace_input() -> None:
    assert normalize_text("") == ""
    assert normalize_text("   \n ") == ""


def test_normalization_is_idempotent() -> None:
    samples = [
        "Ã¤Ã¶Ã¼ â€“ 12,50 â‚¬\x01",
        "  Hexagon bolt DIN 933 M8x40 A2-70  ",
        "Â°C Â± 5",
    ]
    for sample in samples:
        once = normalize_text(sample)
        assert normalize_text(once) == once


def test_custom_replacement_table() -> None:
    normalizer = TextNormalizer({"Ø": "diameter "})

    assert normalizer.normalize("Ø8 mm") == "diameter 8 mm"
