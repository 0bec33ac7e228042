"""Repair of mis-decoded catalog text before extraction."""

from __future__ import annotations

import re

# UTF-8 bytes that were decoded as Latin-1/cp1252, plus private-use glyphs
# emitted by PDF symbol fonts.
MOJIBAKE_REPLACEMENTS: dict[str, str] = {
    "Ã…": "Å",
    "Ã„": "Ä",
    "Ã–": "Ö",
    "Ãœ": "Ü",
    "ÃŸ": "ß",
    "Ã¥": "å",
    "Ã¤": "ä",
    "Ã¶": "ö",
    "Ã¼": "ü",
    "Ã©": "é",
    "Ã¨": "è",
    "Ã¡": "á",
    "Ã³": "ó",
    "Ãº": "ú",
    "Ã±": "ñ",
    "Ã—": "×",
    "â‚¬": "€",
    "â€“": "–",
    "â€”": "—",
    "â€™": "'",
    "â€˜": "'",
    "â€œ": '"',
    "â€\x9d": '"',
    "â€¢": "•",
    "â€¦": "…",
    "â€": '"',
    "Â®": "®",
    "Â©": "©",
    "Â°": "°",
    "Â±": "±",
    "\u00c2\u00a0": " ",
    "\uf0b7": "\u2022",
    "\uf0d8": "\u2192",
}

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0e-\x1f\x7f]")


def _compile(replacements: dict[str, str]) -> re.Pattern[str]:
    # Longest sequences first so that e.g. "â€“" wins over the bare "â€".
    return re.compile(
        "|".join(re.escape(key) for key in sorted(replacements, key=len, reverse=True))
    )


class TextNormalizer:
    """Deterministic, idempotent clean-up of raw chunk text.

    Control characters are removed first, then known mojibake sequences are
    replaced until none remain (a replacement can complete a sequence with
    its left neighbour, e.g. "Ãâ€”"), then surrounding whitespace is
    trimmed.
    """

    def __init__(self, replacements: dict[str, str] | None = None) -> None:
        self._replacements = dict(replacements or MOJIBAKE_REPLACEMENTS)
        self._pattern = _compile(self._replacements)

    def normalize(self, text: str) -> str:
        if not text:
            return ""
        cleaned = _CONTROL_CHARS.sub("", text)
        while True:
            repaired = self._pattern.sub(self._replace, cleaned)
            if repaired == cleaned:
                break
            cleaned = repaired
        return cleaned.strip()

    def _replace(self, match: re.Match[str]) -> str:
        return self._replacements[match.group(0)]


_DEFAULT_NORMALIZER = TextNormalizer()


def normalize_text(text: str) -> str:
    """Normalize text with the built-in replacement table."""
    return _DEFAULT_NORMALIZER.normalize(text)
