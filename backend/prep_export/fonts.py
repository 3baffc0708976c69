from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fpdf import FPDF

from .logging_utils import get_logger

log = get_logger(__name__)

_UNICODE_FONTS = {
    "body": {
        "family": "DejaVuSans",
        "files": {
            "": "DejaVuSans.ttf",
            "B": "DejaVuSans-Bold.ttf",
            "I": "DejaVuSans-Oblique.ttf",
            "BI": "DejaVuSans-BoldOblique.ttf",
        },
    },
    "mono": {
        "family": "DejaVuSansMono",
        "files": {
            "": "DejaVuSansMono.ttf",
        },
    },
}

# characters the core fonts cannot encode, folded to ASCII
_ASCII_TABLE = str.maketrans(
    {
        "\u00a0": " ",
        "\u200b": "",
        "\u2013": "-",
        "\u2014": "--",
        "\u2212": "-",
        "\u2018": "'",
        "\u2019": "'",
        "\u201c": '"',
        "\u201d": '"',
        "\u2022": "-",
        "\u2026": "...",
        "\u2190": "<-",
        "\u2192": "->",
        "\u21d2": "=>",
        "\t": "    ",
    }
)


@dataclass(frozen=True)
class FontSet:
    body: str = "Helvetica"
    mono: str = "Courier"
    unicode_body: bool = False
    unicode_mono: bool = False

    def sanitize(self, text: str, *, mono: bool = False) -> str:
        allow_unicode = self.unicode_mono if mono else self.unicode_body
        return sanitize_pdf_text(text, allow_unicode=allow_unicode)


def sanitize_pdf_text(text: str, *, allow_unicode: bool) -> str:
    if allow_unicode:
        return text.replace("\t", "    ")
    cleaned = text.translate(_ASCII_TABLE)
    return cleaned.encode("latin-1", "replace").decode("latin-1")


def register_fonts(pdf: FPDF, font_dir: Path | None) -> FontSet:
    if font_dir is None or not font_dir.exists():
        return FontSet()
    registered: dict[str, str] = {}
    for key, meta in _UNICODE_FONTS.items():
        family = meta["family"]
        files = meta["files"]
        # every style or none
        if not all((font_dir / filename).exists() for filename in files.values()):
            continue
        for style, filename in files.items():
            pdf.add_font(family, style=style, fname=str(font_dir / filename))
        registered[key] = family
    if registered:
        log.debug("Registered unicode fonts from %s: %s", font_dir, ", ".join(sorted(registered.values())))
    return FontSet(
        body=registered.get("body", "Helvetica"),
        mono=registered.get("mono", "Courier"),
        unicode_body="body" in registered,
        unicode_mono="mono" in registered,
    )
