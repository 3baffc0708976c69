"""Tests for layout configuration and font selection."""

from __future__ import annotations

from pathlib import Path

import pytest
from fpdf import FPDF

from prep_export.config import LayoutConfig, load_layout_config
from prep_export.fonts import FontSet, register_fonts, sanitize_pdf_text


class TestLayoutConfig:
    """Environment overrides for page geometry."""

    def test_defaults_are_a4(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("PREP_EXPORT_PAGE_WIDTH_MM", "PREP_EXPORT_PAGE_HEIGHT_MM", "PREP_EXPORT_MARGIN_MM"):
            monkeypatch.delenv(name, raising=False)
        cfg = load_layout_config()
        assert (cfg.page_width, cfg.page_height, cfg.margin) == (210.0, 297.0, 20.0)
        assert cfg.content_width == 170.0
        assert cfg.bottom == 277.0

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PREP_EXPORT_PAGE_HEIGHT_MM", "279.4")
        monkeypatch.setenv("PREP_EXPORT_MARGIN_MM", "15")
        cfg = load_layout_config()
        assert cfg.page_height == pytest.approx(279.4)
        assert cfg.bottom == pytest.approx(264.4)

    @pytest.mark.parametrize("value", ["abc", "-5", "0"])
    def test_bad_values(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("PREP_EXPORT_MARGIN_MM", value)
        with pytest.raises(ValueError):
            load_layout_config()

    def test_margins_must_leave_room(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PREP_EXPORT_MARGIN_MM", "100")
        with pytest.raises(ValueError):
            load_layout_config()


class TestFonts:
    """Unicode fonts are optional."""

    def test_missing_dir_falls_back_to_core_fonts(self, tmp_path: Path) -> None:
        fonts = register_fonts(FPDF(), tmp_path / "nope")
        assert fonts == FontSet()

    def test_partial_family_is_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "DejaVuSans.ttf").write_bytes(b"")
        fonts = register_fonts(FPDF(), tmp_path)
        assert fonts.body == "Helvetica"
        assert not fonts.unicode_body

    def test_no_font_dir(self) -> None:
        assert register_fonts(FPDF(), LayoutConfig().font_dir) == FontSet()

    def test_sanitize_for_core_fonts(self) -> None:
        assert sanitize_pdf_text("“quoted” — done\t…", allow_unicode=False) == '"quoted" -- done    ...'

    def test_unmapped_characters_become_question_marks(self) -> None:
        assert sanitize_pdf_text("a ≠ b, café", allow_unicode=False) == "a ? b, café"

    def test_sanitize_for_unicode_fonts(self) -> None:
        assert sanitize_pdf_text("→\tx", allow_unicode=True) == "→    x"

    def test_font_set_picks_mono_rules(self) -> None:
        fonts = FontSet(unicode_body=True, unicode_mono=False)
        assert fonts.sanitize("•") == "•"
        assert fonts.sanitize("•", mono=True) == "-"
