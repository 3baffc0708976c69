from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[2]


REPO_ROOT = _repo_root()

FONT_DIR = Path(os.getenv("PREP_EXPORT_FONT_DIR", str(REPO_ROOT / "backend" / "assets" / "fonts")))

LOG_LEVEL = os.getenv("PREP_EXPORT_LOG_LEVEL", "INFO").upper()


@dataclass(frozen=True)
class LayoutConfig:
    """Page geometry and vertical rhythm, all in millimetres."""

    page_width: float = 210.0
    page_height: float = 297.0
    margin: float = 20.0
    line_height: float = 5.0
    code_line_height: float = 4.0
    code_padding: float = 4.0
    code_radius: float = 2.0
    font_dir: Path | None = None

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def bottom(self) -> float:
        return self.page_height - self.margin


def _env_float(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def load_layout_config() -> LayoutConfig:
    cfg = LayoutConfig(font_dir=FONT_DIR)
    overrides: dict[str, float] = {}
    for field_name, env_name in (
        ("page_width", "PREP_EXPORT_PAGE_WIDTH_MM"),
        ("page_height", "PREP_EXPORT_PAGE_HEIGHT_MM"),
        ("margin", "PREP_EXPORT_MARGIN_MM"),
    ):
        value = _env_float(env_name)
        if value is not None:
            overrides[field_name] = value
    if overrides:
        cfg = replace(cfg, **overrides)
    if cfg.page_height - 2 * cfg.margin < 40 or cfg.content_width < 40:
        raise ValueError("Page margins leave too little printable area")
    return cfg
