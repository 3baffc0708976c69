"""Markup lexer boundary.

The layout engine only sees the block dataclasses defined here. Any object
with a ``parse(markup) -> list[Block]`` method can stand in for the
markdown-it backed parser.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol, Union

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.container import container_plugin

_ADMONITION_KINDS = ("tip", "info", "warning", "note")
# an alert's first line plus every quoted line that continues it
_ALERT_RE = re.compile(
    r"^[ \t]*>[ \t]*\[!(?P<kind>tip|info|warning|note)\][ \t]*(?P<title>.*)\n?(?P<body>(?:[ \t]*>.*(?:\n|$))*)",
    re.IGNORECASE | re.MULTILINE,
)
_FENCE_RE = re.compile(r"^[ \t]*```.*?^[ \t]*```[^\n]*$", re.MULTILINE | re.DOTALL)
_QUOTE_PREFIX_RE = re.compile(r"^\s*>\s?")


@dataclass(frozen=True)
class Heading:
    depth: int
    text: str


@dataclass(frozen=True)
class Paragraph:
    text: str


@dataclass(frozen=True)
class Code:
    text: str
    language: str = ""


@dataclass(frozen=True)
class ListItem:
    text: str
    children: tuple["Block", ...] = ()


@dataclass(frozen=True)
class ListBlock:
    items: tuple[ListItem, ...]
    ordered: bool = False
    start: int = 1


@dataclass(frozen=True)
class Blockquote:
    text: str
    title: str = ""


@dataclass(frozen=True)
class Space:
    lines: int = 1


@dataclass(frozen=True)
class Raw:
    text: str


Block = Union[Heading, Paragraph, Code, ListBlock, Blockquote, Space, Raw]


class MarkupParser(Protocol):
    def parse(self, markup: str) -> list[Block]: ...


def _alert_to_container(match: re.Match[str]) -> str:
    kind = match.group("kind").lower()
    head = f"::: {kind} {match.group('title').strip()}".rstrip()
    body = [_QUOTE_PREFIX_RE.sub("", line) for line in match.group("body").splitlines()]
    return "\n".join([head, *body, ":::"]) + "\n"


def _normalize_admonitions(markdown: str) -> str:
    """Rewrite ``> [!TIP] title`` alerts into ``::: tip title`` containers.

    Fenced code is copied through untouched.
    """
    out: list[str] = []
    pos = 0
    for fence in _FENCE_RE.finditer(markdown):
        out.append(_ALERT_RE.sub(_alert_to_container, markdown[pos : fence.start()]))
        out.append(fence.group(0))
        pos = fence.end()
    out.append(_ALERT_RE.sub(_alert_to_container, markdown[pos:]))
    return "".join(out)


def _build_markdown_parser() -> MarkdownIt:
    md = MarkdownIt("commonmark", {"html": False})
    md.enable("table")
    for kind in _ADMONITION_KINDS:
        md.use(container_plugin, kind)
    return md


def _inline_text(token: Token | None) -> str:
    if token is None:
        return ""
    if token.type != "inline" or not token.children:
        return token.content or ""
    parts: list[str] = []
    for child in token.children:
        if child.type in {"text", "code_inline"}:
            parts.append(child.content)
        elif child.type == "softbreak":
            parts.append(" ")
        elif child.type == "hardbreak":
            parts.append("\n")
        elif child.type == "image":
            parts.append(child.content or "")
    return "".join(parts)


def _list_start(token: Token) -> int:
    raw = token.attrGet("start")
    if raw is None:
        return 1
    try:
        return int(raw)
    except (TypeError, ValueError):
        return 1


def _parse_block(tokens: list[Token], start_idx: int, open_type: str, close_type: str) -> tuple[list[Token], int]:
    depth = 1
    i = start_idx + 1
    inner_start = i
    while i < len(tokens):
        t = tokens[i].type
        if t == open_type:
            depth += 1
        elif t == close_type:
            depth -= 1
            if depth == 0:
                break
        i += 1
    return tokens[inner_start:i], i + 1


def _plain_text(blocks: list[Block]) -> str:
    parts: list[str] = []
    for block in blocks:
        if isinstance(block, (Heading, Paragraph, Raw, Blockquote, Code)):
            parts.append(block.text)
        elif isinstance(block, ListBlock):
            for item in block.items:
                parts.append(item.text)
                parts.append(_plain_text(list(item.children)))
    return "\n".join(p for p in parts if p)


def _list_items(tokens: list[Token]) -> tuple[ListItem, ...]:
    items: list[ListItem] = []
    i = 0
    while i < len(tokens):
        if tokens[i].type != "list_item_open":
            i += 1
            continue
        inner, i = _parse_block(tokens, i, "list_item_open", "list_item_close")
        blocks = _blocks_from_tokens(inner, track_spacing=False)
        lead: list[str] = []
        rest = list(blocks)
        while rest and isinstance(rest[0], Paragraph):
            lead.append(rest.pop(0).text)
        items.append(ListItem(text=" ".join(lead), children=tuple(rest)))
    return tuple(items)


def _table_rows(tokens: list[Token]) -> list[str]:
    rows: list[str] = []
    cells: list[str] = []
    for tok in tokens:
        if tok.type == "tr_open":
            cells = []
        elif tok.type == "inline":
            cells.append(_inline_text(tok).strip())
        elif tok.type == "tr_close":
            rows.append(" | ".join(cells))
    return rows


def _blocks_from_tokens(tokens: list[Token], *, track_spacing: bool = True) -> list[Block]:
    blocks: list[Block] = []
    last_end: int | None = None
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        t = tok.type

        # Blank source lines between top-level blocks become Space blocks.
        if track_spacing and tok.level == 0 and tok.map and tok.nesting >= 0:
            if last_end is not None and tok.map[0] > last_end:
                blocks.append(Space(lines=tok.map[0] - last_end))
            last_end = tok.map[1]

        if t == "heading_open":
            depth = int(tok.tag[1]) if tok.tag.startswith("h") else 2
            text = _inline_text(tokens[i + 1] if i + 1 < len(tokens) else None).strip()
            if text:
                blocks.append(Heading(depth=depth, text=text))
            i += 3
            continue

        if t == "paragraph_open":
            text = _inline_text(tokens[i + 1] if i + 1 < len(tokens) else None).strip()
            if text:
                blocks.append(Paragraph(text=text))
            i += 3
            continue

        if t in {"fence", "code_block"}:
            text = tok.content[:-1] if tok.content.endswith("\n") else tok.content
            info = (tok.info or "").strip()
            blocks.append(Code(text=text, language=info.split()[0] if info else ""))
            i += 1
            continue

        if t in {"bullet_list_open", "ordered_list_open"}:
            close = t.replace("_open", "_close")
            inner, i = _parse_block(tokens, i, t, close)
            blocks.append(
                ListBlock(
                    items=_list_items(inner),
                    ordered=t.startswith("ordered"),
                    start=_list_start(tok) if t.startswith("ordered") else 1,
                )
            )
            continue

        if t == "blockquote_open":
            inner, i = _parse_block(tokens, i, "blockquote_open", "blockquote_close")
            text = _plain_text(_blocks_from_tokens(inner, track_spacing=False))
            if text:
                blocks.append(Blockquote(text=text))
            continue

        if t.startswith("container_") and t.endswith("_open"):
            kind = t[len("container_") : -len("_open")]
            info = (tok.info or "").strip().split(None, 1)
            title = info[1].strip() if len(info) > 1 else kind.title()
            inner, i = _parse_block(tokens, i, t, f"container_{kind}_close")
            text = _plain_text(_blocks_from_tokens(inner, track_spacing=False))
            blocks.append(Blockquote(text=text, title=title))
            continue

        if t == "table_open":
            inner, i = _parse_block(tokens, i, "table_open", "table_close")
            rows = _table_rows(inner)
            if rows:
                blocks.append(Raw(text="\n".join(rows)))
            continue

        i += 1
    return blocks


class MarkdownItParser:
    def __init__(self) -> None:
        self._md = _build_markdown_parser()

    def parse(self, markup: str) -> list[Block]:
        source = str(markup or "").replace("\r\n", "\n")
        if not source.strip():
            return []
        return _blocks_from_tokens(self._md.parse(_normalize_admonitions(source)))
