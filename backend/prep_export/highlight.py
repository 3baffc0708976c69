from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class ColorTag(str, Enum):
    KEYWORD = "keyword"
    STRING = "string"
    COMMENT = "comment"
    NUMBER = "number"
    FUNCTION = "function"
    OPERATOR = "operator"
    DEFAULT = "default"


SYNTAX_COLORS: dict[ColorTag, str] = {
    ColorTag.KEYWORD: "#c678dd",
    ColorTag.STRING: "#98c379",
    ColorTag.COMMENT: "#5c6370",
    ColorTag.NUMBER: "#d19a66",
    ColorTag.FUNCTION: "#61afef",
    ColorTag.OPERATOR: "#56b6c2",
    ColorTag.DEFAULT: "#abb2bf",
}

KEYWORDS = frozenset(
    {
        "const", "let", "var", "function", "return", "if", "else", "for", "while",
        "class", "extends", "import", "export", "from", "default", "async", "await",
        "try", "catch", "throw", "new", "this", "super", "static", "public", "private",
        "protected", "interface", "type", "enum", "implements", "readonly", "abstract",
        "def", "self", "None", "True", "False", "lambda", "yield", "with", "as",
        "in", "not", "and", "or", "is", "pass", "break", "continue", "elif",
        "int", "float", "double", "char", "boolean", "void", "string", "bool",
        "null", "undefined", "true", "false", "typeof", "instanceof", "switch", "case",
    }
)

_COMMENT_RE = re.compile(r"//.*|/\*.*?\*/|#.*", re.ASCII)
_STRING_RE = re.compile(r'"(?:[^"\\]|\\.)*"|\'(?:[^\'\\]|\\.)*\'|`(?:[^`\\]|\\.)*`', re.ASCII)
_NUMBER_RE = re.compile(r"\d+\.?\d*", re.ASCII)
_WORD_RE = re.compile(r"\w+", re.ASCII)
_OPERATOR_RE = re.compile(r"[+\-*/%=<>!&|^~?:]+")

_DEFAULT_RGB = (171, 178, 191)


@dataclass(frozen=True)
class ColoredSpan:
    text: str
    tag: ColorTag

    @property
    def rgb(self) -> tuple[int, int, int]:
        return hex_to_rgb(SYNTAX_COLORS[self.tag])


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    match = re.fullmatch(r"#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})", value or "")
    if not match:
        return _DEFAULT_RGB
    return tuple(int(part, 16) for part in match.groups())  # type: ignore[return-value]


def tokenize_line(line: str) -> list[ColoredSpan]:
    """Split one source line into colored spans.

    Leading matches are tried in a fixed order: comment, string, number,
    word (keyword or plain), operator run, then a single character. The
    spans always join back to ``line``. Comments and strings never continue
    onto the next line.
    """
    spans: list[ColoredSpan] = []
    pos = 0
    while pos < len(line):
        match = _COMMENT_RE.match(line, pos)
        if match:
            spans.append(ColoredSpan(match.group(0), ColorTag.COMMENT))
            pos = match.end()
            continue
        match = _STRING_RE.match(line, pos)
        if match:
            spans.append(ColoredSpan(match.group(0), ColorTag.STRING))
            pos = match.end()
            continue
        match = _NUMBER_RE.match(line, pos)
        if match:
            spans.append(ColoredSpan(match.group(0), ColorTag.NUMBER))
            pos = match.end()
            continue
        match = _WORD_RE.match(line, pos)
        if match:
            word = match.group(0)
            spans.append(ColoredSpan(word, ColorTag.KEYWORD if word in KEYWORDS else ColorTag.DEFAULT))
            pos = match.end()
            continue
        match = _OPERATOR_RE.match(line, pos)
        if match:
            spans.append(ColoredSpan(match.group(0), ColorTag.OPERATOR))
            pos = match.end()
            continue
        spans.append(ColoredSpan(line[pos], ColorTag.DEFAULT))
        pos += 1
    return spans
