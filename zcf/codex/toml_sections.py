import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

Key = Tuple[str, ...]

_BARE_KEY_RE = re.compile(r"[A-Za-z0-9_-]+")
_BASIC_KEY_RE = re.compile(r'"((?:[^"\\\n]|\\.)*)"')
_LITERAL_KEY_RE = re.compile(r"'([^'\n]*)'")
_ESCAPE_RE = re.compile(r"\\(u[0-9A-Fa-f]{4}|U[0-9A-Fa-f]{8}|.)")
_ESCAPES = {"b": "\b", "t": "\t", "n": "\n", "f": "\f", "r": "\r", '"': '"', "\\": "\\"}


@dataclass
class Item:
    """One logical statement: a blank line, a comment, a header or a key/value."""

    kind: str
    lines: List[str]
    key: Optional[Key] = None


@dataclass
class Section:
    """A table header and the statements below it. The root section has no header."""

    key: Optional[Key] = None
    is_array: bool = False
    header: Optional[str] = None
    items: List[Item] = field(default_factory=list)

    def text(self) -> str:
        lines = [self.header] if self.header is not None else []
        for item in self.items:
            lines.extend(item.lines)
        return "\n".join(lines)


class _ValueScanner:
    """Tracks whether a value continues past the end of a physical line."""

    def __init__(self):
        self.depth = 0
        self.multiline: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.depth > 0 or self.multiline is not None

    def feed(self, text: str) -> None:
        index = 0
        length = len(text)
        while index < length:
            if self.multiline:
                if self.multiline == '"""' and text[index] == "\\":
                    index += 2
                    continue
                if text.startswith(self.multiline, index):
                    end = index + 3
                    # up to two quotes may sit right before the closing delimiter
                    while end < length and text[end] == self.multiline[0] and end - index < 5:
                        end += 1
                    self.multiline = None
                    index = end
                    continue
                index += 1
                continue

            char = text[index]
            if char == "#":
                return
            if text.startswith('"""', index) or text.startswith("'''", index):
                self.multiline = text[index:index + 3]
                index += 3
                continue
            if char == '"':
                index += 1
                while index < length and text[index] != '"':
                    if text[index] == "\\":
                        index += 1
                    index += 1
                index += 1
                continue
            if char == "'":
                end = text.find("'", index + 1)
                index = length if end == -1 else end + 1
                continue
            if char in "[{":
                self.depth += 1
            elif char in "]}":
                self.depth = max(0, self.depth - 1)
            index += 1


def unescape_basic(value: str) -> str:
    def replace(match):
        token = match.group(1)
        if token[0] in "uU" and len(token) > 1:
            return chr(int(token[1:], 16))
        return _ESCAPES.get(token, token)

    return _ESCAPE_RE.sub(replace, value)


def _skip_ws(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in " \t":
        pos += 1
    return pos


def parse_key(text: str, pos: int = 0) -> Tuple[Optional[Key], int]:
    """Parse a dotted TOML key starting at pos. Returns (None, pos) on failure."""
    parts = []
    while True:
        pos = _skip_ws(text, pos)
        match = _BARE_KEY_RE.match(text, pos)
        if match:
            parts.append(match.group(0))
        else:
            match = _BASIC_KEY_RE.match(text, pos)
            if match:
                parts.append(unescape_basic(match.group(1)))
            else:
                match = _LITERAL_KEY_RE.match(text, pos)
                if not match:
                    return None, pos
                parts.append(match.group(1))
        pos = _skip_ws(text, match.end())
        if pos < len(text) and text[pos] == ".":
            pos += 1
            continue
        return tuple(parts), pos


def parse_header(line: str) -> Optional[Tuple[Key, bool]]:
    """Return (key, is_array) when the line is a table header."""
    stripped = line.strip()
    if stripped.startswith("[["):
        opening, closing = 2, "]]"
    elif stripped.startswith("["):
        opening, closing = 1, "]"
    else:
        return None

    key, pos = parse_key(stripped, opening)
    if key is None:
        return None
    pos = _skip_ws(stripped, pos)
    if not stripped.startswith(closing, pos):
        return None
    rest = stripped[pos + len(closing):].strip()
    if rest and not rest.startswith("#"):
        return None
    return key, opening == 2


def scan_items(lines: Iterable[str]) -> List[Item]:
    """Group physical lines into logical statements."""
    items: List[Item] = []
    pending = list(lines)
    index = 0
    while index < len(pending):
        line = pending[index]
        stripped = line.strip()
        if not stripped:
            items.append(Item("blank", [line]))
        elif stripped.startswith("#"):
            items.append(Item("comment", [line]))
        else:
            header = parse_header(stripped)
            if header is not None:
                items.append(Item("header", [line], header[0]))
            else:
                key, pos = parse_key(stripped)
                pos = _skip_ws(stripped, pos)
                if key is not None and stripped.startswith("=", pos):
                    rest = stripped[pos + 1:]
                else:
                    key, rest = None, stripped
                collected = [line]
                scanner = _ValueScanner()
                scanner.feed(rest)
                while scanner.is_open and index + 1 < len(pending):
                    index += 1
                    collected.append(pending[index])
                    scanner.feed(pending[index])
                items.append(Item("value", collected, key))
        index += 1
    return items


def split_sections(text: str) -> List[Section]:
    """Split TOML text into the root section followed by one section per header."""
    sections = [Section()]
    for item in scan_items(text.splitlines()):
        if item.kind == "header":
            header = parse_header(item.lines[0])
            sections.append(Section(key=item.key, is_array=header[1], header=item.lines[0]))
        else:
            sections[-1].items.append(item)
    return sections


def split_root_lines(lines: List[str]) -> Tuple[List[str], List[str]]:
    """Split raw lines at the first table header into (root scope, tables)."""
    consumed = 0
    for item in scan_items(lines):
        if item.kind == "header":
            return list(lines[:consumed]), list(lines[consumed:])
        consumed += len(item.lines)
    return list(lines), []
