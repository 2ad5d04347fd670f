"""Reader and writer for flat Java-style ``.properties`` files."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional


LOGGER = logging.getLogger("claude_translator.properties")

_SEPARATORS = "=:"
_UNESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_ESCAPES = {"\\": "\\\\", "\t": "\\t", "\n": "\\n", "\r": "\\r", "\f": "\\f"}


def load_properties(path: Path) -> Dict[str, str]:
    """Return the key/value pairs stored in *path*, or an empty dict when it does not exist."""
    path = Path(path)
    if not path.exists():
        LOGGER.debug("Properties file %s not found; starting empty.", path)
        return {}
    raw = path.read_bytes()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        # Files written by Java tools are ISO-8859-1.
        LOGGER.debug("Properties file %s is not UTF-8; reading it as ISO-8859-1.", path)
        text = raw.decode("latin-1")
    return parse_properties(text)


def parse_properties(text: str) -> Dict[str, str]:
    properties: Dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_entry(line)
        properties[_unescape(key)] = _unescape(value)
    return properties


def save_properties(path: Path, properties: Mapping[str, str], comment: Optional[str] = None) -> Path:
    """Write *properties* to *path*, replacing any existing file."""
    path = Path(path)
    lines: List[str] = []
    if comment:
        lines.append(f"#{comment}")
    lines.append(f"#{datetime.now().strftime('%a %b %d %H:%M:%S %Y')}")
    for key, value in properties.items():
        lines.append(f"{_escape(key, is_key=True)}={_escape(value, is_key=False)}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="ascii")
    LOGGER.debug("Wrote %d properties to %s", len(properties), path)
    return path


def _logical_lines(text: str) -> Iterator[str]:
    pending = ""
    continuing = False
    for raw in text.splitlines():
        line = raw.lstrip()
        if not continuing and (not line or line[0] in "#!"):
            continue
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending += line[:-1]
            continuing = True
            continue
        yield pending + line
        pending = ""
        continuing = False
    if continuing and pending:
        yield pending


def _split_entry(line: str) -> tuple[str, str]:
    index = 0
    escaped = False
    while index < len(line):
        char = line[index]
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in _SEPARATORS or char.isspace():
            break
        index += 1

    key = line[:index]
    rest = line[index:].lstrip()
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip()
    return key, rest


def _unescape(text: str) -> str:
    out: List[str] = []
    index = 0
    while index < len(text):
        char = text[index]
        if char != "\\" or index + 1 >= len(text):
            out.append(char)
            index += 1
            continue
        nxt = text[index + 1]
        if nxt == "u" and index + 6 <= len(text):
            try:
                out.append(chr(int(text[index + 2 : index + 6], 16)))
                index += 6
                continue
            except ValueError:
                pass
        out.append(_UNESCAPES.get(nxt, nxt))
        index += 2
    # Recombine surrogate pairs produced by \u escapes.
    return "".join(out).encode("utf-16-be", "surrogatepass").decode("utf-16-be", "surrogatepass")


def _escape(text: str, is_key: bool) -> str:
    out: List[str] = []
    for position, char in enumerate(text):
        if char in _ESCAPES:
            out.append(_ESCAPES[char])
        elif char in "=:#!":
            out.append("\\" + char)
        elif char == " " and (is_key or position == 0):
            out.append("\\ ")
        elif not " " <= char <= "~":
            out.extend(_unicode_escape(char))
        else:
            out.append(char)
    return "".join(out)


def _unicode_escape(char: str) -> List[str]:
    # Code points above U+FFFF are written as a UTF-16 surrogate pair.
    units = char.encode("utf-16-be", "surrogatepass")
    return [f"\\u{int.from_bytes(units[i : i + 2], 'big'):04x}" for i in range(0, len(units), 2)]


__all__ = ["load_properties", "parse_properties", "save_properties"]
