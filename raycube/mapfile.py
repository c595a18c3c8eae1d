"""Reading and validating ``.cub`` scene files: headers, colours and the map grid."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from raycube.vector import Color

VALID_CELLS = frozenset("0123NESW")
PLAYER_CELLS = frozenset("NESW")
TEXTURE_KEYS = ("NO", "EA", "SO", "WE")
MIN_HEIGHT = 3
MAX_HEIGHT = 100

_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")
_ATOI_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9]*)")


class MapError(ValueError):
    """Raised when a scene file cannot be used."""


@dataclass
class Cell:
    """One square of the map grid."""

    value: str
    wall: bool = False
    door: bool = False
    visited: bool = False


@dataclass(eq=False)
class MapLine:
    """A raw map row with the columns of its first and last non-blank cell."""

    text: str
    off: int
    last: int
    y: int = 0
    prev: MapLine | None = field(default=None, repr=False)
    next: MapLine | None = field(default=None, repr=False)

    def at(self, index: int) -> str:
        """Character at ``index``, or an empty string outside the row."""
        if 0 <= index < len(self.text):
            return self.text[index]
        return ""


@dataclass
class CubConfig:
    """Everything a scene file describes."""

    textures: list[str | None] = field(default_factory=lambda: [None] * len(TEXTURE_KEYS))
    floor: Color | None = None
    ceiling: Color | None = None
    grid: list[list[Cell]] = field(default_factory=list)
    width: int = 0
    height: int = 0


def atoi(text: str) -> int:
    """Leading integer of ``text`` after blanks and an optional sign, else 0."""
    sign, digits = _ATOI_RE.match(text).groups()
    value = int(digits) if digits else 0
    return -value if sign == "-" else value


def split(text: str, sep: str) -> list[str]:
    """Non-empty pieces of ``text`` between occurrences of ``sep``."""
    return [piece for piece in text.split(sep) if piece]


def is_num(char: str) -> bool:
    return len(char) == 1 and "0" <= char <= "9"


def all_num(text: str) -> bool:
    return all(is_num(char) for char in text)


def empty(line: str) -> bool:
    """True when the line holds only spaces and newlines."""
    return not line.strip(" \n")


def _iter_lines(text: str) -> Iterator[str]:
    return (match.group(0) for match in _LINE_RE.finditer(text))


def parse_color(text: str) -> Color:
    """Parse ``R,G,B``; the text must end in a digit and hold three numeric parts."""
    if not text or not is_num(text[-1]):
        raise MapError(f"invalid colour {text!r}")
    parts = split(text, ",")
    if len(parts) != 3 or not all(all_num(part.strip(" ")) for part in parts):
        raise MapError(f"invalid colour {text!r}")
    red, green, blue = (atoi(part) for part in parts)
    return Color(red, green, blue)


def valid_component(config: CubConfig, line: str) -> bool:
    """Store one header line into ``config``; False if it is not a valid header."""
    trim = line.strip(" \n")
    for index, key in enumerate(TEXTURE_KEYS):
        if trim.startswith(key + " "):
            parts = split(trim, " ")
            if len(parts) != 2:
                return False
            config.textures[index] = parts[1]
            return True
    if trim.startswith("F ") or trim.startswith("C "):
        try:
            color = parse_color(trim[trim.index(" "):])
        except MapError:
            return False
        if trim[0] == "F":
            config.floor = color
        else:
            config.ceiling = color
        return True
    return False


def parse_headers(lines: Iterable[str], config: CubConfig) -> CubConfig:
    """Consume lines up to and including the sixth header from ``lines``."""
    found = 0
    for line in lines:
        if empty(line):
            continue
        if not valid_component(config, line):
            raise MapError("not valid headers")
        found += 1
        if found == len(TEXTURE_KEYS) + 2:
            return config
    raise MapError("not valid headers")


def parse_line(line: str) -> tuple[int, int]:
    """Return the first and last non-blank columns of a map row."""
    content = line.rstrip("\n")
    body = content.lstrip(" ")
    if not body:
        raise MapError("empty map row")
    bad = sorted(set(content) - VALID_CELLS - {" "})
    if bad:
        raise MapError(f"invalid map character {bad[0]!r}")
    return len(content) - len(body), len(content.rstrip(" ")) - 1


def _valid_pos(line: MapLine, index: int) -> bool:
    return line.at(index) in (" ", "1")


def check_around(line: MapLine, i: int) -> bool:
    """True when the neighbours of a blank at column ``i`` are blanks or walls."""
    if not _valid_pos(line, i - 1) or not _valid_pos(line, i + 1):
        return False
    for other in (line.prev, line.next):
        if other is not None and i < other.last - other.off and not _valid_pos(other, i):
            return False
    return True


def all_ones(line: MapLine) -> bool:
    """Check a border row: no doors or sprites and no exposed blanks."""
    for i, char in enumerate(line.text[line.off:line.last + 1], start=line.off):
        if char == "\n":
            break
        if (char == " " and not check_around(line, i)) or char in "23":
            return False
    return True


def check_first(line: MapLine, nb_chars: int) -> bool:
    """Check the leading cells that stick out past a neighbouring row."""
    return not any(
        line.at(i + line.off) == " " and not check_around(line, i) for i in range(nb_chars)
    )


def check_last(line: MapLine, nb_chars: int) -> bool:
    """Check the trailing cells that stick out past a neighbouring row."""
    for i in range(nb_chars):
        pos = line.last - i
        char = line.at(pos)
        if char == "0":
            for other in (line.prev, line.next):
                if other is not None and other.last < line.last:
                    return False
        if char == " " and not check_around(line, pos):
            return False
    return True


def wall_exist(current: MapLine, previous: MapLine) -> bool:
    """Check the overhang between two neighbouring rows."""
    if current.off < previous.off:
        return check_first(current, previous.off - current.off)
    if current.off > previous.off:
        return check_first(previous, current.off - previous.off)
    if current.last > previous.last:
        return check_last(current, current.last - previous.last)
    if current.last < previous.last:
        return check_last(previous, previous.last - current.last)
    return True


def parse_map(lines: list[MapLine]) -> bool:
    """True when the linked rows form a map closed by walls."""
    if len(lines) < 2:
        return False
    first, last = lines[0], lines[-1]
    if not all_ones(first) or not check_last(first.next, first.next.last - first.last):
        return False
    for curr in lines[:-1]:
        if curr.at(curr.off) != "1" or curr.at(curr.last) != "1":
            return False
        for i, char in enumerate(curr.text[1:curr.last], start=1):
            if char == "\n":
                break
            if char == " " and not check_around(curr, i):
                return False
    return all_ones(last) and check_last(last.prev, last.prev.last - last.last)


def _make_cell(char: str) -> Cell:
    if char in (" ", "1"):
        return Cell("1", wall=True)
    if char == "2":
        return Cell("2", door=True)
    return Cell(char)


def build_grid(lines: list[MapLine]) -> list[list[Cell]]:
    """Turn rows into a rectangular grid; blanks and padding become walls."""
    low = min(line.off for line in lines)
    width = max(line.last for line in lines) - low + 1
    grid = []
    for line in lines:
        segment = line.text[low:].split("\n", 1)[0][:width]
        row = [_make_cell(char) for char in segment]
        row.extend(Cell("1", wall=True) for _ in range(width - len(row)))
        grid.append(row)
    return grid


def parse_map_lines(lines: Iterable[str], config: CubConfig) -> CubConfig:
    """Read the map rows that follow the headers into ``config``."""
    rows: list[MapLine] = []
    for text in lines:
        if empty(text):
            if rows:
                raise MapError("not a valid map")
            continue
        off, last = parse_line(text)
        node = MapLine(text, off, last, len(rows))
        if rows:
            node.prev = rows[-1]
            rows[-1].next = node
        rows.append(node)
    players = sum(char in PLAYER_CELLS for row in rows for char in row.text)
    if not MIN_HEIGHT <= len(rows) <= MAX_HEIGHT or players != 1 or not parse_map(rows):
        raise MapError("not a valid map")
    config.grid = build_grid(rows)
    config.height = len(rows)
    config.width = len(config.grid[0])
    return config


def parse_cub(text: str) -> CubConfig:
    """Parse the contents of a scene file."""
    lines = _iter_lines(text)
    config = CubConfig()
    parse_headers(lines, config)
    return parse_map_lines(lines, config)


def load_cub(path: str | os.PathLike[str]) -> CubConfig:
    """Read and parse a ``.cub`` file."""
    name = os.fspath(path)
    dot = name.rfind(".")
    if dot < 0 or name[dot:] != ".cub":
        raise MapError("not a valid extension")
    try:
        text = Path(name).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise MapError(f"failed to open {name}") from exc
    return parse_cub(text)