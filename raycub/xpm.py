"""Reading XPM pixmaps into images."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from .colors import text_rgb
from .image import Image
from .text import find, find_unquoted, split_words

_TRANSPARENT = 0xFF000000
_ATOI_RE = re.compile(r"\s*([+-]?\d+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read."""


def _atoi(word: str) -> int:
    match = _ATOI_RE.match(word)
    return int(match.group(1)) if match else 0


def strip_comments(text: str) -> str:
    """Blank out C comments outside quoted strings, keeping text length."""
    while (begin := find_unquoted(text, "/*", len(text))) != -1:
        rest = text[begin + 2:]
        end = find(rest, "*/", len(rest))
        span = end + 4
        text = text[:begin] + " " * len(text[begin:begin + span]) + text[begin + span:]
    while (begin := find_unquoted(text, "//", len(text))) != -1:
        rest = text[begin + 2:]
        end = find(rest, "\n", len(rest))
        span = end + 3
        text = text[:begin] + " " * len(text[begin:begin + span]) + text[begin + span:]
    return text


def quoted_strings(text: str) -> Iterator[str]:
    """Yield the contents of each double-quoted string in ``text``."""
    pos = 0
    while (start := text.find('"', pos)) != -1:
        end = text.find('"', start + 1)
        if end == -1:
            return
        yield text[start + 1:end]
        pos = end + 1


def _next_line(lines: Iterator[str], what: str) -> str:
    line = next(lines, None)
    if line is None:
        raise XpmError(f"XPM data ends before {what}")
    return line


def parse_xpm(lines: Iterable[str]) -> Image:
    """Build an image from XPM strings: header, colour lines, then pixel rows."""
    rows = iter(lines)
    header = split_words(_next_line(rows, "the header"))
    if len(header) < 4:
        raise XpmError("XPM header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid XPM header: {' '.join(header[:4])!r}")

    # One or two chars per pixel: later definitions win; wider keys: first wins.
    last_wins = cpp <= 2
    colors: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_line(rows, "all colour definitions")
        words = split_words(line[cpp:])
        try:
            index = words.index("c") + 1
        except ValueError:
            raise XpmError(f"colour line without 'c' key: {line!r}") from None
        if index >= len(words):
            raise XpmError(f"colour line without a colour: {line!r}")
        suffix: Optional[str] = words[index + 1] if index + 1 < len(words) else None
        value = text_rgb(words[index], suffix)
        key = line[:cpp]
        if last_wins:
            colors[key] = value
        else:
            colors.setdefault(key, value)

    image = Image(width, height)
    for y in range(height):
        line = _next_line(rows, "all pixel rows")
        for x in range(width):
            color = colors.get(line[cpp * x:cpp * x + cpp], 0)
            if color == -1:
                color = _TRANSPARENT
            image.put_pixel(x, y, color)
    return image


def xpm_from_text(text: str) -> Image:
    """Parse the text of an XPM file."""
    return parse_xpm(quoted_strings(strip_comments(text)))


def load_xpm(path: Union[str, Path]) -> Image:
    """Read and parse an XPM file; OSError propagates if it cannot be read."""
    return xpm_from_text(Path(path).read_text(encoding="latin-1"))