# src/jotlist/tasks/ids.py

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from .errors import EmptyIdListError, IdParseError

MAX_RANGE_SPAN = 1000

_PIECE_SPLIT_RE = re.compile(r"[,\s]+")
_RANGE_RE = re.compile(r"(\d+)-(\d+)", re.ASCII)
_ID_TOKEN_RE = re.compile(r"[\d,\s-]*\d[\d,\s-]*", re.ASCII)


def _parse_piece(piece: str) -> range | int:
    if piece.isascii() and piece.isdigit():
        value = int(piece)
        if value <= 0:
            raise IdParseError(piece, "task ids start at 1")
        return value

    m = _RANGE_RE.fullmatch(piece)
    if m is None:
        raise IdParseError(piece)
    start, end = int(m.group(1)), int(m.group(2))
    if start <= 0:
        raise IdParseError(piece, "task ids start at 1")
    if start > end:
        raise IdParseError(piece, "range start is greater than its end")
    if end - start + 1 > MAX_RANGE_SPAN:
        raise IdParseError(piece, f"ranges are limited to {MAX_RANGE_SPAN} ids")
    return range(start, end + 1)


def parse_ids(args: Iterable[str]) -> list[int]:
    """
    Parse id arguments into a deduplicated list, first-seen order.

    Each token may hold several ids separated by commas or whitespace, and
    inclusive ranges such as "3-5". Empty pieces (",3", "1,,2") are skipped.
    A piece that is not an id raises IdParseError naming that piece; no ids
    at all raises EmptyIdListError.
    """
    seen: dict[int, None] = {}
    for token in args:
        for piece in _PIECE_SPLIT_RE.split(token):
            if not piece:
                continue
            parsed = _parse_piece(piece)
            if isinstance(parsed, range):
                for value in parsed:
                    seen.setdefault(value, None)
            else:
                seen.setdefault(parsed, None)

    if not seen:
        raise EmptyIdListError()
    return list(seen)


def looks_like_ids(token: str) -> bool:
    return _ID_TOKEN_RE.fullmatch(token) is not None


def split_edit_args(tokens: Sequence[str]) -> tuple[list[str], list[str]]:
    """
    Split `edit` positionals into (id tokens, text words).

    Leading tokens made only of digits, commas and ranges are ids; the first
    other token starts the new text.
    """
    ids: list[str] = []
    i = 0
    while i < len(tokens) and looks_like_ids(tokens[i]):
        ids.append(tokens[i])
        i += 1
    return ids, list(tokens[i:])
