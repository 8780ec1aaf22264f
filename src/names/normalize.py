from __future__ import annotations

import logging
import re
import unicodedata
from typing import Iterable

from contracts.extraction import Candidate
from contracts.rows import Row

logger = logging.getLogger(__name__)

ALLOWED_PUNCTUATION = ".,-'"
MIN_CANDIDATE_LENGTH = 2

# OCR engines emit typographic variants of the allowed marks; fold them so the
# character filter keeps them (O’Brien, Mary–Jane).
_PUNCTUATION_FOLDS = {
    **dict.fromkeys(map(ord, "\u2010\u2011\u2012\u2013\u2014\u2015\u2212"), "-"),
    **dict.fromkeys(map(ord, "\u2018\u2019\u02bc`\u00b4"), "'"),
}

_WHITESPACE_RUN = re.compile(r"\s+")
_PUNCTUATION_RUN = re.compile(r"[.,\-']{2,}")


def _collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RUN.sub(" ", text).strip()


def _plain_spaces(text: str) -> str:
    # NBSP, thin/figure/ideographic spaces etc. are all category Zs.
    return "".join(" " if unicodedata.category(ch) == "Zs" else ch for ch in text)


def _strip_disallowed(text: str) -> str:
    kept: list[str] = []
    prev_cat = ""
    for ch in text:
        cat = unicodedata.category(ch)
        if cat[0] in "LN" or ch == " " or ch in ALLOWED_PUNCTUATION:
            keep = True
        elif cat[0] == "M":
            # combining marks survive only when attached to a kept letter
            keep = prev_cat[:1] in ("L", "M")
        else:
            keep = False
        if keep:
            kept.append(ch)
            prev_cat = cat
    return "".join(kept)


def _collapse_punctuation(text: str) -> str:
    # Mixed runs fold to their first mark: ".-" -> ".".
    return _PUNCTUATION_RUN.sub(lambda m: m.group(0)[0], text)


def _recase(ch: str, *, upper: bool) -> str:
    mapped = ch.upper() if upper else ch.lower()
    # Multi-char or foldable mappings ("ß" -> "SS", "ŉ" -> "ʼN") would not
    # survive a second pass unchanged; keep the source character instead.
    if len(mapped) != 1 or ord(mapped) in _PUNCTUATION_FOLDS:
        return ch
    return mapped


def _title_token(token: str) -> str:
    # Uppercase, not titlecase: "ǆ" -> "Ǆ".
    return _recase(token[0], upper=True) + "".join(_recase(ch, upper=False) for ch in token[1:])


def normalize(text: object) -> Candidate:
    """
    Turn one row of OCR text into a capitalized name, or None when it is noise.

    Total: malformed input degrades to None instead of raising.
    """

    if not isinstance(text, str):
        return None

    t = unicodedata.normalize("NFC", text)
    t = _plain_spaces(t).translate(_PUNCTUATION_FOLDS)
    t = _collapse_whitespace(t)

    # Stripping a symbol can leave a letter directly before a combining mark.
    t = unicodedata.normalize("NFC", _collapse_whitespace(_strip_disallowed(t)))
    t = _collapse_punctuation(t)

    if len(t) < MIN_CANDIDATE_LENGTH or not any(ch.isalnum() for ch in t):
        return None

    # Case mapping can change which base+mark pairs have a composed form.
    return unicodedata.normalize("NFC", " ".join(_title_token(tok) for tok in t.split(" ")))


def row_to_candidate(row: Row) -> Candidate:
    return normalize(" ".join(f.text for f in row.fragments))


def rows_to_candidates(rows: Iterable[Row]) -> list[Candidate]:
    """One entry per row, None where the row was rejected."""
    return [row_to_candidate(r) for r in rows]


def extract_candidates(rows: Iterable[Row]) -> list[str]:
    candidates = rows_to_candidates(rows)
    out = [c for c in candidates if c is not None]
    if len(out) != len(candidates):
        logger.debug("rejected %d of %d rows as noise", len(candidates) - len(out), len(candidates))
    return out
