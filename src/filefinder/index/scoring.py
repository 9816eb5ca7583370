"""Substring and frequency scoring for stored records."""

from __future__ import annotations

from typing import Optional

from filefinder.models import FileRecord
from filefinder.utils.text import collapse_newlines, fold_case, split_path_tokens

EXACT_MATCH_SCORE = 100.0
CONTAINS_SCORE = 75.0
TOKEN_MATCH_SCORE = 50.0
NO_MATCH_SCORE = 0.0

CONTENT_HIT_SCORE = 10.0
CONTENT_SCORE_CAP = 95.0

PREVIEW_CONTEXT_CHARS = 20
PREVIEW_MARKER = "..."


def score_filename(record: FileRecord, query: str, case_sensitive: bool = False) -> float:
    """Score ``record.path`` against ``query``.

    Only the highest applicable tier is returned: exact path (100), substring
    (75), whole path token (50), otherwise 0.
    """
    path = fold_case(record.path, case_sensitive)
    needle = fold_case(query, case_sensitive)

    if path == needle:
        return EXACT_MATCH_SCORE
    if needle in path:
        return CONTAINS_SCORE
    if any(token == needle for token in split_path_tokens(path)):
        return TOKEN_MATCH_SCORE
    return NO_MATCH_SCORE


def score_content(record: FileRecord, query: str, case_sensitive: bool = False) -> float:
    """Score by the number of non-overlapping occurrences in the content.

    Falls back to :func:`score_filename` when there is no content or no hit.
    """
    if record.content is None:
        return score_filename(record, query, case_sensitive)

    haystack = fold_case(record.content, case_sensitive)
    needle = fold_case(query, case_sensitive)
    occurrences = haystack.count(needle)
    if occurrences == 0:
        return score_filename(record, query, case_sensitive)

    return min(occurrences * CONTENT_HIT_SCORE, CONTENT_SCORE_CAP)


def extract_preview(
    record: FileRecord, query: str, case_sensitive: bool = False
) -> Optional[str]:
    """Return a short excerpt around the first occurrence of ``query``."""
    if record.content is None:
        return None

    haystack = fold_case(record.content, case_sensitive)
    needle = fold_case(query, case_sensitive)
    position = haystack.find(needle)
    if position < 0:
        return None

    # lower() can change the length of some characters; slice what we searched then
    source = record.content if len(record.content) == len(haystack) else haystack
    start = max(position - PREVIEW_CONTEXT_CHARS, 0)
    end = min(position + len(needle) + PREVIEW_CONTEXT_CHARS, len(source))
    excerpt = collapse_newlines(source[start:end]).strip()
    return f"{PREVIEW_MARKER}{excerpt}{PREVIEW_MARKER}"
