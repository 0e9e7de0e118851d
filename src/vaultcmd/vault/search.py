"""Fuzzy search over vault notes.

The index is a flat, in-memory tuple of (path, filename, preview) entries
rebuilt wholesale on every build. Queries score each entry against the
filename (weighted 2) and the content preview (weighted 1) with RapidFuzz
partial matching, so where a term sits inside the text does not matter.
Scores run from 0 (perfect) to 1 (no match).
"""

import logging
import math
import os
from pathlib import Path

from rapidfuzz import fuzz

from vaultcmd.core.config import NOTE_EXTENSION
from vaultcmd.core.types import IndexEntry, SearchIndex, SearchResult

logger = logging.getLogger(__name__)

# Max chars to index from each file
CONTENT_PREVIEW_LENGTH = 500

# Max chars of preview returned with each result
RESULT_PREVIEW_LENGTH = 100

MAX_RESULTS = 50

# Per-key score above which a key does not count as matching
MATCH_THRESHOLD = 0.3

KEY_WEIGHTS = {"filename": 2.0, "content": 1.0}

# Stand-in for a perfect key score so it still weighs in the product
_EPSILON = 2.220446049250313e-16


def find_markdown_files(vault_path: Path | str) -> list[Path]:
    """
    Recursively find markdown files, skipping hidden files and directories.

    Args:
        vault_path: Directory to walk

    Returns:
        Note paths in traversal order
    """
    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(vault_path):
        dirnames[:] = [d for d in dirnames if not d.startswith(".")]
        for name in filenames:
            if name.startswith(".") or not name.endswith(NOTE_EXTENSION):
                continue
            files.append(Path(dirpath) / name)
    return files


def get_file_preview(file_path: Path, max_length: int = CONTENT_PREVIEW_LENGTH) -> str:
    """Read the first characters of a file, or "" if it cannot be read."""
    try:
        with open(file_path, encoding="utf-8", errors="replace") as f:
            return f.read(max_length)
    except OSError as e:
        logger.debug(f"Preview unavailable for {file_path}: {e}")
        return ""


def build_search_index(vault_path: Path | str) -> SearchIndex:
    """
    Build the search index for a vault.

    Unreadable files are indexed with an empty preview instead of failing
    the build.

    Args:
        vault_path: Vault root

    Returns:
        Tuple of IndexEntry, one per note
    """
    index = tuple(
        IndexEntry(
            path=path,
            filename=path.name[: -len(NOTE_EXTENSION)],
            content=get_file_preview(path),
        )
        for path in find_markdown_files(vault_path)
    )
    logger.info(f"Indexed {len(index)} notes under {vault_path}")
    return index


def _key_score(query: str, text: str) -> float:
    if not text:
        return 1.0
    text = text.lower()
    # Text shorter than the query is compared whole, not by best substring
    if len(text) < len(query):
        return 1.0 - fuzz.ratio(query, text) / 100.0
    return 1.0 - fuzz.partial_ratio(query, text) / 100.0


def score_entry(query: str, entry: IndexEntry) -> float | None:
    """
    Score one entry against a lowercased query.

    Matching keys combine as a weighted product of their scores. Returns
    None when no key is within the threshold.
    """
    total_weight = sum(KEY_WEIGHTS.values())
    matched = False
    log_score = 0.0
    for key, weight in KEY_WEIGHTS.items():
        score = _key_score(query, getattr(entry, key))
        if score > MATCH_THRESHOLD:
            continue
        matched = True
        log_score += (weight / total_weight) * math.log(max(score, _EPSILON))
    if not matched:
        return None
    return math.exp(log_score)


def _to_result(entry: IndexEntry, score: float) -> SearchResult:
    return SearchResult(
        path=entry.path,
        filename=entry.filename,
        preview=entry.content[:RESULT_PREVIEW_LENGTH],
        score=score,
    )


def _mtime(path: Path) -> float:
    try:
        return path.stat().st_mtime
    except OSError:
        return 0.0


def recent_notes(index: SearchIndex, limit: int = MAX_RESULTS) -> list[SearchResult]:
    """Most recently modified notes first; vanished files sort last."""
    ranked = sorted(index, key=lambda entry: _mtime(entry.path), reverse=True)
    return [_to_result(entry, 0.0) for entry in ranked[:limit]]


def search_vault(index: SearchIndex, query: str) -> list[SearchResult]:
    """
    Search the index.

    An empty or blank query returns the 50 most recently modified notes
    with score 0. Otherwise returns up to 50 fuzzy matches, best first.

    Args:
        index: Index from build_search_index
        query: Search text

    Returns:
        Ranked results
    """
    if not query.strip():
        return recent_notes(index)

    needle = query.strip().lower()
    scored = []
    for position, entry in enumerate(index):
        score = score_entry(needle, entry)
        if score is not None:
            scored.append((score, position, entry))
    scored.sort(key=lambda item: (item[0], item[1]))

    return [_to_result(entry, score) for score, _, entry in scored[:MAX_RESULTS]]
