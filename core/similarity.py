"""
Fuzzy similarity scoring for catalog search.

Scores a query against entity names:
- Substring hits score 0.8-1.0 depending on how much of the name the query covers
- Everything else scores by Damerau-Levenshtein distance (typos, transpositions)

The score is deliberately asymmetric: only "candidate contains query" gets the
substring treatment, so a short query scores high against a longer name.
"""

from typing import Iterable, Sequence

from rapidfuzz.distance import DamerauLevenshtein

from core.context import ScoredMatch
from core.normalize import normalize

# Floor for substring hits; the rest of the range scales with coverage
CONTAINMENT_BASE = 0.8
CONTAINMENT_SPAN = 0.2


def edit_distance(a: str, b: str) -> int:
    """
    Damerau-Levenshtein distance between two strings.

    Insertions, deletions, substitutions and adjacent transpositions
    each cost 1. Operates on the strings as given (no normalization).
    """
    return DamerauLevenshtein.distance(a, b)


def similarity(query: str, candidate: str) -> float:
    """
    Similarity of a candidate name to a query, in [0, 1].

    Args:
        query: Search text
        candidate: Entity name

    Returns:
        0.0 if either side normalizes to empty, >= 0.8 if the normalized
        candidate contains the normalized query, otherwise
        1 - distance / max(len) floored at 0.

    Example:
        >>> round(similarity("mug", "Coffee Mugs"), 3)
        0.855
        >>> similarity("mgus", "mugs")
        0.75
    """
    q = normalize(query)
    c = normalize(candidate)
    if not q or not c:
        return 0.0

    if q in c:
        return min(1.0, CONTAINMENT_BASE + max(0.0, (len(q) / len(c)) * CONTAINMENT_SPAN))

    distance = edit_distance(q, c)
    max_len = max(len(q), len(c))
    return max(0.0, 1.0 - distance / max_len)


def top_matches(
    entities: Iterable,
    query: str,
    min_score: float = 0.45,
    limit: int = 50,
) -> list[ScoredMatch]:
    """
    Rank entities by name similarity to a query.

    Args:
        entities: Objects with a `name` attribute
        query: Search text (blank means no search, not "match everything")
        min_score: Entities scoring below this are dropped
        limit: Maximum results

    Returns:
        ScoredMatch list sorted by score descending; ties keep input order
    """
    stripped = (query or "").strip()
    if not stripped or limit <= 0:
        return []

    q = normalize(stripped)
    results = []
    for entity in entities:
        score = similarity(q, getattr(entity, "name", ""))
        if score >= min_score:
            results.append(ScoredMatch(item=entity, score=score))

    results.sort(key=lambda m: m.score, reverse=True)
    return results[:limit]


def contains_query(name: str, query: str) -> bool:
    """Check if a normalized name literally contains the normalized query."""
    q = normalize((query or "").strip())
    return bool(q) and q in normalize(name)


def best_of(matches: Sequence[ScoredMatch]):
    """First (best) match of a ranked list, or None."""
    return matches[0] if matches else None
