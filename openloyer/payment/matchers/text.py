"""Text normalisation and edit distance shared by the name and reference scorers.

Uses rapidfuzz for the Levenshtein distance (plain unit-cost
insert/delete/substitute, no weighting or preprocessing).
"""

import unicodedata

from rapidfuzz.distance import Levenshtein


def normalize_text(text: str | None) -> str:
    """Canonicalise free text for comparison.

    Normalization steps:
    1. Lowercase
    2. Decompose accented characters (NFD) and drop combining marks
    3. Collapse whitespace runs to a single space and strip the edges

    Total and idempotent: ``None``, empty or blank input gives ``""``.

    Example:
        >>> normalize_text("  Hervé   BÉZIER ")
        'herve bezier'
    """
    if not text:
        return ""

    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))

    # Some decompositions expose an uppercase base letter
    return " ".join(stripped.lower().split())


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance between two strings (unit cost per operation)."""
    return Levenshtein.distance(a, b)


def edit_similarity(a: str, b: str) -> float:
    """Normalised edit similarity ``1 - distance / max(len(a), len(b))``.

    Returns 0.0 when both strings are empty.
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 0.0
    return 1 - levenshtein_distance(a, b) / max_len
