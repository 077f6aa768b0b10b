"""
Similarity Engine - token-set Jaccard similarity between short point texts.

Tokens are whitespace-separated words with no further normalization, so case
and punctuation are significant. Two texts with no tokens at all have
similarity 0.
"""

from typing import FrozenSet, List, Sequence

# Call-site thresholds
DEDUP_THRESHOLD = 0.5        # filtering candidate points against an outline
UNCHANGED_THRESHOLD = 0.7    # diff "unchanged" / section near-duplicate
MODIFIED_THRESHOLD = 0.3     # diff lower bound for "modified"


def tokenize(text: str) -> FrozenSet[str]:
    """Whitespace word set of a text."""
    return frozenset((text or "").split())


def similarity(a: str, b: str) -> float:
    """
    Jaccard index of the word sets of a and b.

    Returns:
        Float in [0, 1]; 0.0 when both texts are blank
    """
    words_a = tokenize(a)
    words_b = tokenize(b)
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def is_near_duplicate(a: str, b: str, threshold: float = UNCHANGED_THRESHOLD) -> bool:
    """True when similarity strictly exceeds the threshold."""
    return similarity(a, b) > threshold


def dedupe_points(points: Sequence[str], threshold: float = UNCHANGED_THRESHOLD) -> List[str]:
    """Drop points that are near-duplicates of an earlier point, keeping order."""
    kept: List[str] = []
    for point in points:
        if not any(is_near_duplicate(point, other, threshold) for other in kept):
            kept.append(point)
    return kept
