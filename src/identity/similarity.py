"""Name similarity scoring.

Scores how close two free-text names are on a 0-1 scale:

- exact (case-insensitive) equality scores 1.0
- one name containing the other scores up to CONTAINMENT_WEIGHT,
  scaled by the length ratio
- otherwise word overlap scores up to TOKEN_WEIGHT

The weights are empirical and kept stable so scores stay comparable
across rosters.
"""

CONTAINMENT_WEIGHT = 0.8
TOKEN_WEIGHT = 0.6
MIN_TOKEN_LENGTH = 3


def _tokens_overlap(left: str, right: str) -> bool:
    return left == right or left in right or right in left


def name_similarity(a: str, b: str) -> float:
    """Score the similarity of two names.

    Args:
        a: First name (typically the roster name)
        b: Second name (typically the submitted name)

    Returns:
        Score between 0.0 and 1.0. Deterministic and side-effect free.
    """
    s1 = a.lower()
    s2 = b.lower()

    if s1 == s2:
        return 1.0

    if s1 in s2 or s2 in s1:
        shorter, longer = sorted((len(s1), len(s2)))
        return CONTAINMENT_WEIGHT * (shorter / longer)

    words1 = s1.split()
    words2 = s2.split()
    denominator = max(len(words1), len(words2))
    if denominator == 0:
        return 0.0

    # Short tokens (initials, particles) never count as hits but still
    # count towards the denominator.
    candidates = [w for w in words2 if len(w) >= MIN_TOKEN_LENGTH]
    hits = 0
    for word in words1:
        if len(word) < MIN_TOKEN_LENGTH:
            continue
        if any(_tokens_overlap(word, other) for other in candidates):
            hits += 1

    return hits / denominator * TOKEN_WEIGHT
