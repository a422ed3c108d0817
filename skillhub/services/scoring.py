"""
Score normalization and skill-level classification.

Every skill can carry its own max_score, so reporting compares evaluations on a
common 0-10 basis:

    normalized = score * 10 / max_score

Skill levels are derived from that normalized value. The buckets are
half-open so that fractional normalized scores (e.g. 3/9 * 10 = 3.33) always
land in a bucket; on integer scores they reduce to the inclusive ranges
0-3, 4-6, 7-8 and 9-10.
"""
from typing import Optional

from skillhub.models.skill_evaluation import SkillLevel

NORMALIZED_SCALE = 10.0

# (lower bound inclusive, level); the upper bound is the next entry's lower bound
_LEVEL_BOUNDS = [
    (0.0, SkillLevel.BEGINNER),
    (4.0, SkillLevel.INTERMEDIATE),
    (7.0, SkillLevel.ADVANCED),
    (9.0, SkillLevel.EXPERT),
]


def normalize(score: float, max_score: float, ndigits: Optional[int] = None) -> Optional[float]:
    """Convert a raw score to the 0-10 scale. Returns None when max_score is not positive."""
    if score is None or not max_score or max_score <= 0:
        return None
    value = float(score) * NORMALIZED_SCALE / float(max_score)
    return round(value, ndigits) if ndigits is not None else value


def classify(normalized_score: Optional[float]) -> Optional[SkillLevel]:
    """Map a 0-10 score to its skill level, or None when it is out of range."""
    if normalized_score is None:
        return None
    if normalized_score < 0 or normalized_score > NORMALIZED_SCALE:
        return None
    level = None
    for lower, candidate in _LEVEL_BOUNDS:
        if normalized_score >= lower:
            level = candidate
    return level


def classify_score(score: float, max_score: float) -> Optional[SkillLevel]:
    return classify(normalize(score, max_score))


def rescale_score(score: float, old_max: float, new_max: float) -> float:
    """
    Proportionally move a score from one scale to another.
    A zero old scale carries no ratio, so the score is left unchanged.
    """
    if not old_max:
        return score
    return float(score) * float(new_max) / float(old_max)


def round_or_none(value, ndigits: int) -> Optional[float]:
    return round(float(value), ndigits) if value is not None else None
