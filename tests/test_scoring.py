import pytest

from skillhub.models.skill_evaluation import SkillLevel
from skillhub.services.scoring import classify, classify_score, normalize, rescale_score

@pytest.mark.parametrize("score,expected", [
    (0, SkillLevel.BEGINNER),
    (2, SkillLevel.BEGINNER),
    (3.99, SkillLevel.BEGINNER),
    (4, SkillLevel.INTERMEDIATE),
    (6.5, SkillLevel.INTERMEDIATE),
    (7, SkillLevel.ADVANCED),
    (8.9, SkillLevel.ADVANCED),
    (9, SkillLevel.EXPERT),
    (10, SkillLevel.EXPERT),
    (-1, None),
    (11, None),
    (None, None),
])
def test_classify(score, expected):
    assert classify(score) == expected

def test_normalize():
    assert normalize(15, 20) == 7.5
    assert normalize(3, 9, 2) == 3.33
    assert normalize(5, 0) is None

def test_classify_score_uses_normalized_value():
    """An 18/20 is Expert even though 18 is outside the 0-10 range."""
    assert classify_score(18, 20) == SkillLevel.EXPERT
    assert classify_score(3, 5) == SkillLevel.INTERMEDIATE
    assert classify_score(1, 5) == SkillLevel.BEGINNER

def test_rescale_score():
    assert rescale_score(7, 10, 20) == pytest.approx(14)
    assert rescale_score(4, 0, 20) == 4

@pytest.mark.parametrize("score,old_max,new_max", [
    (7, 10, 20),
    (3, 10, 7),
    (9.5, 10, 100),
    (4.2, 5, 3),
])
def test_rescale_preserves_normalized_score(score, old_max, new_max):
    rescaled = rescale_score(score, old_max, new_max)
    assert normalize(rescaled, new_max) == pytest.approx(normalize(score, old_max))
    assert classify_score(rescaled, new_max) == classify_score(score, old_max)
