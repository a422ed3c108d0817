"""
Structured filter and sort construction for evaluation queries.

Callers pass a mapping of EvaluationFilter -> value; each filterable field is
bound to one column and one comparison strategy, and the resulting predicates
are combined with AND. Sort parameters are resolved against an allow-list and
fall back to the default instead of failing.
"""
import enum
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import and_, func
from sqlalchemy.sql.elements import ColumnElement

from skillhub.models.department import Department
from skillhub.models.employee import Employee
from skillhub.models.skill import Skill
from skillhub.models.skill_evaluation import SkillEvaluation


class MatchStrategy(str, enum.Enum):
    EXACT = "exact"
    CASE_INSENSITIVE = "case_insensitive"
    RANGE = "range"


class EvaluationFilter(str, enum.Enum):
    EMPLOYEE_ID = "empId"
    DEPARTMENT = "department"
    SKILL = "skill"
    YEAR = "year"


FILTER_COLUMNS = {
    EvaluationFilter.EMPLOYEE_ID: (Employee.id, MatchStrategy.EXACT),
    EvaluationFilter.DEPARTMENT: (Department.name, MatchStrategy.CASE_INSENSITIVE),
    EvaluationFilter.SKILL: (Skill.name, MatchStrategy.CASE_INSENSITIVE),
    EvaluationFilter.YEAR: (SkillEvaluation.year, MatchStrategy.RANGE),
}


class SortField(str, enum.Enum):
    SCORE = "score"
    QUARTER = "quarter"
    YEAR = "year"


class SortOrder(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


SORT_COLUMNS = {
    SortField.SCORE: SkillEvaluation.score,
    SortField.QUARTER: SkillEvaluation.quarter,
    SortField.YEAR: SkillEvaluation.year,
}

DEFAULT_SORT = (SortField.YEAR, SortOrder.ASC)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _predicate(column, strategy: MatchStrategy, value: Any) -> Optional[ColumnElement]:
    if strategy == MatchStrategy.EXACT:
        return column == value
    if strategy == MatchStrategy.CASE_INSENSITIVE:
        return func.lower(column) == value.strip().lower()
    if strategy == MatchStrategy.RANGE:
        lower, upper = value
        clauses = []
        if lower is not None:
            clauses.append(column >= lower)
        if upper is not None:
            clauses.append(column <= upper)
        if not clauses:
            return None
        return and_(*clauses)
    raise ValueError(f"Unknown match strategy: {strategy}")


def build_predicates(filters: Dict[EvaluationFilter, Any]) -> List[ColumnElement]:
    """
    Translate supplied filters into SQL predicates. Missing or blank values are skipped.
    RANGE filters take a (lower, upper) tuple, either side may be None.
    """
    predicates = []
    for field, value in filters.items():
        if _is_blank(value):
            continue
        column, strategy = FILTER_COLUMNS[EvaluationFilter(field)]
        predicate = _predicate(column, strategy, value)
        if predicate is not None:
            predicates.append(predicate)
    return predicates


def resolve_sort(sort_by: Optional[str], order: Optional[str]) -> Tuple[SortField, SortOrder]:
    """Validate sort parameters against the allow-list; unknown values fall back to the default."""
    try:
        field = SortField((sort_by or "").lower())
    except ValueError:
        field = DEFAULT_SORT[0]
    try:
        direction = SortOrder((order or "").lower())
    except ValueError:
        direction = DEFAULT_SORT[1]
    return field, direction


def order_by_clauses(field: SortField, direction: SortOrder) -> list:
    column = SORT_COLUMNS[field]
    primary = column.desc() if direction == SortOrder.DESC else column.asc()
    # Evaluation id keeps pagination windows stable between equal keys
    return [primary, SkillEvaluation.id.asc()]
