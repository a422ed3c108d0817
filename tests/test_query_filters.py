from skillhub.services.query_filters import (
    DEFAULT_SORT,
    EvaluationFilter,
    SortField,
    SortOrder,
    build_predicates,
    order_by_clauses,
    resolve_sort,
)

def test_blank_filters_are_skipped():
    predicates = build_predicates({
        EvaluationFilter.EMPLOYEE_ID: None,
        EvaluationFilter.DEPARTMENT: "  ",
        EvaluationFilter.SKILL: "",
        EvaluationFilter.YEAR: (None, None),
    })
    assert predicates == []

def test_one_predicate_per_supplied_filter():
    predicates = build_predicates({
        EvaluationFilter.EMPLOYEE_ID: 3,
        EvaluationFilter.DEPARTMENT: "Engineering",
        EvaluationFilter.YEAR: (2023, None),
    })
    assert len(predicates) == 3

def test_values_are_bound_not_inlined():
    """Filter values travel as bind parameters."""
    (predicate,) = build_predicates({EvaluationFilter.SKILL: "Python'; DROP TABLE skills; --"})
    compiled = predicate.compile()
    assert "DROP TABLE" not in str(compiled)
    assert "python'; drop table skills; --" in compiled.params.values()

def test_resolve_sort_accepts_allow_listed_values():
    assert resolve_sort("Score", "DESC") == (SortField.SCORE, SortOrder.DESC)
    assert resolve_sort("quarter", "asc") == (SortField.QUARTER, SortOrder.ASC)

def test_resolve_sort_falls_back_to_default():
    assert resolve_sort("emp_name; --", "sideways") == DEFAULT_SORT
    assert resolve_sort(None, None) == DEFAULT_SORT

def test_order_by_has_id_tie_break():
    clauses = order_by_clauses(SortField.SCORE, SortOrder.DESC)
    assert len(clauses) == 2
    assert "skill_evaluations.id" in str(clauses[1])
