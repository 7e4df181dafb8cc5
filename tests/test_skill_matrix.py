"""
Skill matrix aggregation and filtering tests
"""
import pytest

from hr_console.models import SkillLevel
from hr_console.services.employees import employee_service
from hr_console.services.skill_matrix import (
    MatrixRow, SkillMatrix, SkillMatrixFilter, apply_filters, build_matrix,
    format_skill_summary, parse_matrix_form, skill_level_counts
)
from hr_console.services.skills import skill_service

SKILLS = ["Visual Inspection", "Dial Reading", "RC Check"]


def make_matrix():
    return SkillMatrix(
        department_id=1,
        department_name="Assembly",
        skills=list(SKILLS),
        rows=[
            MatrixRow(1, "Ravi Kumar", "EMP001", "Operator",
                      {"Visual Inspection": "L1", "Dial Reading": "L3", "RC Check": "NA"}),
            MatrixRow(2, "Priya Sharma", "EMP002", "Technician",
                      {"Visual Inspection": "L4", "Dial Reading": "L4", "RC Check": "L2"}),
            MatrixRow(3, "Arjun Rao", "QC010", "Inspector",
                      {"Visual Inspection": "NA", "Dial Reading": "NA", "RC Check": "NA"}),
        ],
    )


def test_build_matrix_defaults_missing_levels_to_na(db, department, employee):
    for name in SKILLS:
        skill_service.create(db, department.id, name)
    employee_service.create(db, {
        "name": "Priya Sharma", "employee_code": "EMP002", "position": "Technician",
        "department_id": department.id,
    })
    skill_service.update_employee_skills(db, employee.id, {"Dial Reading": "L3"})

    matrix = build_matrix(db, department.id)

    assert matrix.skills == SKILLS
    assert [row.name for row in matrix.rows] == ["Priya Sharma", "Ravi Kumar"]
    ravi = matrix.rows[1]
    assert ravi.levels == {"Visual Inspection": "NA", "Dial Reading": "L3", "RC Check": "NA"}
    assert set(matrix.rows[0].levels.values()) == {"NA"}


def test_no_filters_keep_everything():
    matrix = apply_filters(make_matrix(), SkillMatrixFilter())

    assert len(matrix.rows) == 3
    assert matrix.skills == SKILLS


def test_name_filter_is_case_insensitive_substring():
    matrix = apply_filters(make_matrix(), SkillMatrixFilter(employee_name="PRIYA"))

    assert [row.employee_code for row in matrix.rows] == ["EMP002"]


def test_code_filter_is_substring():
    matrix = apply_filters(make_matrix(), SkillMatrixFilter(employee_code="EMP"))

    assert [row.employee_code for row in matrix.rows] == ["EMP001", "EMP002"]


def test_level_filter_keeps_rows_with_any_selected_level():
    filters = SkillMatrixFilter(skill_levels=[SkillLevel.L1, SkillLevel.L2])

    matrix = apply_filters(make_matrix(), filters)

    assert [row.employee_id for row in matrix.rows] == [1, 2]


def test_skill_filter_narrows_columns_only():
    matrix = apply_filters(make_matrix(), SkillMatrixFilter(skill_activities=["RC Check"]))

    assert matrix.skills == ["RC Check"]
    assert len(matrix.rows) == 3
    assert matrix.rows[1].levels == {"RC Check": "L2"}


def test_filters_apply_in_sequence():
    filters = SkillMatrixFilter(employee_code="EMP", skill_levels=[SkillLevel.NA])

    matrix = apply_filters(make_matrix(), filters)

    assert [row.employee_id for row in matrix.rows] == [1]


def test_active_count():
    filters = SkillMatrixFilter(
        employee_name="a", skill_activities=["RC Check", "Dial Reading"], skill_levels=[SkillLevel.L4]
    )

    assert filters.active_count == 4
    assert filters.is_active
    assert not SkillMatrixFilter().is_active


def test_summary_counts_non_na_levels():
    levels = {"a": "L1", "b": "L3", "c": "L3", "d": "NA"}

    assert skill_level_counts(levels) == {"L1": 1, "L2": 0, "L3": 2, "L4": 0}
    assert format_skill_summary(levels) == "L1 = 1, L3 = 2 out of 3 skills"


def test_summary_without_levels():
    assert format_skill_summary({"a": "NA"}) == "out of 0 skills"


@pytest.mark.parametrize("key,value", [
    ("level-1-9", "L1"),
    ("level-x-0", "L1"),
    ("level-1-0", "L7"),
    ("search", "L1"),
])
def test_parse_matrix_form_ignores_malformed_fields(key, value):
    assert parse_matrix_form([(key, value)], SKILLS) == {}


def test_parse_matrix_form_groups_by_employee():
    items = [("level-1-0", "L2"), ("level-1-2", "NA"), ("level-2-1", "L4")]

    assert parse_matrix_form(items, SKILLS) == {
        1: {"Visual Inspection": "L2", "RC Check": "NA"},
        2: {"Dial Reading": "L4"},
    }
