import math

import pytest

from schemas.ai_schemas import ExpectedCourse
from schemas.grades import FIVE_POINT, FOUR_POINT, GradingScale, SemesterKey
from services import gpa_engine
from tests.factories import make_grade


def test_semester_aggregates_and_overall_cgpa(sample_grades):
    groups = gpa_engine.group_by_semester(sample_grades)
    first = groups[SemesterKey("Year 1", "1st Semester")]
    second = groups[SemesterKey("Year 1", "2nd Semester")]

    assert first.aggregate.total_credits == 7
    assert first.aggregate.total_quality_points == 31
    assert [r.id for r in first.records] == [1, 2]
    assert round(first.aggregate.semester_gpa, 2) == 4.43
    assert second.aggregate.semester_gpa == 3.0
    assert gpa_engine.compute_overall_cgpa(groups) == 4.0


def test_trajectory_running_totals(sample_grades):
    trajectory = gpa_engine.compute_trajectory(gpa_engine.group_by_semester(sample_grades))

    assert [p.label for p in trajectory] == ["Year 1 1st Semester", "Year 1 2nd Semester"]
    assert [p.semester_gpa for p in trajectory] == [4.43, 3.0]
    assert [p.cumulative_gpa for p in trajectory] == [4.43, 4.0]
    assert trajectory[-1].cumulative_credits == 10


def test_overall_cgpa_matches_last_trajectory_point():
    records = [
        make_grade(i, grade=(i * 7) % 6, credits=1 + i % 4, year=f"Year {1 + i % 5}", session=f"{1 + i % 2} Semester")
        for i in range(40)
    ]
    groups = gpa_engine.group_by_semester(records)
    trajectory = gpa_engine.compute_trajectory(groups)

    assert gpa_engine.compute_overall_cgpa(groups) == trajectory[-1].cumulative_gpa
    assert len(trajectory) == len({(r.year, r.session) for r in records})


def test_cumulative_uses_unrounded_totals():
    # 누적은 표시용(반올림) 값이 아니라 원값 기준
    records = [
        make_grade(1, 3.335, 1, session="1st Semester"),
        make_grade(2, 3.335, 1, session="2nd Semester"),
        make_grade(3, 3.33, 1, session="3rd Semester"),
    ]
    trajectory = gpa_engine.compute_trajectory(gpa_engine.group_by_semester(records))
    assert trajectory[-1].cumulative_gpa == round((3.335 + 3.335 + 3.33) / 3, 2)


def test_zero_credit_semester_reports_zero():
    records = [make_grade(1, 5, 0)]
    groups = gpa_engine.group_by_semester(records)
    trajectory = gpa_engine.compute_trajectory(groups)

    assert trajectory[0].semester_gpa == 0.0
    assert trajectory[0].cumulative_gpa == 0.0
    assert gpa_engine.compute_overall_cgpa(groups) == 0.0
    assert not math.isnan(trajectory[0].semester_gpa)


def test_zero_credit_semester_after_real_one_keeps_cumulative():
    records = [
        make_grade(1, 4, 3, session="1st Semester"),
        make_grade(2, 5, 0, session="2nd Semester"),
    ]
    trajectory = gpa_engine.compute_trajectory(gpa_engine.group_by_semester(records))
    assert trajectory[1].semester_gpa == 0.0
    assert trajectory[1].cumulative_gpa == 4.0


def test_negative_credits_are_summed_without_error():
    records = [make_grade(1, 4, 3), make_grade(2, 2, -3)]
    groups = gpa_engine.group_by_semester(records)

    assert groups[SemesterKey("Year 1", "1st Semester")].aggregate.total_credits == 0
    assert gpa_engine.compute_overall_cgpa(groups) == 0.0


def test_empty_input():
    groups = gpa_engine.group_by_semester([])
    assert groups == {}
    assert gpa_engine.compute_trajectory(groups) == []
    assert gpa_engine.compute_overall_cgpa(groups) == 0.0
    assert gpa_engine.compute_grade_distribution([], FIVE_POINT).total == 0

    summary = gpa_engine.summarize([], FIVE_POINT)
    assert summary.cgpa == 0.0
    assert summary.latest_semester is None


def test_trajectory_is_chronological_not_lexical():
    records = [
        make_grade(1, 4, 3, year="Year 10", session="1st Semester"),
        make_grade(2, 4, 3, year="Year 2", session="2nd Semester"),
        make_grade(3, 4, 3, year="Year 2", session="1st Semester"),
        make_grade(4, 4, 3, year="Year 1", session="Summer"),
        make_grade(5, 4, 3, year="Year 1", session="Second Semester"),
        make_grade(6, 4, 3, year="Year 1", session="First Semester"),
    ]
    labels = [p.label for p in gpa_engine.compute_trajectory(gpa_engine.group_by_semester(records))]

    assert labels == [
        "Year 1 First Semester",
        "Year 1 Second Semester",
        "Year 1 Summer",
        "Year 2 1st Semester",
        "Year 2 2nd Semester",
        "Year 10 1st Semester",
    ]
    assert labels != sorted(labels)


def test_distribution_five_point_bands():
    records = [make_grade(i, g, 3) for i, g in enumerate([5, 4, 3.9, 3, 2, 1, 0.99, 0])]
    distribution = gpa_engine.compute_grade_distribution(records, FIVE_POINT)

    assert [(b.grade, b.count) for b in distribution.buckets] == [
        ("A", 2), ("B", 2), ("C", 1), ("D", 1), ("F", 2),
    ]
    assert distribution.total == len(records)


def test_distribution_four_point_bands():
    records = [make_grade(i, g, 3) for i, g in enumerate([4.0, 3.2, 2.4, 1.6, 0.8, 0.79])]
    distribution = gpa_engine.compute_grade_distribution(records, FOUR_POINT)

    assert [b.count for b in distribution.buckets] == [2, 1, 1, 1, 1]


def test_distribution_for_one_semester(sample_grades):
    distribution = gpa_engine.compute_grade_distribution(
        sample_grades, FIVE_POINT, SemesterKey("Year 1", "2nd Semester")
    )
    assert distribution.total == 1
    assert distribution.count("C") == 0
    assert distribution.count("B") == 1


def test_grading_scale_rejects_gapped_bands():
    with pytest.raises(ValueError):
        GradingScale(max_point=5, bands=[(4, "A"), (3, "B"), (2, "C"), (1, "D"), (0.5, "F")])


def test_aggregation_is_idempotent(sample_grades):
    first = gpa_engine.summarize(sample_grades, FIVE_POINT)
    second = gpa_engine.summarize(sample_grades, FIVE_POINT)
    assert first == second


def test_predict_gpa_example():
    courses = [ExpectedCourse(name="Algorithms", expected_grade=5, credits=3)]
    predicted = gpa_engine.predict_gpa(3.0, 10, courses, FIVE_POINT)
    assert predicted == pytest.approx(45 / 13)
    assert round(predicted, 2) == 3.46


def test_predict_gpa_is_clamped_and_zero_safe():
    courses = [ExpectedCourse(name="Overload", expected_grade=9, credits=3)]
    assert gpa_engine.predict_gpa(4.0, 10, courses, FOUR_POINT) == 4.0
    assert gpa_engine.predict_gpa(3.0, 0, [], FIVE_POINT) == 0.0


def test_semester_share_payload(sample_grades):
    group = gpa_engine.group_by_semester(sample_grades)[SemesterKey("Year 1", "1st Semester")]
    payload = gpa_engine.semester_share_payload(group)

    assert payload.semester == "Year 1 1st Semester"
    assert payload.gpa == "4.43"
    assert [c.name for c in payload.courses] == ["Intro to CS", "Calculus I"]


def test_term_and_calendar_year_labels_sort_by_calendar():
    records = [
        make_grade(1, 4, 3, year="Fall 2023", session=""),
        make_grade(2, 4, 3, year="Spring 2024", session=""),
        make_grade(3, 4, 3, year="Spring 2023", session=""),
        make_grade(4, 4, 3, year="2023", session="Summer"),
    ]
    labels = [p.label for p in gpa_engine.compute_trajectory(gpa_engine.group_by_semester(records))]

    assert labels == ["Spring 2023", "2023 Summer", "Fall 2023", "Spring 2024"]
