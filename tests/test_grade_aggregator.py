import math

import pytest

from services.grade_aggregator import (
    AT_RISK_THRESHOLD,
    PASSING_THRESHOLD,
    EmptyGradeSet,
    EmptyInputPolicy,
    InvalidGradeRange,
    PerformanceStatus,
    aggregate_grades,
    classify,
)


def test_weighted_final_grade():
    summary = aggregate_grades([4.0, 5.0], [3.0])
    assert summary.average_quiz == pytest.approx(4.5)
    assert summary.average_evaluation == pytest.approx(3.0)
    assert summary.final_grade == pytest.approx(4.05, abs=1e-9)
    assert summary.passes is True
    assert summary.status == PerformanceStatus.APPROVED
    assert summary.quiz_count == 2
    assert summary.evaluation_count == 1


def test_no_attempts_report_zero():
    summary = aggregate_grades([], [])
    assert summary.average_quiz == 0
    assert summary.average_evaluation == 0
    assert summary.final_grade == 0
    assert summary.passes is False
    assert summary.status == PerformanceStatus.FAILING
    assert summary.graded is False


def test_grade_just_below_passing_threshold_is_at_risk():
    # 3.69 passes the 3.0 boundary but not the 3.7 approval cutoff
    summary = aggregate_grades([3.69], [3.69])
    assert summary.final_grade == pytest.approx(3.69, abs=1e-9)
    assert summary.passes is False
    assert summary.status == PerformanceStatus.AT_RISK


def test_maximum_grades():
    summary = aggregate_grades([5.0, 5.0, 5.0], [5.0])
    assert summary.final_grade == pytest.approx(5.0, abs=1e-9)
    assert summary.passes is True


def test_only_quizzes_counts_evaluations_as_zero():
    summary = aggregate_grades([4.0], [])
    assert summary.average_evaluation == 0
    assert summary.final_grade == pytest.approx(2.8, abs=1e-9)
    assert summary.status == PerformanceStatus.FAILING
    assert summary.graded is True


def test_exact_threshold_is_approved():
    summary = aggregate_grades([3.7], [3.7])
    assert summary.passes is True
    assert summary.status == PerformanceStatus.APPROVED


@pytest.mark.parametrize(
    "final_grade, expected",
    [
        (PASSING_THRESHOLD, PerformanceStatus.APPROVED),
        (3.69, PerformanceStatus.AT_RISK),
        (AT_RISK_THRESHOLD, PerformanceStatus.AT_RISK),
        (2.99, PerformanceStatus.FAILING),
        (0.0, PerformanceStatus.FAILING),
    ],
)
def test_classify(final_grade, expected):
    assert classify(final_grade) == expected


def test_mean_matches_arithmetic_mean():
    quizzes = [0.0, 1.25, 2.5, 3.75, 5.0]
    evaluations = [2.0, 4.0]
    summary = aggregate_grades(quizzes, evaluations)
    assert summary.average_quiz == pytest.approx(sum(quizzes) / len(quizzes))
    assert summary.average_evaluation == pytest.approx(3.0)
    assert summary.final_grade == pytest.approx(0.7 * 2.5 + 0.3 * 3.0, abs=1e-9)
    assert 0.0 <= summary.final_grade <= 5.0


def test_same_input_same_output():
    assert aggregate_grades([3.2, 4.1], [2.0]) == aggregate_grades([3.2, 4.1], [2.0])


def test_accepts_generators_and_numeric_strings():
    summary = aggregate_grades((g for g in [4, 5]), ["3.0"])
    assert summary.final_grade == pytest.approx(4.05, abs=1e-9)


@pytest.mark.parametrize("bad", [-0.1, 5.01, math.nan, math.inf, "abc", None, True])
def test_rejects_out_of_range_grades(bad):
    with pytest.raises(InvalidGradeRange):
        aggregate_grades([4.0, bad], [])


def test_rejects_out_of_range_evaluation_grade():
    with pytest.raises(InvalidGradeRange) as excinfo:
        aggregate_grades([], [6.0])
    assert excinfo.value.value == 6.0
    assert excinfo.value.code == "INVALID_GRADE_RANGE"


def test_reject_policy_raises_on_empty_input():
    with pytest.raises(EmptyGradeSet):
        aggregate_grades([], [], empty_policy=EmptyInputPolicy.REJECT)


def test_reject_policy_allows_partial_input():
    summary = aggregate_grades([], [4.0], empty_policy=EmptyInputPolicy.REJECT)
    assert summary.final_grade == pytest.approx(1.2, abs=1e-9)


def test_as_dict_rounds_to_two_decimals():
    data = aggregate_grades([3.333], [4.0]).as_dict()
    assert data["average_quiz"] == 3.33
    assert data["final_grade"] == round(0.7 * 3.333 + 0.3 * 4.0, 2)
    assert data["status"] == "at_risk"
    assert data["graded"] is True


@pytest.mark.parametrize("grade", [3.696, 3.6951])
def test_verdict_agrees_with_reported_final_grade(grade):
    data = aggregate_grades([grade], [grade]).as_dict()
    assert data["final_grade"] == 3.7
    assert data["passes"] is True
    assert data["status"] == "approved"


def test_just_below_reported_threshold_is_at_risk():
    data = aggregate_grades([3.694], [3.694]).as_dict()
    assert data["final_grade"] == 3.69
    assert data["passes"] is False
    assert data["status"] == "at_risk"
