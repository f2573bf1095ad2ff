"""
services/grade_aggregator.py

Single source of truth for the weighted grade rule used by every grade view.

- final grade = 70% quiz average + 30% evaluation average (0.0 - 5.0 scale)
- an empty list averages to 0 (EmptyInputPolicy.ZERO) unless the caller asks
  for EmptyInputPolicy.REJECT
- verdict: APPROVED >= 3.7, AT_RISK >= 3.0, FAILING below 3.0, decided on the
  final grade as reported (REPORT_DIGITS decimals); ``passes`` is true only for APPROVED
- grades outside [0, 5] are rejected with InvalidGradeRange

Pure functions only: no database access, no logging.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Sequence


MIN_GRADE = 0.0
MAX_GRADE = 5.0

QUIZ_WEIGHT = 0.7
EVALUATION_WEIGHT = 0.3

PASSING_THRESHOLD = 3.7
AT_RISK_THRESHOLD = 3.0

# decimals of every grade the API reports
REPORT_DIGITS = 2


# =========================================================
# Errors
# =========================================================

class GradingError(ValueError):
    """Base class for grade aggregation errors."""
    code = "GRADING_ERROR"


class InvalidGradeRange(GradingError):
    code = "INVALID_GRADE_RANGE"

    def __init__(self, value, kind: str = "grade"):
        self.value = value
        self.kind = kind
        super().__init__(f"{kind} {value!r} is outside [{MIN_GRADE}, {MAX_GRADE}]")


class EmptyGradeSet(GradingError):
    code = "EMPTY_GRADE_SET"

    def __init__(self):
        super().__init__("no quiz or evaluation grades to aggregate")


class EmptyInputPolicy(str, Enum):
    ZERO = "zero"
    REJECT = "reject"


class PerformanceStatus(str, Enum):
    APPROVED = "approved"
    AT_RISK = "at_risk"
    FAILING = "failing"


# =========================================================
# Result
# =========================================================

@dataclass(frozen=True)
class GradeSummary:
    average_quiz: float
    average_evaluation: float
    final_grade: float
    passes: bool
    status: PerformanceStatus
    quiz_count: int = 0
    evaluation_count: int = 0

    @property
    def graded(self) -> bool:
        """False when no attempt backs the numbers (views show "N/A")."""
        return (self.quiz_count + self.evaluation_count) > 0

    def as_dict(self, ndigits: int = REPORT_DIGITS) -> dict:
        return {
            "average_quiz": round(self.average_quiz, ndigits),
            "average_evaluation": round(self.average_evaluation, ndigits),
            "final_grade": round(self.final_grade, ndigits),
            "passes": self.passes,
            "status": self.status.value,
            "quiz_count": self.quiz_count,
            "evaluation_count": self.evaluation_count,
            "graded": self.graded,
        }


# =========================================================
# Rule
# =========================================================

def validate_grades(grades: Iterable, kind: str = "grade") -> List[float]:
    """Return the grades as floats, raising InvalidGradeRange on the first bad one."""
    values = []
    for raw in grades:
        if isinstance(raw, bool):
            raise InvalidGradeRange(raw, kind)
        try:
            value = float(raw)
        except (TypeError, ValueError):
            raise InvalidGradeRange(raw, kind) from None
        if not math.isfinite(value) or value < MIN_GRADE or value > MAX_GRADE:
            raise InvalidGradeRange(raw, kind)
        values.append(value)
    return values


def mean_or_zero(values: Sequence[float]) -> float:
    return math.fsum(values) / len(values) if values else 0.0


def weighted_final_grade(average_quiz: float, average_evaluation: float) -> float:
    return QUIZ_WEIGHT * average_quiz + EVALUATION_WEIGHT * average_evaluation


def classify(final_grade: float) -> PerformanceStatus:
    # the verdict must agree with the grade shown next to it
    value = round(final_grade, REPORT_DIGITS)
    if value >= PASSING_THRESHOLD:
        return PerformanceStatus.APPROVED
    if value >= AT_RISK_THRESHOLD:
        return PerformanceStatus.AT_RISK
    return PerformanceStatus.FAILING


def aggregate_grades(
    quiz_grades: Iterable,
    evaluation_grades: Iterable,
    empty_policy: EmptyInputPolicy = EmptyInputPolicy.ZERO,
) -> GradeSummary:
    """
    Compute quiz average, evaluation average and the 70/30 final grade.

    quiz_grades / evaluation_grades: grades of completed attempts, each in [0, 5].
    empty_policy: what to do when both lists are empty. ZERO reports 0 for
    every figure (status FAILING, ``graded`` False); REJECT raises EmptyGradeSet.
    """
    quizzes = validate_grades(quiz_grades, "quiz grade")
    evaluations = validate_grades(evaluation_grades, "evaluation grade")

    if not quizzes and not evaluations and empty_policy == EmptyInputPolicy.REJECT:
        raise EmptyGradeSet()

    average_quiz = mean_or_zero(quizzes)
    average_evaluation = mean_or_zero(evaluations)
    final_grade = weighted_final_grade(average_quiz, average_evaluation)
    status = classify(final_grade)

    return GradeSummary(
        average_quiz=average_quiz,
        average_evaluation=average_evaluation,
        final_grade=final_grade,
        passes=status == PerformanceStatus.APPROVED,
        status=status,
        quiz_count=len(quizzes),
        evaluation_count=len(evaluations),
    )
