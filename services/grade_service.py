"""
services/grade_service.py

Loads completed quiz/evaluation attempts and groups them for the grade views.
Every group is summarised with services.grade_aggregator so the 70/30 rule
lives in exactly one place.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from models.assessments import Quiz as QuizModel, Evaluation as EvaluationModel
from models.attempts import QuizAttempt as QuizAttemptModel, EvaluationAttempt as EvaluationAttemptModel
from models.courses import Course as CourseModel, Enrollment as EnrollmentModel
from models.periods import Period as PeriodModel
from models.students import Student as StudentModel
from models.subjects import Subject as SubjectModel
from models.topics import Topic as TopicModel, Subtopic as SubtopicModel
from services.grade_aggregator import (
    GradeSummary,
    PerformanceStatus,
    aggregate_grades,
)

logger = logging.getLogger(__name__)


@dataclass
class GradedAttempt:
    attempt_id: int
    kind: str                     # "quiz" | "evaluation"
    assessment_id: int
    name: str
    grade: float
    finished_at: Optional[datetime]
    student_id: int
    subject_id: int
    subject_name: str
    period_id: int
    period_name: str
    period_number: Optional[int]

    def as_dict(self) -> dict:
        return {
            "id": self.attempt_id,
            "assessment_id": self.assessment_id,
            "name": self.name,
            "grade": round(self.grade, 2),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "type": self.kind,
        }


# ==========================================================
# [1] Attempt loading
# ==========================================================

def fetch_quiz_attempts(
    db: Session,
    student_ids: Optional[Iterable[int]] = None,
    subject_ids: Optional[Iterable[int]] = None,
) -> List[GradedAttempt]:
    """Completed quiz attempts with a grade, resolved through subtopic -> topic -> period -> subject."""
    query = (
        db.query(QuizAttemptModel, QuizModel, PeriodModel, SubjectModel)
        .join(QuizModel, QuizModel.id == QuizAttemptModel.quiz_id)
        .join(SubtopicModel, SubtopicModel.id == QuizModel.subtopic_id)
        .join(TopicModel, TopicModel.id == SubtopicModel.topic_id)
        .join(PeriodModel, PeriodModel.id == TopicModel.period_id)
        .join(SubjectModel, SubjectModel.id == PeriodModel.subject_id)
        .filter(QuizAttemptModel.completed.is_(True))
        .filter(QuizAttemptModel.grade.isnot(None))
    )
    if student_ids is not None:
        query = query.filter(QuizAttemptModel.student_id.in_(list(student_ids)))
    if subject_ids is not None:
        query = query.filter(SubjectModel.id.in_(list(subject_ids)))

    return [
        GradedAttempt(
            attempt_id=attempt.id,
            kind="quiz",
            assessment_id=quiz.id,
            name=quiz.name or "Quiz sin nombre",
            grade=float(attempt.grade),
            finished_at=attempt.finished_at,
            student_id=attempt.student_id,
            subject_id=subject.id,
            subject_name=subject.name,
            period_id=period.id,
            period_name=period.name or "Periodo sin nombre",
            period_number=period.period_number,
        )
        for attempt, quiz, period, subject in query.all()
    ]


def fetch_evaluation_attempts(
    db: Session,
    student_ids: Optional[Iterable[int]] = None,
    subject_ids: Optional[Iterable[int]] = None,
) -> List[GradedAttempt]:
    """Completed evaluation attempts with a grade."""
    query = (
        db.query(EvaluationAttemptModel, EvaluationModel, PeriodModel, SubjectModel)
        .join(EvaluationModel, EvaluationModel.id == EvaluationAttemptModel.evaluation_id)
        .join(PeriodModel, PeriodModel.id == EvaluationModel.period_id)
        .join(SubjectModel, SubjectModel.id == EvaluationModel.subject_id)
        .filter(EvaluationAttemptModel.completed.is_(True))
        .filter(EvaluationAttemptModel.grade.isnot(None))
    )
    if student_ids is not None:
        query = query.filter(EvaluationAttemptModel.student_id.in_(list(student_ids)))
    if subject_ids is not None:
        query = query.filter(SubjectModel.id.in_(list(subject_ids)))

    return [
        GradedAttempt(
            attempt_id=attempt.id,
            kind="evaluation",
            assessment_id=evaluation.id,
            name=evaluation.name or "Evaluación sin nombre",
            grade=float(attempt.grade),
            finished_at=attempt.finished_at,
            student_id=attempt.student_id,
            subject_id=subject.id,
            subject_name=subject.name,
            period_id=period.id,
            period_name=period.name or "Periodo sin nombre",
            period_number=period.period_number,
        )
        for attempt, evaluation, period, subject in query.all()
    ]


# ==========================================================
# [2] Grouping
# ==========================================================

def summarize(attempts: Iterable[GradedAttempt]) -> GradeSummary:
    attempts = list(attempts)
    return aggregate_grades(
        [a.grade for a in attempts if a.kind == "quiz"],
        [a.grade for a in attempts if a.kind == "evaluation"],
    )


def group_by_subject(attempts: Iterable[GradedAttempt]) -> List[dict]:
    """Per-subject quizzes, evaluations and summary, sorted by subject name."""
    buckets: Dict[int, dict] = {}
    for attempt in attempts:
        bucket = buckets.setdefault(attempt.subject_id, {
            "subject_id": attempt.subject_id,
            "subject_name": attempt.subject_name,
            "attempts": [],
        })
        bucket["attempts"].append(attempt)

    subjects = []
    for bucket in sorted(buckets.values(), key=lambda b: b["subject_name"].casefold()):
        items = bucket["attempts"]
        subjects.append({
            "subject_id": bucket["subject_id"],
            "subject_name": bucket["subject_name"],
            "quizzes": [a.as_dict() for a in items if a.kind == "quiz"],
            "evaluations": [a.as_dict() for a in items if a.kind == "evaluation"],
            "summary": summarize(items).as_dict(),
        })
    return subjects


def group_by_period(attempts: Iterable[GradedAttempt]) -> List[dict]:
    """Per-period, then per-subject; periods ordered by number then name."""
    buckets: Dict[int, dict] = {}
    for attempt in attempts:
        bucket = buckets.setdefault(attempt.period_id, {
            "period_id": attempt.period_id,
            "period_name": attempt.period_name,
            "period_number": attempt.period_number,
            "attempts": [],
        })
        bucket["attempts"].append(attempt)

    ordered = sorted(buckets.values(), key=lambda b: (b["period_number"] or 0, b["period_name"]))
    return [
        {
            "period_id": b["period_id"],
            "period_name": b["period_name"],
            "period_number": b["period_number"],
            "subjects": group_by_subject(b["attempts"]),
        }
        for b in ordered
    ]


# ==========================================================
# [3] Student / guardian views
# ==========================================================

def student_attempts(db: Session, student_id: int) -> List[GradedAttempt]:
    return fetch_quiz_attempts(db, [student_id]) + fetch_evaluation_attempts(db, [student_id])


def collect_student_grades(db: Session, student_id: int) -> List[dict]:
    return group_by_subject(student_attempts(db, student_id))


def collect_student_grades_by_period(db: Session, student_id: int) -> List[dict]:
    return group_by_period(student_attempts(db, student_id))


def student_tracking(db: Session, student_id: int) -> dict:
    """Per-subject summaries plus overall statistics for the teacher detail view."""
    attempts = student_attempts(db, student_id)
    overall = summarize(attempts)
    return {
        "subjects": group_by_subject(attempts),
        "statistics": {
            "completed_quizzes": overall.quiz_count,
            "completed_evaluations": overall.evaluation_count,
            "overall": overall.as_dict(),
        },
    }


# ==========================================================
# [4] Course performance (admin)
# ==========================================================

def enrolled_student_ids(db: Session, course_id: int) -> List[int]:
    rows = db.query(EnrollmentModel.student_id).filter(EnrollmentModel.course_id == course_id).all()
    return [r[0] for r in rows]


def subject_performance(db: Session, subject: SubjectModel, student_ids: List[int]) -> Tuple[dict, GradeSummary]:
    """Return the serialized subject statistics and the unrounded summary behind them."""
    total_quizzes = (
        db.query(QuizModel.id)
        .join(SubtopicModel, SubtopicModel.id == QuizModel.subtopic_id)
        .join(TopicModel, TopicModel.id == SubtopicModel.topic_id)
        .join(PeriodModel, PeriodModel.id == TopicModel.period_id)
        .filter(PeriodModel.subject_id == subject.id)
        .count()
    )
    total_evaluations = db.query(EvaluationModel.id).filter(EvaluationModel.subject_id == subject.id).count()

    attempts: List[GradedAttempt] = []
    if student_ids:
        attempts = (
            fetch_quiz_attempts(db, student_ids, [subject.id])
            + fetch_evaluation_attempts(db, student_ids, [subject.id])
        )

    active_students = len({a.student_id for a in attempts})
    total_students = len(student_ids)
    participation = round(active_students / total_students * 100, 1) if total_students else 0.0
    summary = summarize(attempts)

    stats = {
        "subject_id": subject.id,
        "subject_name": subject.name,
        "total_quizzes": total_quizzes,
        "total_evaluations": total_evaluations,
        "active_students": active_students,
        "total_students": total_students,
        "participation": participation,
        "summary": summary.as_dict(),
    }
    return stats, summary


def course_performance(db: Session, course: CourseModel) -> dict:
    student_ids = enrolled_student_ids(db, course.id)
    subjects = (
        db.query(SubjectModel)
        .filter(SubjectModel.course_id == course.id)
        .order_by(SubjectModel.name)
        .all()
    )
    results = [subject_performance(db, s, student_ids) for s in subjects]
    subject_stats = [stats for stats, _ in results]

    graded = [summary.final_grade for _, summary in results if summary.graded]
    course_average = math.fsum(graded) / len(graded) if graded else 0.0
    logger.debug(f"course {course.id}: {len(subject_stats)} subjects, {len(student_ids)} students")

    return {
        "course_id": course.id,
        "name": course.name,
        "level": course.level,
        "subjects": subject_stats,
        "statistics": {
            "average_grade": round(course_average, 2),
            "total_students": len(student_ids),
            "total_subjects": len(subject_stats),
        },
    }


# ==========================================================
# [5] Performance alerts (teacher)
# ==========================================================

def performance_alerts(db: Session, course_id: Optional[int] = None) -> dict:
    """
    Students failing a subject (status FAILING) and enrolled students without
    any completed attempt.
    """
    courses_query = db.query(CourseModel)
    if course_id is not None:
        courses_query = courses_query.filter(CourseModel.id == course_id)

    failing, without_attempts = [], []
    for course in courses_query.order_by(CourseModel.name).all():
        subject_ids = [s[0] for s in db.query(SubjectModel.id).filter(SubjectModel.course_id == course.id).all()]
        students = (
            db.query(StudentModel)
            .join(EnrollmentModel, EnrollmentModel.student_id == StudentModel.id)
            .filter(EnrollmentModel.course_id == course.id)
            .order_by(StudentModel.last_name, StudentModel.first_name)
            .all()
        )
        course_info = {"id": course.id, "name": course.name, "level": course.level}

        for student in students:
            attempts: List[GradedAttempt] = []
            if subject_ids:
                attempts = (
                    fetch_quiz_attempts(db, [student.id], subject_ids)
                    + fetch_evaluation_attempts(db, [student.id], subject_ids)
                )
            student_info = {"id": student.id, "first_name": student.first_name, "last_name": student.last_name}

            if not attempts:
                without_attempts.append({"student": student_info, "course": course_info})
                continue

            for subject in group_by_subject(attempts):
                summary = subject["summary"]
                if summary["status"] == PerformanceStatus.FAILING.value:
                    failing.append({
                        "student": student_info,
                        "course": course_info,
                        "subject": {"id": subject["subject_id"], "name": subject["subject_name"]},
                        "summary": summary,
                    })

    return {"failing_students": failing, "students_without_attempts": without_attempts}
