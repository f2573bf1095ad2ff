from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, UniqueConstraint
from database.db import Base, utcnow

class Quiz(Base):
    __tablename__ = "quizzes"  # subtopic-scoped formative assessments

    id = Column(Integer, primary_key=True, index=True)
    subtopic_id = Column(Integer, ForeignKey("subtopics.id"), nullable=False, index=True)
    name = Column(String(150), nullable=False)
    start_date = Column(DateTime)                            # availability window (optional)
    end_date = Column(DateTime)
    is_active = Column(Boolean, nullable=False, default=True)


class Evaluation(Base):
    __tablename__ = "evaluations"  # period-level summative assessments (evaluaciones_periodo)

    id = Column(Integer, primary_key=True, index=True)
    period_id = Column(Integer, ForeignKey("periods.id"), nullable=False, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)
    name = Column(String(150), nullable=False)
    start_date = Column(DateTime)
    end_date = Column(DateTime)
    is_active = Column(Boolean, nullable=False, default=True)


class StudentActivation(Base):
    __tablename__ = "student_activations"  # per-student override of is_active (quizzes_estudiantes)
    __table_args__ = (
        UniqueConstraint("quiz_id", "student_id", name="uq_quiz_activation"),
        UniqueConstraint("evaluation_id", "student_id", name="uq_evaluation_activation"),
    )

    id = Column(Integer, primary_key=True, index=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id"), index=True)
    evaluation_id = Column(Integer, ForeignKey("evaluations.id"), index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False)          # True also allows retaking a completed attempt
    activated_at = Column(DateTime, nullable=False, default=utcnow)
