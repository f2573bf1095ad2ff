from sqlalchemy import Column, Integer, Float, Boolean, DateTime, ForeignKey, UniqueConstraint
from database.db import Base, utcnow

class QuizAttempt(Base):
    __tablename__ = "quiz_attempts"  # one row per (student, quiz)
    __table_args__ = (UniqueConstraint("quiz_id", "student_id", name="uq_quiz_attempt"),)

    id = Column(Integer, primary_key=True, index=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    grade = Column(Float)                                       # 0.0 - 5.0, null until completed
    completed = Column(Boolean, nullable=False, default=False)
    started_at = Column(DateTime, nullable=False, default=utcnow)      # naive UTC
    finished_at = Column(DateTime)


class EvaluationAttempt(Base):
    __tablename__ = "evaluation_attempts"  # one row per (student, evaluation)
    __table_args__ = (UniqueConstraint("evaluation_id", "student_id", name="uq_evaluation_attempt"),)

    id = Column(Integer, primary_key=True, index=True)
    evaluation_id = Column(Integer, ForeignKey("evaluations.id"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    grade = Column(Float)
    completed = Column(Boolean, nullable=False, default=False)
    started_at = Column(DateTime, nullable=False, default=utcnow)
    finished_at = Column(DateTime)
