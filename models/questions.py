from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, UniqueConstraint
from database.db import Base, utcnow

class Question(Base):
    __tablename__ = "questions"  # belongs to exactly one quiz or one evaluation (preguntas)

    id = Column(Integer, primary_key=True, index=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id"), index=True)
    evaluation_id = Column(Integer, ForeignKey("evaluations.id"), index=True)
    text = Column(Text, nullable=False)
    order = Column(Integer, nullable=False, default=0)       # display order inside the assessment


class AnswerOption(Base):
    __tablename__ = "answer_options"  # opciones_respuesta

    id = Column(Integer, primary_key=True, index=True)
    question_id = Column(Integer, ForeignKey("questions.id"), nullable=False, index=True)
    text = Column(String(500), nullable=False)
    explanation = Column(Text)
    is_correct = Column(Boolean, nullable=False, default=False)


class StudentAnswer(Base):
    __tablename__ = "student_answers"  # one answer per (attempt, question)
    __table_args__ = (
        UniqueConstraint("quiz_attempt_id", "question_id", name="uq_quiz_answer"),
        UniqueConstraint("evaluation_attempt_id", "question_id", name="uq_evaluation_answer"),
    )

    id = Column(Integer, primary_key=True, index=True)
    quiz_attempt_id = Column(Integer, ForeignKey("quiz_attempts.id"), index=True)
    evaluation_attempt_id = Column(Integer, ForeignKey("evaluation_attempts.id"), index=True)
    question_id = Column(Integer, ForeignKey("questions.id"), nullable=False)
    selected_option_id = Column(Integer, ForeignKey("answer_options.id"), nullable=False)
    is_correct = Column(Boolean, nullable=False, default=False)   # copied from the option when saved
    time_taken_seconds = Column(Integer)
    answered_at = Column(DateTime, nullable=False, default=utcnow)
