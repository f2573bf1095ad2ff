from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class AttemptStart(BaseModel):
    student_id: int


class AnswerSave(BaseModel):
    question_id: int
    selected_option_id: int
    time_taken_seconds: Optional[int] = Field(None, ge=0)


class ActivationSet(BaseModel):
    is_active: bool                          # False blocks the student even if the activity is active


class Attempt(BaseModel):
    id: int
    student_id: int
    grade: Optional[float] = None            # 0.0 - 5.0 once completed
    completed: bool
    started_at: datetime
    finished_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class QuizAttempt(Attempt):
    quiz_id: int


class EvaluationAttempt(Attempt):
    evaluation_id: int


class StudentAnswer(BaseModel):
    id: int
    question_id: int
    selected_option_id: int
    time_taken_seconds: Optional[int] = None
    answered_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StudentActivation(BaseModel):
    id: int
    student_id: int
    is_active: bool
    activated_at: datetime

    model_config = ConfigDict(from_attributes=True)
