from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from typing import Optional

from database.db import to_naive_utc


class _Window(BaseModel):
    start_date: Optional[datetime] = None    # available from
    end_date: Optional[datetime] = None      # available until
    is_active: bool = True

    # stored as naive UTC, compared against utcnow()
    @field_validator("start_date", "end_date")
    @classmethod
    def _to_utc(cls, value):
        return to_naive_utc(value)

    @model_validator(mode="after")
    def _check_window(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class QuizCreate(_Window):
    subtopic_id: int
    name: str


class Quiz(QuizCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)


class EvaluationCreate(_Window):
    period_id: int
    name: str


class Evaluation(EvaluationCreate):
    id: int
    subject_id: int

    model_config = ConfigDict(from_attributes=True)
