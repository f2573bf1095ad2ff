from datetime import date
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional

# input (POST/PUT)
class SubjectCreate(BaseModel):
    name: str                                # subject name (materia)
    course_id: int                           # owning course
    description: Optional[str] = None

# output
class Subject(SubjectCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)


class PeriodCreate(BaseModel):
    name: str                                # e.g. Primer periodo
    period_number: Optional[int] = Field(default=None, ge=1)
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def _check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class Period(PeriodCreate):
    id: int
    subject_id: int

    model_config = ConfigDict(from_attributes=True)


class TopicCreate(BaseModel):
    name: str


class Topic(TopicCreate):
    id: int
    period_id: int

    model_config = ConfigDict(from_attributes=True)


class SubtopicCreate(BaseModel):
    name: str


class Subtopic(SubtopicCreate):
    id: int
    topic_id: int

    model_config = ConfigDict(from_attributes=True)
