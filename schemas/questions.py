from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Optional


class AnswerOptionCreate(BaseModel):
    text: str = Field(..., min_length=1)
    is_correct: bool = False
    explanation: Optional[str] = None


class QuestionCreate(BaseModel):
    """A question hangs off exactly one quiz or one evaluation and has a single correct option."""
    quiz_id: Optional[int] = None
    evaluation_id: Optional[int] = None
    text: str = Field(..., min_length=1)
    order: int = 0
    options: List[AnswerOptionCreate] = Field(..., min_length=2)

    @model_validator(mode="after")
    def _check_question(self):
        if (self.quiz_id is None) == (self.evaluation_id is None):
            raise ValueError("exactly one of quiz_id or evaluation_id is required")
        if sum(1 for option in self.options if option.is_correct) != 1:
            raise ValueError("exactly one option must be correct")
        return self


# options are listed to students without is_correct / explanation
class AnswerOption(BaseModel):
    id: int
    text: str

    model_config = ConfigDict(from_attributes=True)


class CorrectOption(AnswerOption):
    explanation: Optional[str] = None


class Question(BaseModel):
    id: int
    quiz_id: Optional[int] = None
    evaluation_id: Optional[int] = None
    text: str
    order: int
    options: List[AnswerOption] = []

    model_config = ConfigDict(from_attributes=True)
