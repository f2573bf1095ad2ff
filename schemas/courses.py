from pydantic import BaseModel, ConfigDict
from typing import Optional

# input (POST)
class CourseCreate(BaseModel):
    name: str                                # course name
    level: Optional[str] = None              # school level

# output
class Course(CourseCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)


class EnrollmentCreate(BaseModel):
    course_id: int
