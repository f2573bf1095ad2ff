from pydantic import BaseModel, ConfigDict, EmailStr
from typing import Optional

# input (POST/PUT)
class StudentCreate(BaseModel):
    first_name: str                          # first name
    last_name: str                           # last name
    email: Optional[EmailStr] = None         # login email
    identity_card: Optional[str] = None      # tarjeta de identidad
    guardian_id: Optional[int] = None        # linked guardian (acudiente)
    is_active: bool = True

# output (GET, detail)
class Student(StudentCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)
