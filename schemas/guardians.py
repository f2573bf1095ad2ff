from pydantic import BaseModel, ConfigDict, EmailStr, Field

# input (POST)
class GuardianCreate(BaseModel):
    first_name: str
    last_name: str
    email: EmailStr
    national_id: str = Field(..., min_length=4, max_length=30)   # cédula

# output; national_id never leaves the server
class Guardian(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: EmailStr

    model_config = ConfigDict(from_attributes=True)


# guardian grade lookup: email + last four digits of the cédula
class GuardianGradesRequest(BaseModel):
    email: EmailStr
    last4_national_id: str = Field(..., pattern=r"^\d{4}$")
