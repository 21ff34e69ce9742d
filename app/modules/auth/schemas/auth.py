from pydantic import BaseModel, EmailStr, Field, field_validator

class UserSignup(BaseModel):
    name: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator("name", "username")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Normalize email to lowercase."""
        return v.lower()

class UserLogin(BaseModel):
    username: str
    password: str

class Message(BaseModel):
    message: str
