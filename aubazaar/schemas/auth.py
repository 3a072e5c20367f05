"""Auth request/response schemas - registration, login and the token claim."""

from pydantic import BaseModel, EmailStr, Field

from aubazaar.schemas.user import UserPublic


class TokenClaims(BaseModel):
    """Identity carried inside a bearer token."""

    id: int
    email: str
    role: str


class RegisterRequest(BaseModel):
    email: EmailStr
    # bcrypt accepts max 72 bytes; longer passwords are rejected here with a clear 400
    password: str = Field(..., min_length=6, max_length=72)
    full_name: str = Field(..., min_length=1, max_length=255)
    role: str = Field("student", min_length=1, max_length=20)
    department: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)


class RegisterResponse(BaseModel):
    message: str
    userId: int


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    token: str
    user: UserPublic
