"""User response schemas. Password hash and verification token never leave the server."""

from datetime import datetime

from pydantic import BaseModel


class UserPublic(BaseModel):
    id: int
    email: str
    full_name: str
    role: str
    department: str | None = None
    phone: str | None = None
    avatar_url: str | None = None

    model_config = {"from_attributes": True}


class ProfileUser(UserPublic):
    graduation_year: int | None = None
    created_at: datetime | None = None


class ProfileUpdate(BaseModel):
    """Sparse profile update; None means leave unchanged."""

    full_name: str | None = None
    department: str | None = None
    phone: str | None = None
    graduation_year: int | None = None

    def supplied(self) -> dict:
        # Blank form fields count as not supplied
        return {
            k: v for k, v in self.model_dump().items()
            if v is not None and not (isinstance(v, str) and not v.strip())
        }
