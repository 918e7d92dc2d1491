"""User Schemas: signup, login, profile, password, and directory shapes.

Invariants:
    - New passwords are at least 8 chars and at most 72 bytes once UTF-8 encoded
      (bcrypt's input ceiling); anything longer is a 400, never a hashing failure
    - Email is stripped but case is preserved as given
    - UserResponse never carries the password hash
    - ProfileUpdate: email may be omitted but not set to null; names may be cleared with null
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finledger.schemas.pagination import ResultsMetadata

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

BCRYPT_MAX_BYTES = 72


def _check_bcrypt_length(v: str) -> str:
    if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"password must be at most {BCRYPT_MAX_BYTES} bytes in UTF-8")
    return v


class UserCreate(BaseModel):
    """Signup payload."""
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=8, max_length=72)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("password")
    @classmethod
    def fits_bcrypt(cls, v: str) -> str:
        return _check_bcrypt_length(v)


class LoginRequest(BaseModel):
    email: str = Field(max_length=255)
    password: str = Field(max_length=72)


class UserResponse(BaseModel):
    """Public view of a user."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str | None = None
    last_name: str | None = None
    is_admin: bool = False
    created_at: datetime
    last_seen_at: datetime | None = None


class AuthResponse(BaseModel):
    """Returned by signup and login."""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class ProfileUpdate(BaseModel):
    """Partial profile update. Only fields present in the request body are applied."""
    email: str | None = Field(None, max_length=255, pattern=EMAIL_PATTERN)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)

    @field_validator("email", mode="before")
    @classmethod
    def reject_null_email(cls, v):
        if v is None:
            raise ValueError("email cannot be null; omit the field to keep the current value")
        return v.strip() if isinstance(v, str) else v

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class PasswordUpdate(BaseModel):
    current_password: str = Field(max_length=72)
    new_password: str = Field(min_length=8, max_length=72)

    @field_validator("new_password")
    @classmethod
    def fits_bcrypt(cls, v: str) -> str:
        return _check_bcrypt_length(v)


class AccountDeletion(BaseModel):
    """Password confirmation required before the account is removed."""
    password: str = Field(max_length=72)


class UserList(BaseModel):
    data: list[UserResponse]
    meta: ResultsMetadata
