"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class UserCreate(BaseModel):
    """Registration payload; the password is hashed before it is stored."""

    username: str = Field(..., min_length=1, description="Public handle, unique ignoring case")
    email: EmailStr = Field(..., description="Login address, unique ignoring case")
    password: str = Field(..., min_length=1, description="Plaintext password")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Reject handles that are blank once surrounding whitespace is removed."""
        v = v.strip()
        if not v:
            raise ValueError("Username must not be blank")
        return v


class UserUpdate(BaseModel):
    """Partial update of a user; unset fields are left alone."""

    username: str | None = Field(None, min_length=1)
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=1, description="New plaintext password")
    bio: str | None = None
    image: str | None = Field(None, description="Avatar URL; an explicit null clears it")

    @field_validator("username", "email", "bio", "password")
    @classmethod
    def reject_null(cls, v: str | None) -> str | None:
        """Only ``image`` may be cleared; the other columns are NOT NULL."""
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class Profile(BaseModel):
    """Public view of a user as seen by another (possibly anonymous) user."""

    username: str = Field(..., description="User's public handle")
    bio: str = Field(..., description="User's biography, empty if unset")
    image: str | None = Field(..., description="User's avatar URL")
    following: bool = Field(..., description="True if the viewer follows this user")

    model_config = ConfigDict(from_attributes=True)
