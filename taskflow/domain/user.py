"""User domain models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """User data transfer object. Never carries the password."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(..., description="Unique user ID assigned by the repository")
    email: str = Field(..., description="Login email")
    name: str = Field(..., description="Display name of the user")
    created_at: datetime = Field(..., alias="createdAt", description="Signup timestamp")


class AuthCredentials(BaseModel):
    """Email/password pair handed to the auth repository."""

    model_config = ConfigDict(frozen=True)

    email: str
    password: str = Field(..., repr=False)
