"""Account request/response schemas for /signup, /login and /logout."""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class UserCredentials(BaseModel):
    email: str = Field(default="", description="Login email address")
    password: str = Field(default="", description="Plain-text password (hashed before storage)")

    @field_validator("email", "password", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class UserResponse(BaseModel):
    id: int
    email: str

    model_config = {"from_attributes": True}
