from __future__ import annotations

from pydantic import BaseModel, Field


class LoginRequestDTO(BaseModel):
    # Presence only; syntax is the credential store's concern.
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginResponseDTO(BaseModel):
    token: str
    user_id: int = Field(serialization_alias="userId")
    email: str
