"""
Contact form schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class ContactMessage(BaseModel):
    model_config = ConfigDict(extra="forbid")

    firstname: str = Field(..., min_length=1)
    lastname: str = Field(..., min_length=1)
    email: EmailStr
    message: str = Field(..., min_length=1)

    @property
    def full_name(self) -> str:
        return f"{self.firstname} {self.lastname}"
