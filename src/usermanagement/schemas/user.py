from datetime import datetime
from typing import Optional
from pydantic import field_validator
from .base import CamelModel, ORMBase


class UserPayload(CamelModel):
    """Shape-decoded user fields shared by create and update requests.

    Only JSON shape is enforced here (keys present, values are strings).
    Lengths, character classes, email syntax and the status code set are
    checked by ``services.validation`` so every violated field is reported
    together with a rule name.
    """
    user_name: str
    first_name: str
    last_name: str
    email: str
    user_status: str
    department: str = ""

    @field_validator("department", mode="before")
    @classmethod
    def department_or_empty(cls, value: Optional[str]):
        # absent, null and "" all mean "no department"
        return "" if value is None else value


class UserCreate(UserPayload):
    pass


class UserUpdate(UserPayload):
    """Full replacement: every field is required and overwrites the stored value."""


class UserRead(ORMBase):
    id: int
    user_name: str
    first_name: str
    last_name: str
    email: str
    user_status: str
    department: str = ""
    created_at: datetime
    updated_at: datetime

    @field_validator("department", mode="before")
    @classmethod
    def department_or_empty(cls, value: Optional[str]):
        # the column is nullable; NULL reads back as ""
        return "" if value is None else value
