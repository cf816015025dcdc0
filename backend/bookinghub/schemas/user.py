# bookinghub/schemas/user.py
from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field

from bookinghub.schemas.base import CamelModel


class UserCreate(CamelModel):
    username: str = Field(min_length=1)
    email: EmailStr
    full_name: str = Field(min_length=1)
    role: Literal["user", "admin"] = "user"


class UserOut(CamelModel):
    """
    Directory entry only; nothing authenticates against it yet.
    """

    id: int
    username: str
    email: str
    full_name: str
    role: str
    created_at: datetime
