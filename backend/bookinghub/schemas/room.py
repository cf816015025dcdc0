# bookinghub/schemas/room.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from bookinghub.schemas.base import CamelModel


class ConferenceRoomCreate(CamelModel):
    name: str = Field(min_length=1)
    capacity: int = Field(ge=1)
    location: str = Field(min_length=1)
    description: Optional[str] = None
    amenities: List[str] = []
    # cents per hour
    hourly_rate: int = Field(ge=0)
    image_url: Optional[str] = None
    is_active: bool = True


class ConferenceRoomUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    capacity: Optional[int] = Field(default=None, ge=1)
    location: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    amenities: Optional[List[str]] = None
    hourly_rate: Optional[int] = Field(default=None, ge=0)
    image_url: Optional[str] = None
    is_active: Optional[bool] = None

    def changes(self) -> dict:
        data = self.model_dump(exclude_unset=True)
        # explicit nulls only clear the optional fields
        return {k: v for k, v in data.items() if v is not None or k in ("description", "image_url")}


class ConferenceRoomOut(CamelModel):
    id: int
    name: str
    capacity: int
    location: str
    description: Optional[str] = None
    amenities: List[str] = []
    hourly_rate: int
    image_url: Optional[str] = None
    is_active: bool = True
    created_at: datetime
