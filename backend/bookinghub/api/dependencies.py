# bookinghub/api/dependencies.py
from typing import NamedTuple, Optional

from fastapi import HTTPException, Query, Request, status

from bookinghub.schemas.base import DateStr
from bookinghub.storage.base import RoomStorage, VacationStorage


def get_storage(request: Request):
    return request.app.state.storage


def get_vacation_storage(request: Request) -> VacationStorage:
    return get_storage(request)


def get_room_storage(request: Request) -> RoomStorage:
    return get_storage(request)


class DateRange(NamedTuple):
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    @property
    def given(self) -> bool:
        return self.start_date is not None and self.end_date is not None


def date_range(
    start_date: Optional[DateStr] = Query(None, alias="startDate"),
    end_date: Optional[DateStr] = Query(None, alias="endDate"),
) -> DateRange:
    """
    Optional ?startDate=&endDate= pair. Giving only one bound is an error.
    """
    if (start_date is None) != (end_date is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="startDate and endDate must be given together",
        )
    return DateRange(start_date, end_date)


def required_date_range(
    start_date: Optional[DateStr] = Query(None, alias="startDate"),
    end_date: Optional[DateStr] = Query(None, alias="endDate"),
) -> DateRange:
    if start_date is None or end_date is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="startDate and endDate are required",
        )
    return DateRange(start_date, end_date)
