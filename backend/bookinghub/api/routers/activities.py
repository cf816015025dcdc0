# bookinghub/api/routers/activities.py
from typing import List

from fastapi import APIRouter, Depends

from bookinghub.api.dependencies import get_vacation_storage
from bookinghub.schemas.catalog import ActivityOut
from bookinghub.storage.base import VacationStorage

router = APIRouter()


@router.get("/activities", response_model=List[ActivityOut])
async def list_activities(storage: VacationStorage = Depends(get_vacation_storage)):
    return await storage.list_activities()
