# bookinghub/api/routers/destinations.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from bookinghub.api.dependencies import get_vacation_storage
from bookinghub.schemas.catalog import DestinationOut
from bookinghub.storage.base import VacationStorage

router = APIRouter()


@router.get("/destinations", response_model=List[DestinationOut])
async def list_destinations(storage: VacationStorage = Depends(get_vacation_storage)):
    return await storage.list_destinations()


@router.get("/destinations/{destination_id}", response_model=DestinationOut)
async def get_destination(
    destination_id: str,
    storage: VacationStorage = Depends(get_vacation_storage),
):
    destination = await storage.get_destination(destination_id)
    if not destination:
        raise HTTPException(status_code=404, detail="Destination not found")
    return destination
