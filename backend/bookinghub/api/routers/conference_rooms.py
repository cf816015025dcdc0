# bookinghub/api/routers/conference_rooms.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from bookinghub.api.dependencies import get_room_storage
from bookinghub.schemas.room import ConferenceRoomCreate, ConferenceRoomOut, ConferenceRoomUpdate
from bookinghub.storage.base import RoomStorage

router = APIRouter()


@router.get("/conference-rooms", response_model=List[ConferenceRoomOut])
async def list_rooms(storage: RoomStorage = Depends(get_room_storage)):
    # inactive rooms stay bookable by id but are hidden from the listing
    return await storage.list_rooms(active_only=True)


@router.get("/conference-rooms/{room_id}", response_model=ConferenceRoomOut)
async def get_room(room_id: int, storage: RoomStorage = Depends(get_room_storage)):
    room = await storage.get_room(room_id)
    if not room:
        raise HTTPException(status_code=404, detail="Conference room not found")
    return room


@router.post("/conference-rooms", response_model=ConferenceRoomOut, status_code=status.HTTP_201_CREATED)
async def create_room(
    body: ConferenceRoomCreate,
    storage: RoomStorage = Depends(get_room_storage),
):
    return await storage.create_room(body.model_dump())


@router.put("/conference-rooms/{room_id}", response_model=ConferenceRoomOut)
async def update_room(
    room_id: int,
    body: ConferenceRoomUpdate,
    storage: RoomStorage = Depends(get_room_storage),
):
    room = await storage.update_room(room_id, body.changes())
    if not room:
        raise HTTPException(status_code=404, detail="Conference room not found")
    return room
