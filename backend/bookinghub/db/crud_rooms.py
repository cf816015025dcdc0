# bookinghub/db/crud_rooms.py
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookinghub.db.models import ConferenceRoom


async def list_rooms(db: AsyncSession, active_only: bool = False) -> List[ConferenceRoom]:
    stmt = select(ConferenceRoom)
    if active_only:
        stmt = stmt.where(ConferenceRoom.is_active.is_(True))
    stmt = stmt.order_by(ConferenceRoom.name.asc(), ConferenceRoom.id.asc())
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def get_room(
    db: AsyncSession,
    room_id: int,
    *,
    for_update: bool = False,
) -> Optional[ConferenceRoom]:
    """
    for_update=True takes a row lock (SELECT ... FOR UPDATE) that serializes
    booking writes per room until the session commits. Dialects without row
    locks (SQLite) just run the plain select.
    """
    stmt = select(ConferenceRoom).where(ConferenceRoom.id == room_id)
    if for_update:
        stmt = stmt.with_for_update()
    res = await db.execute(stmt)
    return res.scalar_one_or_none()


async def create_room(db: AsyncSession, **kwargs) -> ConferenceRoom:
    room = ConferenceRoom(**kwargs)
    db.add(room)
    await db.commit()
    await db.refresh(room)
    return room


async def update_room(db: AsyncSession, room: ConferenceRoom, data: dict) -> ConferenceRoom:
    for k, v in data.items():
        setattr(room, k, v)
    db.add(room)
    await db.commit()
    await db.refresh(room)
    return room


async def count_rooms(db: AsyncSession) -> int:
    return (await db.execute(select(func.count(ConferenceRoom.id)))).scalar_one()
