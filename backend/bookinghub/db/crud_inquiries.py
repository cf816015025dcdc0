# bookinghub/db/crud_inquiries.py
"""
Customer-submitted records for the vacation site: booking requests and
contact messages. Write-once; nothing here updates or deletes.
"""
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookinghub.db.models import Contact, TravelBooking


async def create_travel_booking(db: AsyncSession, **kwargs) -> TravelBooking:
    booking = TravelBooking(status="pending", **kwargs)
    db.add(booking)
    await db.commit()
    await db.refresh(booking)
    return booking


async def list_travel_bookings(db: AsyncSession) -> List[TravelBooking]:
    res = await db.execute(select(TravelBooking).order_by(TravelBooking.created_at.desc()))
    return list(res.scalars().all())


async def create_contact(db: AsyncSession, **kwargs) -> Contact:
    contact = Contact(**kwargs)
    db.add(contact)
    await db.commit()
    await db.refresh(contact)
    return contact


async def list_contacts(db: AsyncSession) -> List[Contact]:
    res = await db.execute(select(Contact).order_by(Contact.created_at.desc()))
    return list(res.scalars().all())
