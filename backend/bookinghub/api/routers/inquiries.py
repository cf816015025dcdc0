# bookinghub/api/routers/inquiries.py
"""
Booking requests and contact messages sent from the vacation site.
"""
import logging

from fastapi import APIRouter, Depends, status

from bookinghub.api.dependencies import get_vacation_storage
from bookinghub.schemas.inquiry import ContactCreate, ContactOut, TravelBookingCreate, TravelBookingOut
from bookinghub.storage.base import VacationStorage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/bookings", response_model=TravelBookingOut, status_code=status.HTTP_201_CREATED)
async def create_booking(
    body: TravelBookingCreate,
    storage: VacationStorage = Depends(get_vacation_storage),
):
    booking = await storage.create_booking(body.model_dump())
    logger.info("travel booking %s received for package %s", booking.id, booking.package_id)
    return booking


@router.post("/contacts", response_model=ContactOut, status_code=status.HTTP_201_CREATED)
async def create_contact(
    body: ContactCreate,
    storage: VacationStorage = Depends(get_vacation_storage),
):
    contact = await storage.create_contact(body.model_dump())
    logger.info("contact message %s received", contact.id)
    return contact
