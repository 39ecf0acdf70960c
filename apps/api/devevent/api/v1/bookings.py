from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from devevent.api.errors import http_error_from_service
from devevent.api.v1.schemas import BookingCreate, BookingOut
from devevent.db import get_db
from devevent.services import create_booking
from devevent.services.exceptions import ServiceError

router = APIRouter(prefix="/bookings", tags=["bookings"])

DBSession = Annotated[Session, Depends(get_db)]


@router.post("", response_model=BookingOut, status_code=201)
def create_booking_route(payload: BookingCreate, db: DBSession):
    try:
        return create_booking(db, payload)
    except ServiceError as err:
        raise http_error_from_service(err) from err
