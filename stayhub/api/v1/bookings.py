"""Bookings API router.

Ownership rule: a renter can only create, move, cancel or list **their own**
bookings. The caller is identified by the email in their access token,
resolved to a user id by the user service.

The ``/private`` routes are called by other services (apartment search,
apartment deletion, reviews) and are left out of the public schema.
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status

from stayhub.api.deps import get_booking_service, get_caller_email
from stayhub.config import settings
from stayhub.models.booking import Booking
from stayhub.schemas.booking import BookingCreate, BookingResponse
from stayhub.services.booking_service import BookingService

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])


def _page_or_no_content(bookings: list[Booking]) -> list[Booking] | Response:
    if not bookings:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return bookings


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new booking",
)
async def create_booking(
    body: BookingCreate,
    response: Response,
    service: BookingService = Depends(get_booking_service),
    caller_email: str = Depends(get_caller_email),
) -> Booking:
    """Book an apartment for ``[startDate, endDate)``.

    Validates that:
    - The apartment exists.
    - ``userId`` is the caller.
    - No non-cancelled booking of the apartment overlaps the dates.
    """
    booking = await service.create(
        renter_id=body.user_id,
        apartment_id=body.apartment_id,
        start=body.start_date,
        end=body.end_date,
        guests=body.guests,
        caller_email=caller_email,
    )
    response.headers["Location"] = f"{router.prefix}/{booking.id}"
    return booking


@router.get(
    "/user/{user_id}",
    response_model=list[BookingResponse],
    summary="List the caller's bookings",
    responses={204: {"description": "No bookings on this page"}},
)
async def list_bookings_by_user(
    user_id: int,
    page: int = Query(0, ge=0, description="Page number, 0 is the first page"),
    page_size: int = Query(
        settings.default_page_size,
        alias="pageSize",
        ge=1,
        le=settings.max_page_size,
        description="Bookings per page",
    ),
    service: BookingService = Depends(get_booking_service),
    caller_email: str = Depends(get_caller_email),
):
    """Return a page of the renter's bookings, latest start date first."""
    bookings = await service.list_by_renter(user_id, caller_email, page, page_size)
    return _page_or_no_content(bookings)


@router.get(
    "/apartment/{apartment_id}",
    response_model=list[BookingResponse],
    summary="List an apartment's bookings",
    responses={204: {"description": "No bookings on this page"}},
)
async def list_bookings_by_apartment(
    apartment_id: int,
    page: int = Query(0, ge=0, description="Page number, 0 is the first page"),
    page_size: int = Query(
        settings.default_page_size,
        alias="pageSize",
        ge=1,
        le=settings.max_page_size,
        description="Bookings per page",
    ),
    service: BookingService = Depends(get_booking_service),
):
    """Return a page of the apartment's bookings, latest start date first."""
    bookings = await service.list_by_apartment(apartment_id, page, page_size)
    return _page_or_no_content(bookings)


@router.delete(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Cancel a booking",
)
async def cancel_booking(
    booking_id: int,
    service: BookingService = Depends(get_booking_service),
    caller_email: str = Depends(get_caller_email),
) -> Booking:
    """Cancel a booking. The booking is kept with state ``CANCELLED``."""
    return await service.cancel(booking_id, caller_email)


@router.put(
    "/{booking_id}/dates",
    response_model=BookingResponse,
    summary="Change a booking's dates",
)
async def change_booking_dates(
    booking_id: int,
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
    service: BookingService = Depends(get_booking_service),
    caller_email: str = Depends(get_caller_email),
) -> Booking:
    """Move a confirmed booking to new dates and recompute its cost."""
    return await service.change_dates(booking_id, start_date, end_date, caller_email)


# ---------------------------------------------------------------------------
# Service-to-service endpoints
# ---------------------------------------------------------------------------


@router.get(
    "/private/unavailable",
    response_model=list[int],
    include_in_schema=False,
)
async def unavailable_apartments(
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
    service: BookingService = Depends(get_booking_service),
) -> list[int]:
    """Apartment ids that have a booking overlapping ``[startDate, endDate)``."""
    return sorted(await service.unavailable_apartments(start_date, end_date))


@router.get(
    "/private/apartment/{apartment_id}",
    response_model=bool,
    include_in_schema=False,
)
async def apartment_has_bookings(
    apartment_id: int,
    service: BookingService = Depends(get_booking_service),
) -> bool:
    """Whether any booking, in any state, references the apartment."""
    return await service.has_bookings(apartment_id)


@router.get(
    "/private/finished/user/{user_id}/apartment/{apartment_id}",
    response_model=list[BookingResponse],
    include_in_schema=False,
)
async def finished_stays(
    user_id: int,
    apartment_id: int,
    service: BookingService = Depends(get_booking_service),
):
    """Confirmed stays of the user at the apartment that have already ended."""
    bookings = await service.finished_stays(user_id, apartment_id)
    return _page_or_no_content(bookings)
