"""Shared API dependencies — single import point for all routers.

Re-exports the database session and the caller identity, and builds the
services with their collaborators so that router modules can import
everything they need from one place::

    from stayhub.api.deps import get_booking_service, get_caller_email
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.auth.dependencies import get_caller_email
from stayhub.clients.apartments import ApartmentClient
from stayhub.clients.users import UserClient
from stayhub.database import get_db
from stayhub.repositories.bookings import BookingRepository
from stayhub.repositories.filters import FilterRepository
from stayhub.services.booking_service import BookingService
from stayhub.services.filter_service import FilterService


def get_apartment_client(request: Request) -> ApartmentClient:
    """Apartment service client created in the application lifespan."""
    return request.app.state.apartment_client


def get_user_client(request: Request) -> UserClient:
    """User service client created in the application lifespan."""
    return request.app.state.user_client


def get_booking_service(
    db: AsyncSession = Depends(get_db),
    apartments: ApartmentClient = Depends(get_apartment_client),
    users: UserClient = Depends(get_user_client),
) -> BookingService:
    return BookingService(BookingRepository(db), apartments, users)


def get_filter_service(db: AsyncSession = Depends(get_db)) -> FilterService:
    return FilterService(FilterRepository(db))


__all__ = [
    "get_db",
    "get_caller_email",
    "get_apartment_client",
    "get_user_client",
    "get_booking_service",
    "get_filter_service",
]
