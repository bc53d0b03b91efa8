"""Shared test configuration and fixtures.

Every test gets a fresh in-memory SQLite database (through aiosqlite), so
tests are isolated without a running PostgreSQL. The apartment and user
services are replaced by in-memory fakes.
"""

from collections.abc import AsyncGenerator
from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from stayhub.api.deps import get_apartment_client, get_booking_service, get_user_client
from stayhub.auth.jwt import create_access_token
from stayhub.clients.apartments import ApartmentInfo
from stayhub.database import Base, get_db
from stayhub.main import app
from stayhub.models.booking import Booking, BookingState
from stayhub.repositories.bookings import BookingRepository
from stayhub.services.booking_service import BookingService
from stayhub.services.locks import ApartmentLocks

RENTER_EMAIL = "renter@example.com"
RENTER_ID = 1
OTHER_EMAIL = "other@example.com"
OTHER_ID = 2


# ---------------------------------------------------------------------------
# Fake remote services
# ---------------------------------------------------------------------------


class FakeApartmentClient:
    """Apartment service stand-in backed by a dict."""

    def __init__(self, apartments: dict[int, ApartmentInfo]) -> None:
        self.apartments = apartments
        self.calls: list[int] = []

    async def get_apartment(self, apartment_id: int) -> ApartmentInfo | None:
        self.calls.append(apartment_id)
        return self.apartments.get(apartment_id)


class FakeUserClient:
    """User service stand-in mapping emails to ids."""

    def __init__(self, users: dict[str, int]) -> None:
        self.users = users

    async def get_user_id_by_email(self, email: str) -> int | None:
        return self.users.get(email)


@pytest.fixture
def apartments() -> FakeApartmentClient:
    return FakeApartmentClient(
        {
            1: ApartmentInfo(id=1, name="Sea View Loft", nightly_rate=Decimal("100.00")),
            2: ApartmentInfo(id=2, name="Old Town Studio", nightly_rate=Decimal("79.99")),
        }
    )


@pytest.fixture
def users() -> FakeUserClient:
    return FakeUserClient({RENTER_EMAIL: RENTER_ID, OTHER_EMAIL: OTHER_ID})


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine():
    """A fresh in-memory database with every table created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session on the test database.

    ``expire_on_commit`` is off because the booking service commits in the
    middle of an operation and keeps using the booking afterwards.
    """
    factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def booking_service(
    db_session: AsyncSession,
    apartments: FakeApartmentClient,
    users: FakeUserClient,
) -> BookingService:
    return BookingService(BookingRepository(db_session), apartments, users, locks=ApartmentLocks())


@pytest.fixture
def make_booking(db_session: AsyncSession):
    """Insert a booking directly, bypassing availability and date checks."""

    async def _make(
        start: date,
        end: date,
        apartment_id: int = 1,
        renter_id: int = RENTER_ID,
        state: BookingState = BookingState.CONFIRMED,
        cost: Decimal = Decimal("100.00"),
        guests: int = 2,
    ) -> Booking:
        booking = Booking(
            renter_id=renter_id,
            apartment_id=apartment_id,
            start_date=start,
            end_date=end,
            cost=cost,
            state=state.value,
            guests=guests,
        )
        db_session.add(booking)
        await db_session.flush()
        await db_session.refresh(booking)
        return booking

    return _make


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession,
    apartments: FakeApartmentClient,
    users: FakeUserClient,
) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to the test DB and the fake services."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    locks = ApartmentLocks()

    def override_get_booking_service() -> BookingService:
        return BookingService(BookingRepository(db_session), apartments, users, locks=locks)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_apartment_client] = lambda: apartments
    app.dependency_overrides[get_user_client] = lambda: users
    app.dependency_overrides[get_booking_service] = override_get_booking_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Authorization headers for the renter with id ``RENTER_ID``."""
    return {"Authorization": f"Bearer {create_access_token(RENTER_EMAIL)}"}


@pytest.fixture
def other_auth_headers() -> dict[str, str]:
    """Authorization headers for a second renter."""
    return {"Authorization": f"Bearer {create_access_token(OTHER_EMAIL)}"}
