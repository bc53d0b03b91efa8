"""SQLAlchemy models for the booking service.

All models are imported here so that Alembic's autogenerate can discover
them via Base.metadata. If you add a new model, import it in this file.
"""

from stayhub.models.booking import Booking, BookingState
from stayhub.models.filter import ConditionType, DateType, Filter

__all__ = [
    "Booking",
    "BookingState",
    "ConditionType",
    "DateType",
    "Filter",
]
