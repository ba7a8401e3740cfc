from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import AsyncContextManager, Callable

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from src.service.table_reservation.domain.reservation_errors import (
    ReservationStoreUnavailableError,
)


@asynccontextmanager
async def store_session(
    session_factory: Callable[..., AsyncContextManager[AsyncSession]],
) -> AsyncIterator[AsyncSession]:
    """Session whose connection-level failures surface as ReservationStoreUnavailableError"""
    try:
        async with session_factory() as session:
            yield session
    except OperationalError as e:
        raise ReservationStoreUnavailableError(
            f'Reservation store unavailable: {e.orig or e}'
        ) from e
