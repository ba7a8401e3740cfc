import time as time_module
from typing import Optional, Self, Sequence

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import BusinessRejection
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.platform.state.keyed_lock import KeyedLock
from src.service.table_reservation.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.table_reservation.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from src.service.table_reservation.app.interface.i_table_query_repo import ITableQueryRepo
from src.service.table_reservation.domain.entity.reservation_entity import (
    Reservation,
    validate_party_size,
)
from src.service.table_reservation.domain.entity.table_entity import Table
from src.service.table_reservation.domain.entity.user_entity import UserEntity
from src.service.table_reservation.domain.reservation_errors import (
    AllocationConflictError,
    NoCapacityError,
    ReservationStoreUnavailableError,
    SlotFullError,
    SlotTableAlreadyCommittedError,
)
from src.service.table_reservation.domain.table_selection import (
    TableSelectionStrategy,
    find_suitable_tables,
)
from src.service.table_reservation.domain.value_object.slot import Slot


class AllocateTableUseCase:
    """
    Pick one free table that seats the party for the slot and commit it.

    Flow (under the per-slot lock):
    1. Suitable tables = catalog tables with capacity >= party size (none -> NoCapacity)
    2. Committed tables = tables already reserved for the slot
    3. Strategy picks one suitable, uncommitted table (none -> SlotFull)
    4. Commit; a store-level (slot, table) conflict or a store outage during any of
       1-4 re-runs 1-4 against fresh state, bounded by max_attempts
    """

    def __init__(
        self,
        *,
        table_query_repo: ITableQueryRepo,
        reservation_query_repo: IReservationQueryRepo,
        reservation_command_repo: IReservationCommandRepo,
        selection_strategy: TableSelectionStrategy,
        slot_lock: KeyedLock,
        service_times: Sequence[str],
        max_attempts: int = 3,
    ) -> None:
        self.table_query_repo = table_query_repo
        self.reservation_query_repo = reservation_query_repo
        self.reservation_command_repo = reservation_command_repo
        self.selection_strategy = selection_strategy
        self.slot_lock = slot_lock
        self.service_times = service_times
        self.max_attempts = max_attempts
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        table_query_repo: ITableQueryRepo = Depends(Provide[Container.table_query_repo]),
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
        reservation_command_repo: IReservationCommandRepo = Depends(
            Provide[Container.reservation_command_repo]
        ),
        selection_strategy: TableSelectionStrategy = Depends(
            Provide[Container.table_selection_strategy]
        ),
        slot_lock: KeyedLock = Depends(Provide[Container.slot_lock]),
        service_times: list[str] = Depends(Provide[Container.service_times]),
        max_attempts: int = Depends(Provide[Container.reservation_commit_max_attempts]),
    ) -> Self:
        return cls(
            table_query_repo=table_query_repo,
            reservation_query_repo=reservation_query_repo,
            reservation_command_repo=reservation_command_repo,
            selection_strategy=selection_strategy,
            slot_lock=slot_lock,
            service_times=service_times,
            max_attempts=max_attempts,
        )

    @Logger.io
    async def allocate(
        self,
        *,
        date: str,
        time: str,
        party_size: int,
        requester: UserEntity,
        customer_name: Optional[str] = None,
    ) -> Reservation:
        policy = self.selection_strategy.policy.value
        start = time_module.perf_counter()

        with self.tracer.start_as_current_span(
            'use_case.allocate_table',
            attributes={'slot.date': str(date), 'slot.time': str(time), 'party_size': party_size},
        ) as span:
            try:
                slot = Slot.parse(date=date, time=time, service_times=self.service_times)
                validate_party_size(party_size)

                async with self.slot_lock.hold(slot.key):
                    reservation = await self._allocate_with_retry(
                        slot=slot,
                        party_size=party_size,
                        owner_id=requester.id or 0,
                        customer_name=customer_name or requester.name,
                    )
            except (BusinessRejection, AllocationConflictError, ReservationStoreUnavailableError) as e:
                span.set_attribute('result', e.code or type(e).__name__)
                metrics.record_allocation(
                    policy=policy,
                    result=(e.code or 'rejected').lower(),
                    duration=time_module.perf_counter() - start,
                )
                raise

            span.set_attribute('result', 'committed')
            span.set_attribute('table.id', reservation.table_id)
            metrics.record_allocation(
                policy=policy, result='committed', duration=time_module.perf_counter() - start
            )

        Logger.base.info(
            f'✅ [ALLOCATE] {reservation.table_name} for party of {party_size} at {slot} '
            f'(reservation {reservation.id})'
        )
        return reservation

    async def _allocate_with_retry(
        self, *, slot: Slot, party_size: int, owner_id: int, customer_name: str
    ) -> Reservation:
        last_error: Exception | None = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                table = await self._select_table(slot=slot, party_size=party_size)
                reservation = Reservation.create(
                    owner_id=owner_id,
                    customer_name=customer_name,
                    slot=slot,
                    party_size=party_size,
                    table=table,
                )
                return await self.reservation_command_repo.create(reservation=reservation)
            except SlotTableAlreadyCommittedError as e:
                last_error = e
                metrics.record_commit_conflict(reason='slot_table_taken')
                Logger.base.warning(
                    f'⚠️ [ALLOCATE] {e} (attempt {attempt}/{self.max_attempts}), re-selecting'
                )
            except ReservationStoreUnavailableError as e:
                last_error = e
                metrics.record_commit_conflict(reason='store_unavailable')
                Logger.base.warning(
                    f'⚠️ [ALLOCATE] Store unavailable (attempt {attempt}/{self.max_attempts}): {e}'
                )

        if isinstance(last_error, ReservationStoreUnavailableError):
            raise last_error
        raise AllocationConflictError(
            f'Could not commit a table for {slot} after {self.max_attempts} attempts, please try again'
        )

    async def _select_table(self, *, slot: Slot, party_size: int) -> Table:
        # Catalog and committed set are re-read on every attempt
        tables = await self.table_query_repo.list_by_min_capacity(min_capacity=party_size)
        suitable_tables = find_suitable_tables(tables, party_size)
        if not suitable_tables:
            raise NoCapacityError(f'No table can seat a party of {party_size}')

        committed_table_ids = await self.reservation_query_repo.list_committed_table_ids(slot=slot)
        table = self.selection_strategy.select(
            suitable_tables=suitable_tables, committed_table_ids=committed_table_ids
        )
        if table is None:
            raise SlotFullError(f'No table for a party of {party_size} is free at {slot}')
        return table
