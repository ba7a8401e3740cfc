"""
Unit tests for AllocateTableUseCase

Repositories are mocked with AsyncMock; the slot lock is a real KeyedLock.
An in-memory store is used where concurrent allocations must contend.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from src.platform.state.keyed_lock import KeyedLock
from src.service.table_reservation.app.command.allocate_table_use_case import (
    AllocateTableUseCase,
)
from src.service.table_reservation.domain.entity.reservation_entity import Reservation
from src.service.table_reservation.domain.entity.table_entity import Table
from src.service.table_reservation.domain.entity.user_entity import UserEntity, UserRole
from src.service.table_reservation.domain.reservation_errors import (
    AllocationConflictError,
    InvalidPartySizeError,
    InvalidSlotError,
    NoCapacityError,
    ReservationStoreUnavailableError,
    SlotFullError,
    SlotTableAlreadyCommittedError,
)
from src.service.table_reservation.domain.table_selection import (
    FirstMatchSelection,
    SmallestFitSelection,
)
from src.service.table_reservation.domain.value_object.slot import Slot


SERVICE_TIMES = ['17:00', '18:00', '19:00', '20:00']
DATE = '2024-06-01'
TIME = '18:00'

T1 = Table(id=1, name='T1', capacity=2)
T2 = Table(id=2, name='T2', capacity=4)
T3 = Table(id=3, name='T3', capacity=4)
T4 = Table(id=4, name='T4', capacity=6)


def _echo(*, reservation: Reservation) -> Reservation:
    return reservation


def _fail_then_echo(*errors: Exception):
    """create() side effect raising the given errors in order, then committing"""
    pending = list(errors)

    def _create(*, reservation: Reservation) -> Reservation:
        if pending:
            raise pending.pop(0)
        return reservation

    return _create


class InMemoryReservationStore:
    """Query + command store enforcing (slot, table) exclusivity at commit"""

    def __init__(self, tables: list[Table]) -> None:
        self.tables = tables
        self.reservations: dict[str, Reservation] = {}

    async def list_by_min_capacity(self, *, min_capacity: int) -> list[Table]:
        await asyncio.sleep(0)
        return [t for t in self.tables if t.capacity >= min_capacity]

    async def list_committed_table_ids(self, *, slot: Slot) -> set[int]:
        await asyncio.sleep(0)
        return {r.table_id for r in self.reservations.values() if r.slot == slot}

    async def create(self, *, reservation: Reservation) -> Reservation:
        await asyncio.sleep(0)
        for existing in self.reservations.values():
            if existing.slot == reservation.slot and existing.table_id == reservation.table_id:
                raise SlotTableAlreadyCommittedError(
                    slot_key=reservation.slot.key, table_id=reservation.table_id
                )
        self.reservations[str(reservation.id)] = reservation
        return reservation


@pytest.mark.unit
class TestAllocateTable:
    @pytest.fixture
    def requester(self) -> UserEntity:
        return UserEntity(id=7, email='c@test.com', name='Casey', role=UserRole.CUSTOMER)

    @pytest.fixture
    def table_query_repo(self) -> AsyncMock:
        repo = AsyncMock()
        repo.list_by_min_capacity.side_effect = lambda *, min_capacity: [
            t for t in (T1, T2, T3, T4) if t.capacity >= min_capacity
        ]
        return repo

    @pytest.fixture
    def reservation_query_repo(self) -> AsyncMock:
        repo = AsyncMock()
        repo.list_committed_table_ids.return_value = set()
        return repo

    @pytest.fixture
    def reservation_command_repo(self) -> AsyncMock:
        repo = AsyncMock()
        repo.create.side_effect = _echo
        return repo

    @pytest.fixture
    def use_case(
        self,
        table_query_repo: AsyncMock,
        reservation_query_repo: AsyncMock,
        reservation_command_repo: AsyncMock,
    ) -> AllocateTableUseCase:
        return AllocateTableUseCase(
            table_query_repo=table_query_repo,
            reservation_query_repo=reservation_query_repo,
            reservation_command_repo=reservation_command_repo,
            selection_strategy=SmallestFitSelection(),
            slot_lock=KeyedLock(),
            service_times=SERVICE_TIMES,
            max_attempts=3,
        )

    # ==================== Success ====================

    @pytest.mark.asyncio
    async def test_commits_smallest_fitting_table(
        self,
        use_case: AllocateTableUseCase,
        reservation_command_repo: AsyncMock,
        requester: UserEntity,
    ) -> None:
        # When
        reservation = await use_case.allocate(
            date=DATE, time=TIME, party_size=3, requester=requester
        )

        # Then
        assert reservation.table_id == T2.id
        assert reservation.table_name == 'T2'
        assert reservation.party_size == 3
        assert reservation.owner_id == 7
        assert reservation.customer_name == 'Casey'
        assert reservation.slot.key == '2024-06-01@18:00'
        reservation_command_repo.create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_explicit_customer_name_overrides_requester_name(
        self, use_case: AllocateTableUseCase, requester: UserEntity
    ) -> None:
        reservation = await use_case.allocate(
            date=DATE, time=TIME, party_size=2, requester=requester, customer_name='Walk-in Wu'
        )
        assert reservation.customer_name == 'Walk-in Wu'
        assert reservation.table_id == T1.id

    @pytest.mark.asyncio
    async def test_skips_tables_already_committed_for_slot(
        self,
        use_case: AllocateTableUseCase,
        reservation_query_repo: AsyncMock,
        requester: UserEntity,
    ) -> None:
        # Given: T2 taken
        reservation_query_repo.list_committed_table_ids.return_value = {2}

        reservation = await use_case.allocate(
            date=DATE, time=TIME, party_size=3, requester=requester
        )

        assert reservation.table_id == T3.id

    @pytest.mark.asyncio
    async def test_first_match_policy_picks_lowest_id(
        self,
        use_case: AllocateTableUseCase,
        requester: UserEntity,
    ) -> None:
        use_case.selection_strategy = FirstMatchSelection()
        reservation = await use_case.allocate(
            date=DATE, time=TIME, party_size=1, requester=requester
        )
        assert reservation.table_id == T1.id

    # ==================== Rejections ====================

    @pytest.mark.asyncio
    async def test_no_capacity_when_party_exceeds_every_table(
        self,
        use_case: AllocateTableUseCase,
        reservation_command_repo: AsyncMock,
        requester: UserEntity,
    ) -> None:
        with pytest.raises(NoCapacityError) as exc_info:
            await use_case.allocate(date=DATE, time=TIME, party_size=7, requester=requester)

        assert exc_info.value.code == 'NO_CAPACITY'
        reservation_command_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_slot_full_when_every_suitable_table_is_committed(
        self,
        use_case: AllocateTableUseCase,
        reservation_query_repo: AsyncMock,
        reservation_command_repo: AsyncMock,
        requester: UserEntity,
    ) -> None:
        # Given: only T1 is free, party of 3 needs capacity 4+
        reservation_query_repo.list_committed_table_ids.return_value = {2, 3, 4}

        with pytest.raises(SlotFullError) as exc_info:
            await use_case.allocate(date=DATE, time=TIME, party_size=3, requester=requester)

        assert exc_info.value.code == 'SLOT_FULL'
        reservation_command_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'date,time',
        [
            ('2024-13-01', TIME),
            ('01/06/2024', TIME),
            ('', TIME),
            (DATE, '18:30'),
            (DATE, ''),
        ],
    )
    async def test_invalid_slot(
        self,
        use_case: AllocateTableUseCase,
        table_query_repo: AsyncMock,
        requester: UserEntity,
        date: str,
        time: str,
    ) -> None:
        with pytest.raises(InvalidSlotError):
            await use_case.allocate(date=date, time=time, party_size=2, requester=requester)

        table_query_repo.list_by_min_capacity.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize('party_size', [0, -1, True, 2.5, '2'])
    async def test_invalid_party_size(
        self,
        use_case: AllocateTableUseCase,
        table_query_repo: AsyncMock,
        requester: UserEntity,
        party_size,
    ) -> None:
        with pytest.raises(InvalidPartySizeError):
            await use_case.allocate(
                date=DATE, time=TIME, party_size=party_size, requester=requester
            )

        table_query_repo.list_by_min_capacity.assert_not_awaited()

    # ==================== Commit conflicts ====================

    @pytest.mark.asyncio
    async def test_conflict_reselects_against_fresh_state(
        self,
        use_case: AllocateTableUseCase,
        reservation_query_repo: AsyncMock,
        reservation_command_repo: AsyncMock,
        requester: UserEntity,
    ) -> None:
        # Given: T2 is taken by another writer between read and commit
        reservation_query_repo.list_committed_table_ids.side_effect = [set(), {2}]
        reservation_command_repo.create.side_effect = _fail_then_echo(
            SlotTableAlreadyCommittedError(slot_key='2024-06-01@18:00', table_id=2)
        )

        # When
        reservation = await use_case.allocate(
            date=DATE, time=TIME, party_size=3, requester=requester
        )

        # Then
        assert reservation.table_id == T3.id
        assert reservation_command_repo.create.await_count == 2
        assert reservation_query_repo.list_committed_table_ids.await_count == 2

    @pytest.mark.asyncio
    async def test_conflict_that_leaves_no_table_becomes_slot_full(
        self,
        use_case: AllocateTableUseCase,
        reservation_query_repo: AsyncMock,
        reservation_command_repo: AsyncMock,
        requester: UserEntity,
    ) -> None:
        # Given: party of 5 only fits T4, which a concurrent writer takes
        reservation_query_repo.list_committed_table_ids.side_effect = [set(), {4}]
        reservation_command_repo.create.side_effect = SlotTableAlreadyCommittedError(
            slot_key='2024-06-01@18:00', table_id=4
        )

        with pytest.raises(SlotFullError):
            await use_case.allocate(date=DATE, time=TIME, party_size=5, requester=requester)

        reservation_command_repo.create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_exhausted_attempts_raise_allocation_conflict(
        self,
        use_case: AllocateTableUseCase,
        reservation_command_repo: AsyncMock,
        requester: UserEntity,
    ) -> None:
        reservation_command_repo.create.side_effect = SlotTableAlreadyCommittedError(
            slot_key='2024-06-01@18:00', table_id=2
        )

        with pytest.raises(AllocationConflictError) as exc_info:
            await use_case.allocate(date=DATE, time=TIME, party_size=3, requester=requester)

        assert exc_info.value.status_code == 503
        assert reservation_command_repo.create.await_count == 3

    @pytest.mark.asyncio
    async def test_store_unavailable_after_retries_is_surfaced(
        self,
        use_case: AllocateTableUseCase,
        reservation_command_repo: AsyncMock,
        requester: UserEntity,
    ) -> None:
        reservation_command_repo.create.side_effect = ReservationStoreUnavailableError(
            'database is locked'
        )

        with pytest.raises(ReservationStoreUnavailableError):
            await use_case.allocate(date=DATE, time=TIME, party_size=2, requester=requester)

        assert reservation_command_repo.create.await_count == 3

    @pytest.mark.asyncio
    async def test_transient_store_failure_recovers_on_retry(
        self,
        use_case: AllocateTableUseCase,
        reservation_command_repo: AsyncMock,
        requester: UserEntity,
    ) -> None:
        reservation_command_repo.create.side_effect = _fail_then_echo(
            ReservationStoreUnavailableError('database is locked')
        )

        reservation = await use_case.allocate(
            date=DATE, time=TIME, party_size=2, requester=requester
        )

        assert reservation.table_id == T1.id

    @pytest.mark.asyncio
    async def test_store_outage_while_reading_committed_tables_is_retried(
        self,
        use_case: AllocateTableUseCase,
        reservation_query_repo: AsyncMock,
        reservation_command_repo: AsyncMock,
        requester: UserEntity,
    ) -> None:
        # Given: the store is down for every read
        reservation_query_repo.list_committed_table_ids.side_effect = (
            ReservationStoreUnavailableError('unable to open database file')
        )

        # When / Then: surfaced as the transient error once attempts run out
        with pytest.raises(ReservationStoreUnavailableError) as exc_info:
            await use_case.allocate(date=DATE, time=TIME, party_size=2, requester=requester)

        assert exc_info.value.status_code == 503
        assert reservation_query_repo.list_committed_table_ids.await_count == 3
        reservation_command_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_outage_while_reading_catalog_recovers_on_retry(
        self,
        use_case: AllocateTableUseCase,
        table_query_repo: AsyncMock,
        requester: UserEntity,
    ) -> None:
        tables = [T1, T2, T3, T4]
        table_query_repo.list_by_min_capacity.side_effect = [
            ReservationStoreUnavailableError('database is locked'),
            tables,
        ]

        reservation = await use_case.allocate(
            date=DATE, time=TIME, party_size=2, requester=requester
        )

        assert reservation.table_id == T1.id
        assert table_query_repo.list_by_min_capacity.await_count == 2

    @pytest.mark.asyncio
    async def test_slot_lock_released_after_rejection(
        self, use_case: AllocateTableUseCase, requester: UserEntity
    ) -> None:
        with pytest.raises(NoCapacityError):
            await use_case.allocate(date=DATE, time=TIME, party_size=99, requester=requester)

        assert len(use_case.slot_lock) == 0


@pytest.mark.unit
class TestConcurrentAllocation:
    """Many requests for one slot: never more commits than tables, never a duplicate table"""

    def _use_case(self, store: InMemoryReservationStore, slot_lock: KeyedLock) -> AllocateTableUseCase:
        return AllocateTableUseCase(
            table_query_repo=store,
            reservation_query_repo=store,
            reservation_command_repo=store,
            selection_strategy=SmallestFitSelection(),
            slot_lock=slot_lock,
            service_times=SERVICE_TIMES,
            max_attempts=10,
        )

    async def _run(self, use_cases: list[AllocateTableUseCase], requests: int) -> list:
        requester = UserEntity(id=1, email='c@test.com', name='Casey')
        return await asyncio.gather(
            *(
                use_cases[i % len(use_cases)].allocate(
                    date=DATE, time=TIME, party_size=2, requester=requester
                )
                for i in range(requests)
            ),
            return_exceptions=True,
        )

    @pytest.mark.asyncio
    async def test_shared_lock_commits_each_table_once(self) -> None:
        # Given: 4 tables, 10 concurrent requests on one slot
        store = InMemoryReservationStore([T1, T2, T3, T4])
        use_case = self._use_case(store, KeyedLock())

        # When
        results = await self._run([use_case], requests=10)

        # Then
        committed = [r for r in results if isinstance(r, Reservation)]
        rejected = [r for r in results if isinstance(r, SlotFullError)]
        assert len(committed) == 4
        assert len(rejected) == 6
        assert sorted(r.table_id for r in committed) == [1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_independent_locks_still_never_double_book(self) -> None:
        # Given: two "processes" that do not share a slot lock
        store = InMemoryReservationStore([T1, T2, T3, T4])
        use_cases = [self._use_case(store, KeyedLock()), self._use_case(store, KeyedLock())]

        results = await self._run(use_cases, requests=10)

        committed = [r for r in results if isinstance(r, Reservation)]
        assert len(committed) == 4
        assert len({r.table_id for r in committed}) == 4
        for result in results:
            assert isinstance(result, (Reservation, SlotFullError, AllocationConflictError))
        assert len(store.reservations) == 4
