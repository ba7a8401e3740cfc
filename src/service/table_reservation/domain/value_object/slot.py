import datetime as dt
from typing import Sequence

import attrs

from src.service.table_reservation.domain.reservation_errors import InvalidSlotError


DATE_FORMAT = '%Y-%m-%d'


@attrs.frozen
class Slot:
    """A discrete seating: one calendar date at one service time"""

    date: dt.date
    time: str

    @property
    def key(self) -> str:
        return f'{self.date.isoformat()}@{self.time}'

    @classmethod
    def parse(cls, *, date: str | dt.date, time: str, service_times: Sequence[str]) -> 'Slot':
        if isinstance(date, str):
            try:
                parsed_date = dt.datetime.strptime(date, DATE_FORMAT).date()
            except ValueError:
                raise InvalidSlotError(f'Invalid date: {date!r}. Expected YYYY-MM-DD')
        else:
            parsed_date = date

        if time not in service_times:
            raise InvalidSlotError(
                f'Invalid time: {time!r}. Must be one of: {", ".join(service_times)}'
            )

        return cls(date=parsed_date, time=time)

    def __str__(self) -> str:
        return f'{self.date.isoformat()} {self.time}'
