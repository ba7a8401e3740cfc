"""
Access Policy

Single source of truth for who may see and cancel which reservation.
Privileged roles (staff, manager, admin) see and cancel everything;
customers see and cancel only reservations they own.
"""

from typing import Iterable

import attrs

from src.platform.exception.exceptions import ForbiddenError
from src.service.table_reservation.domain.entity.reservation_entity import Reservation
from src.service.table_reservation.domain.entity.user_entity import UserRole


PRIVILEGED_ROLES: frozenset[UserRole] = frozenset(
    {UserRole.STAFF, UserRole.MANAGER, UserRole.ADMIN}
)


@attrs.frozen
class AccessDecision:
    visible: bool
    cancelable: bool


class AccessPolicy:
    @staticmethod
    def is_privileged(role: UserRole | str) -> bool:
        try:
            return UserRole(role) in PRIVILEGED_ROLES
        except ValueError:
            return False

    @staticmethod
    def can_view_all(role: UserRole | str) -> bool:
        return AccessPolicy.is_privileged(role)

    @staticmethod
    def decide(*, requester_role: UserRole | str, requester_id: int, owner_id: int) -> AccessDecision:
        allowed = AccessPolicy.is_privileged(requester_role) or requester_id == owner_id
        return AccessDecision(visible=allowed, cancelable=allowed)

    @staticmethod
    def ensure_can_view(
        *, requester_role: UserRole | str, requester_id: int, reservation: Reservation
    ) -> None:
        decision = AccessPolicy.decide(
            requester_role=requester_role,
            requester_id=requester_id,
            owner_id=reservation.owner_id,
        )
        if not decision.visible:
            raise ForbiddenError('You can only view your own reservations')

    @staticmethod
    def ensure_can_cancel(
        *, requester_role: UserRole | str, requester_id: int, reservation: Reservation
    ) -> None:
        decision = AccessPolicy.decide(
            requester_role=requester_role,
            requester_id=requester_id,
            owner_id=reservation.owner_id,
        )
        if not decision.cancelable:
            raise ForbiddenError('You can only cancel your own reservations')

    @staticmethod
    def visible_reservations(
        *, requester_role: UserRole | str, requester_id: int, reservations: Iterable[Reservation]
    ) -> list[Reservation]:
        return [
            r
            for r in reservations
            if AccessPolicy.decide(
                requester_role=requester_role, requester_id=requester_id, owner_id=r.owner_id
            ).visible
        ]
