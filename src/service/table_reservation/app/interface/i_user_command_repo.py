from abc import ABC, abstractmethod

from src.service.table_reservation.domain.entity.user_entity import UserEntity


class IUserCommandRepo(ABC):
    @abstractmethod
    async def create(self, user_entity: UserEntity) -> UserEntity:
        pass
