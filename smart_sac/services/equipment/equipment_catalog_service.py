"""
Game and equipment catalog management.

Equipment removal is a soft delete; removing a game is the one path that
physically deletes equipment (and, by cascade, its history).
"""

from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from smart_sac.core.exceptions import (
    DuplicateEntryError,
    GameNotFoundError,
    PersistenceError,
    ValidationError,
    create_validation_error,
)
from smart_sac.models.enums import EquipmentStatus
from smart_sac.models.equipment import Equipment
from smart_sac.models.game import Game
from smart_sac.repositories import EquipmentRepository, GameRepository
from smart_sac.schemas.equipment import EquipmentResponse
from smart_sac.schemas.game import EquipmentAdded, EquipmentRemoved, GameResponse
from smart_sac.services.base import BaseService


def _game_view(game: Game) -> GameResponse:
    return GameResponse(
        id=game.id,
        name=game.name,
        created_at=game.created_at,
        updated_at=game.updated_at,
        equipment=[
            EquipmentResponse.model_validate(item)
            for item in game.equipment
            if not item.is_deleted
        ],
    )


def _require(**fields: str) -> None:
    missing = {
        name: [f"{name} is required"]
        for name, value in fields.items()
        if value is None or not str(value).strip()
    }
    if missing:
        raise create_validation_error(missing)


class EquipmentCatalogService(BaseService):

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.game_repo = GameRepository(db_session)
        self.equipment_repo = EquipmentRepository(db_session)

    def list_equipment(self) -> List[EquipmentResponse]:
        return [EquipmentResponse.model_validate(e) for e in self.equipment_repo.list_all()]

    def add_game(self, name: str) -> GameResponse:
        _require(name=name)
        if self.game_repo.get_by_name(name) is not None:
            raise DuplicateEntryError(
                f"Game '{name.strip().lower()}' already exists",
                field="name",
                value=name,
                table=Game.__tablename__,
            )

        try:
            with self.transaction():
                game = self.game_repo.create(Game(name=name))
        except IntegrityError as exc:
            raise DuplicateEntryError(
                f"Game '{name.strip().lower()}' already exists",
                field="name",
                value=name,
                table=Game.__tablename__,
            ) from exc
        except SQLAlchemyError as exc:
            raise PersistenceError("Failed to add game", operation="add_game", table=Game.__tablename__) from exc

        self._logger.info(f"Game added: {game.name}", extra={"game_id": game.id})
        return _game_view(game)

    def remove_game(self, name: str) -> GameResponse:
        """
        Delete a game together with all of its equipment and their history.

        Returns:
            The removed game as it looked before deletion
        """
        _require(name=name)
        game = self.game_repo.get_by_name(name)
        if game is None:
            raise GameNotFoundError(name)

        removed = _game_view(game)
        try:
            with self.transaction():
                self.game_repo.delete(game, hard_delete=True)
        except SQLAlchemyError as exc:
            raise PersistenceError(
                "Failed to remove game",
                operation="remove_game",
                table=Game.__tablename__,
            ) from exc

        self._logger.info(
            f"Game removed: {removed.name}",
            extra={"game_id": removed.id, "equipment_removed": len(removed.equipment)},
        )
        return removed

    def add_equipment(self, game_name: str, name: str) -> EquipmentAdded:
        """
        Register a new item under a game. A previously removed item with the
        same name is restored as available instead of inserted again.
        """
        _require(game_name=game_name, name=name)
        game = self.game_repo.get_by_name(game_name)
        if game is None:
            raise GameNotFoundError(game_name)

        existing = self.equipment_repo.get_by_name(name, include_deleted=True)
        if existing is not None and not existing.is_deleted:
            raise DuplicateEntryError(
                f"Equipment '{existing.name}' already exists",
                field="name",
                value=name,
                table=Equipment.__tablename__,
            )

        try:
            with self.transaction():
                if existing is not None:
                    existing.is_deleted = False
                    existing.deleted_at = None
                    existing.status = EquipmentStatus.AVAILABLE
                    existing.user = None
                    existing.user_id = None
                    existing.roll_no = None
                    existing.duration = None
                    existing.game = game
                    equipment = self.equipment_repo.save(existing)
                else:
                    equipment = self.equipment_repo.create(
                        Equipment(name=name, status=EquipmentStatus.AVAILABLE, game=game)
                    )
        except IntegrityError as exc:
            raise DuplicateEntryError(
                f"Equipment '{name.strip().lower()}' already exists",
                field="name",
                value=name,
                table=Equipment.__tablename__,
            ) from exc
        except SQLAlchemyError as exc:
            raise PersistenceError(
                "Failed to add equipment",
                operation="add_equipment",
                table=Equipment.__tablename__,
            ) from exc

        self._logger.info(
            f"Equipment added: {equipment.name}",
            extra={"equipment_id": equipment.id, "game": game.name, "restored": existing is not None},
        )
        return EquipmentAdded(
            equipment=EquipmentResponse.model_validate(equipment),
            game=_game_view(game),
        )

    def remove_equipment(self, game_name: str, name: str) -> EquipmentRemoved:
        _require(game_name=game_name, name=name)
        game = self.game_repo.get_by_name(game_name)
        equipment = self.equipment_repo.get_by_name(name)
        if game is None or equipment is None or equipment.game_id != game.id:
            raise ValidationError(
                "Game and equipment must exist and be associated",
                field_errors={"name": [f"'{name}' is not equipment of game '{game_name}'"]},
            )

        try:
            with self.transaction():
                self.equipment_repo.delete(equipment)
        except SQLAlchemyError as exc:
            raise PersistenceError(
                "Failed to remove equipment",
                operation="remove_equipment",
                table=Equipment.__tablename__,
            ) from exc

        self._logger.info(f"Equipment removed: {equipment.name}", extra={"equipment_id": equipment.id})
        return EquipmentRemoved(
            game=_game_view(game),
            removed_equipment=EquipmentResponse.model_validate(equipment),
        )
