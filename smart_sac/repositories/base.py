# smart_sac/repositories/base.py
from __future__ import annotations

from typing import Any, Dict, Generic, Optional, Type, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from smart_sac.models.base import Base
from smart_sac.utils.datetime_utils import DateTimeHelper

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository with common CRUD and query helpers.

    - Does not commit/rollback; caller manages transactions.
    - Filters out soft-deleted rows when the model has an `is_deleted` column.
    """

    def __init__(self, session: Session, model: Type[ModelType]):
        self.session = session
        self.model = model

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #
    def _base_select(self) -> Select[tuple[ModelType]]:
        stmt = select(self.model)
        if hasattr(self.model, "is_deleted"):
            stmt = stmt.where(getattr(self.model, "is_deleted").is_(False))
        return stmt

    # ------------------------------------------------------------------ #
    # Basic CRUD
    # ------------------------------------------------------------------ #
    def get(self, id_: str) -> Optional[ModelType]:
        stmt = self._base_select().where(self.model.id == id_)
        return self.session.execute(stmt).scalar_one_or_none()

    def create(self, obj_in: Dict[str, Any] | ModelType) -> ModelType:
        if isinstance(obj_in, self.model):
            db_obj = obj_in
        else:
            db_obj = self.model(**obj_in)  # type: ignore[arg-type]
        self.session.add(db_obj)
        # flush to populate PK
        self.session.flush()
        return db_obj

    def delete(self, db_obj: ModelType, *, hard_delete: bool = False) -> None:
        """
        Delete an object.

        - If model has `is_deleted` and `hard_delete=False`, marks as soft-deleted.
        - Otherwise performs real DELETE (ORM cascades apply).
        """
        if hasattr(self.model, "is_deleted") and not hard_delete:
            setattr(db_obj, "is_deleted", True)
            if hasattr(self.model, "deleted_at"):
                setattr(db_obj, "deleted_at", DateTimeHelper.utcnow())
        else:
            self.session.delete(db_obj)
        self.session.flush()
