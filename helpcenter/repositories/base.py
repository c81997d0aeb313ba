from __future__ import annotations

from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.sql.base import ExecutableOption

from helpcenter.core.errors import NotFoundError
from helpcenter.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)


def is_blank(value: Any) -> bool:
    """True for values a partial update treats as "not provided". 0 and False are real values."""
    if value is None:
        return True
    if isinstance(value, (str, list, dict)):
        return len(value) == 0
    return False


class Repository(Generic[ModelT]):
    """Key-based access to one entity kind over an injected session.

    Repositories only flush; committing is the caller's unit of work
    (see `helpcenter.core.db.transactional`).
    """

    model: ClassVar[type[Base]]
    entity: ClassVar[str]

    def __init__(self, db: Session) -> None:
        self.db = db

    def _ordering(self) -> tuple:
        return (self.model.id.asc(),)

    def find(self, obj_id: int, *options: ExecutableOption) -> ModelT | None:
        stmt = select(self.model).where(self.model.id == obj_id).options(*options)
        return self.db.scalars(stmt).one_or_none()

    def get(self, obj_id: int, *options: ExecutableOption) -> ModelT:
        obj = self.find(obj_id, *options)
        if obj is None:
            raise NotFoundError(self.entity, obj_id)
        return obj

    def for_update(self, obj_id: int) -> ModelT:
        """Like `get`, but holds a row lock until the transaction ends (no-op on SQLite)."""
        stmt = select(self.model).where(self.model.id == obj_id).with_for_update()
        obj = self.db.scalars(stmt).one_or_none()
        if obj is None:
            raise NotFoundError(self.entity, obj_id)
        return obj

    def find_all(self, *criteria: Any, options: tuple[ExecutableOption, ...] = ()) -> list[ModelT]:
        stmt = select(self.model).where(*criteria).options(*options).order_by(*self._ordering())
        return list(self.db.scalars(stmt).all())

    def add(self, obj: ModelT) -> ModelT:
        self.db.add(obj)
        self.db.flush()  # ensures obj.id is available
        return obj

    def update(self, obj: ModelT, changes: dict[str, Any], *, skip_blank: bool = True) -> list[str]:
        """Apply `changes` in place and return the names of fields that were written.

        With `skip_blank`, blank values (see `is_blank`) leave the stored value unchanged.
        """
        written: list[str] = []
        for field, value in changes.items():
            if skip_blank and is_blank(value):
                continue
            setattr(obj, field, value)
            written.append(field)

        self.db.flush()  # updated_at is bumped by the column onupdate
        return written

    def delete(self, obj: ModelT) -> None:
        self.db.delete(obj)
        self.db.flush()
