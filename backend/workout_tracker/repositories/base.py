# workout_tracker/repositories/base.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from workout_tracker.errors import StoreError

T = TypeVar("T")  # SQLAlchemy model type

@dataclass(slots=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    limit: int
    offset: int

class BaseRepository(Generic[T]):
    """Lightweight base for repositories using SQLAlchemy 2.0 style.

    Query helpers turn driver/ORM failures into ``StoreError`` so callers
    never need to know about SQLAlchemy exceptions.
    """
    model: type[T]

    def __init__(self, db: Session):
        self.db = db

    def get(self, entity_id) -> T | None:
        try:
            return self.db.get(self.model, entity_id)
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def scalars(self, stmt) -> list[T]:
        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def scalar(self, stmt):
        try:
            return self.db.execute(stmt).scalar_one()
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def first(self, stmt) -> T | None:
        try:
            return self.db.execute(stmt.limit(1)).scalars().first()
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(str(e)) from e
