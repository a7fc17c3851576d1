import logging
from typing import Generic, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from database import Base
from exceptions import FailedToCreateError, NotFoundError

ModelT = TypeVar("ModelT", bound=Base)

logger = logging.getLogger(__name__)


class DbService(Generic[ModelT]):
    """Predicate-based CRUD for a single mapped model.

    Criteria are SQLAlchemy boolean expressions, e.g.
    ``service.get(models.Book.isbn == isbn)``. Several criteria are ANDed.
    """

    def __init__(self, db: Session, model: Type[ModelT]):
        self.db = db
        self.model = model

    def get(self, *criteria) -> Optional[ModelT]:
        return self.db.query(self.model).filter(*criteria).first()

    def get_all(self, *criteria, order_by=None, offset: int | None = None, limit: int | None = None) -> list[ModelT]:
        query = self.db.query(self.model).filter(*criteria)
        if order_by is not None:
            query = query.order_by(order_by)
        if offset is not None:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def count(self, *criteria) -> int:
        return self.db.query(self.model).filter(*criteria).count()

    def create(self, entity: ModelT) -> ModelT:
        try:
            self.db.add(entity)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning(f"Constraint violation creating {self.model.__name__}: {exc.orig}")
            raise FailedToCreateError(self.model, "Database constraint violation") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Error creating {self.model.__name__}: {exc}")
            raise FailedToCreateError(self.model, "Unexpected error during creation") from exc

        self.db.refresh(entity)
        return entity

    def update(self, *criteria, **values) -> ModelT:
        entity = self.get(*criteria)
        if entity is None:
            raise NotFoundError(self.model)

        for key, value in values.items():
            setattr(entity, key, value)

        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(entity)
        return entity

    def delete(self, *criteria) -> ModelT:
        entity = self.get(*criteria)
        if entity is None:
            raise NotFoundError(self.model)

        self.db.delete(entity)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return entity
