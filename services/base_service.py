"""
Base store class with the common record-collection patterns
"""
from typing import Type, TypeVar, Optional, List, Any, Iterable, Generic
from sqlalchemy.orm import Session
from sqlalchemy import asc, desc, inspect
from fastapi import HTTPException, status

T = TypeVar('T')


class BaseStore(Generic[T]):
    """
    Keyed collection of persisted records.

    Exposes the "get all / save all" surface the reward engine reads from,
    plus key lookups so callers never have to scan the whole collection to
    touch one record. The key is the primary key unless `key` names another
    unique column.
    """

    def __init__(self, db: Session, model_class: Type[T], key: Optional[str] = None):
        self.db = db
        self.model_class = model_class
        self.pk = inspect(model_class).primary_key[0]
        self.key = getattr(model_class, key) if key else None

    def get(self, obj_id: Any) -> Optional[T]:
        """Get object by key"""
        if self.key is None:
            return self.db.get(self.model_class, obj_id)
        return self.db.query(self.model_class).filter(self.key == obj_id).first()

    def get_or_404(self, obj_id: Any) -> T:
        """Get object by key or raise 404"""
        obj = self.get(obj_id)
        if not obj:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{self.model_class.__name__} not found"
            )
        return obj

    def get_all(
        self,
        order_by: Optional[str] = None,
        order_direction: str = 'asc',
        **filters
    ) -> List[T]:
        """Get all objects, insertion order unless told otherwise"""
        query = self.db.query(self.model_class)
        if filters:
            query = query.filter_by(**filters)

        column = getattr(self.model_class, order_by, None) if order_by else None
        if column is not None:
            query = query.order_by(asc(column) if order_direction.lower() == 'asc' else desc(column))
        else:
            query = query.order_by(asc(self.created_column()), asc(self.pk))

        return query.all()

    def save_all(self, objs: Iterable[T]) -> List[T]:
        """Persist every given object in one commit"""
        objs = list(objs)
        saved = []
        for obj in objs:
            if inspect(obj).detached:
                obj = self.db.merge(obj)
            else:
                self.db.add(obj)
            saved.append(obj)
        self.db.commit()
        return saved

    def add(self, obj: T) -> T:
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def count(self, **filters) -> int:
        """Count objects with given filters"""
        return self.db.query(self.model_class).filter_by(**filters).count()

    def created_column(self):
        return getattr(self.model_class, "created_at", self.pk)
