"""Generic async repository with owner scoping and pagination."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vendor_api.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)

# Columns a caller can never write through update()
_PROTECTED = frozenset({"id", "user_email", "created_at", "updated_at"})


@dataclass(frozen=True)
class Filter:
    """Equality predicate on the owner and, optionally, the row id."""

    owner: str
    id: str | None = None

    def apply(self, model: type[Base], query):
        query = query.where(model.user_email == self.owner)
        if self.id is not None:
            query = query.where(model.id == self.id)
        return query


class OwnedRepository(Generic[ModelT]):
    """Generic CRUD repository. Every query is scoped to one owner.

    The owner is fixed at construction; callers never pass it per call, so a
    query that forgets the ownership condition cannot be written here.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession, owner: str):
        self._session = session
        self._owner = owner

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _filter(self, entity_id: str | None = None) -> Filter:
        return Filter(owner=self._owner, id=entity_id)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def find_one(self, entity_id: str) -> ModelT | None:
        q = self._filter(entity_id).apply(self.model, select(self.model))
        result = await self._session.execute(q)
        return result.scalars().first()

    async def count(self) -> int:
        q = self._filter().apply(self.model, select(func.count()).select_from(self.model))
        return (await self._session.execute(q)).scalar_one()

    async def find(
        self,
        *,
        skip: int = 0,
        limit: int = 10,
        order_by: str = "created_at",
        descending: bool = True,
    ) -> list[ModelT]:
        q = self._filter().apply(self.model, select(self.model))
        col = getattr(self.model, order_by)
        # id breaks ties so page boundaries are stable
        tiebreak = self.model.id
        if descending:
            q = q.order_by(col.desc(), tiebreak.desc())
        else:
            q = q.order_by(col.asc(), tiebreak.asc())
        q = q.offset(skip).limit(limit)
        items = (await self._session.execute(q)).scalars().all()
        return list(items)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def insert(self, **kwargs: Any) -> ModelT:
        kwargs = {k: v for k, v in kwargs.items() if k not in _PROTECTED}
        instance = self.model(user_email=self._owner, **kwargs)
        self._session.add(instance)
        await self._session.flush()  # populate id and server defaults
        await self._session.refresh(instance)
        return instance

    async def update(self, entity_id: str, **kwargs: Any) -> ModelT | None:
        """Merge ``kwargs`` over the owned row; ``None`` if there is no such row."""
        instance = await self.find_one(entity_id)
        if instance is None:
            return None

        for key, value in kwargs.items():
            if key in _PROTECTED or not hasattr(self.model, key):
                continue
            setattr(instance, key, value)
        instance.updated_at = datetime.now(timezone.utc)

        await self._session.flush()
        await self._session.refresh(instance)
        return instance

    async def delete(self, entity_id: str) -> bool:
        q = self._filter(entity_id).apply(self.model, delete(self.model))
        result = await self._session.execute(q)
        await self._session.flush()
        return result.rowcount > 0

    async def commit(self) -> None:
        await self._session.commit()
