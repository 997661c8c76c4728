# services/repository.py
"""Generic CRUD over one mapped table.

One ``Repository`` instance per entity type. Reads and writes each run as a
single short unit of work on the caller's session; nothing is cached between
requests.
"""
import logging
from typing import Any, Generic, Iterable, Optional, Sequence, TypeVar

from sqlalchemy import delete, inspect, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import ConflictError, NotFound, ValidationError
from ..utils import trim_strings

logger = logging.getLogger(__name__)

M = TypeVar("M")


class Repository(Generic[M]):
    def __init__(
        self,
        model: type[M],
        *,
        order_by: Iterable[Any] = (),
        required: Sequence[str] = (),
        label: Optional[str] = None,
        conflict_message: Optional[str] = None,
    ):
        self.model = model
        self.order_by = tuple(order_by)
        self.required = tuple(required)
        self.label = label or model.__name__
        self.conflict_message = conflict_message or f"{self.label} already exists"
        self._columns = set(inspect(model).columns.keys()) - {"id"}

    # ---- helpers ----
    def _clean(self, fields: dict) -> dict:
        return trim_strings({k: v for k, v in fields.items() if k in self._columns})

    def _check_required(self, values: dict, *, partial: bool) -> None:
        for name in self.required:
            if partial and name not in values:
                continue
            value = values.get(name)
            if value is None or (isinstance(value, str) and not value):
                raise ValidationError(f"{name} is required")

    async def _commit(self, db: AsyncSession) -> None:
        try:
            await db.commit()
        except IntegrityError as exc:
            await db.rollback()
            logger.info("%s write rejected by constraint: %s", self.label, exc.orig)
            raise ConflictError(self.conflict_message)

    # ---- reads ----
    async def list(self, db: AsyncSession, *where: Any, limit: Optional[int] = None,
                   offset: Optional[int] = None, order_by: Optional[Iterable[Any]] = None) -> list[M]:
        stmt = select(self.model).where(*where).order_by(*(order_by or self.order_by))
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)
        return list((await db.execute(stmt)).scalars().all())

    async def get(self, db: AsyncSession, obj_id: int) -> M:
        obj = await db.get(self.model, obj_id)
        if obj is None:
            raise NotFound(f"{self.label} not found")
        return obj

    async def first(self, db: AsyncSession, *where: Any) -> M:
        obj = (await db.execute(select(self.model).where(*where).limit(1))).scalars().first()
        if obj is None:
            raise NotFound(f"{self.label} not found")
        return obj

    # ---- writes ----
    async def create(self, db: AsyncSession, fields: dict) -> M:
        values = self._clean(fields)
        self._check_required(values, partial=False)
        obj = self.model(**values)
        db.add(obj)
        await self._commit(db)
        await db.refresh(obj)
        return obj

    async def update(self, db: AsyncSession, obj_id: int, fields: dict) -> M:
        # None means "leave as is"
        values = self._clean({k: v for k, v in fields.items() if v is not None})
        self._check_required(values, partial=True)
        obj = await self.get(db, obj_id)
        for key, value in values.items():
            setattr(obj, key, value)
        await self._commit(db)
        await db.refresh(obj)
        return obj

    async def delete(self, db: AsyncSession, obj_id: int) -> None:
        result = await db.execute(delete(self.model).where(self.model.id == obj_id))
        await db.commit()
        if not result.rowcount:
            raise NotFound(f"{self.label} not found")


__all__ = ["Repository"]
