"""
Relational adapter: the repository contract over SQLAlchemy.

One ``RelationalRepository`` is built per entity from a ``RelationalTable``
(ORM model, entity schema, projection, filter conversion, references). Every
operation opens its own session from the injected ``sessionmaker`` so the
paginated items/count reads can run on separate threads.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Generic, Iterator, List, Mapping, Optional, Sequence, Type, TypeVar

from sqlalchemy import and_, asc, case, desc, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, load_only, selectinload, sessionmaker

from admin_core.errors import BackendError, NotFoundError
from admin_core.db.types import InternalKey, new_public_id
from .base import Repository
from .filters import AnyOf, Contains, FilterConverter, IEquals, Not, identity_filter, is_membership
from .mapping import Reference, summarize_reference, writable
from .query import BulkDeleteResult, BulkUpdateResult, QueryOptions

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RelationalTable(Generic[T]):
    model: Type[Any]
    entity: Type[T]
    projection: Optional[Sequence[str]] = None
    convert_filter: FilterConverter = identity_filter
    references: Sequence[Reference] = ()
    # Boolean column flipped to False by delete_by_id instead of removing the row.
    soft_delete_field: Optional[str] = None
    columns: frozenset = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "columns", frozenset(c.key for c in self.model.__table__.columns))


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class RelationalRepository(Repository[T]):
    def __init__(self, session_factory: sessionmaker, table: RelationalTable[T], *, parallel_reads: Optional[bool] = None):
        self._session_factory = session_factory
        self._table = table
        self._model = table.model
        self._projection = tuple(table.projection or sorted(table.columns))
        self._references = {ref.path: ref for ref in table.references}
        if parallel_reads is None:
            # A shared sqlite connection cannot serve two threads at once
            bind = session_factory.kw.get("bind")
            parallel_reads = not (bind is not None and bind.dialect.name == "sqlite")
        self.parallel_reads = parallel_reads

    @property
    def entity_name(self) -> str:
        return self._model.__tablename__

    # -- plumbing ---------------------------------------------------------

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        except SQLAlchemyError as e:
            db.rollback()
            raise BackendError(f"Failed to {action} {self.entity_name}: {str(e)}") from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def _column(self, name: str):
        if name not in self._table.columns:
            raise ValueError(f"Unknown field for {self.entity_name}: {name}")
        return getattr(self._model, name)

    def _criterion(self, key: str, value: Any):
        if isinstance(value, AnyOf):
            return or_(*[and_(*self._raw_criteria(sub)) for sub in value.filters])
        column = self._column(key)
        if isinstance(value, Contains):
            return column.ilike(_like_pattern(value.value), escape="\\")
        if isinstance(value, IEquals):
            return func.lower(column) == value.value.lower()
        if isinstance(value, Not):
            return column.is_not(None) if value.value is None else column != value.value
        if is_membership(value):
            return column.in_(list(value))
        if value is None:
            return column.is_(None)
        return column == value

    def _raw_criteria(self, filter: Mapping[str, Any]) -> list:
        return [self._criterion(key, value) for key, value in filter.items()]

    def _criteria(self, filter: Optional[Mapping[str, Any]]) -> list:
        return self._raw_criteria(self._table.convert_filter(filter or {}))

    def _query(self, db: Session, filter: Optional[Mapping[str, Any]], options: Optional[QueryOptions]):
        q = db.query(self._model).filter(*self._criteria(filter))
        if options is None:
            return q
        if options.sort:
            q = q.order_by(*[
                asc(self._column(name)) if direction == 1 else desc(self._column(name))
                for name, direction in options.sort.items()
            ])
        if options.select:
            q = q.options(load_only(*[self._column(name) for name in options.select]))
        for path in options.populate or ():
            reference = self._references.get(path)
            if reference is None:
                raise ValueError(f"Unknown populate path for {self.entity_name}: {path}")
            q = q.options(selectinload(getattr(self._model, reference.target)))
        if options.skip:
            q = q.offset(options.skip)
        if options.limit:
            q = q.limit(options.limit)
        return q

    def _to_entity(self, row: Any, options: Optional[QueryOptions] = None) -> T:
        selected = options.select if options is not None and options.select else None
        data = {name: getattr(row, name) for name in (selected or self._projection)}
        for path in (options.populate if options is not None and options.populate else ()):
            reference = self._references[path]
            summary = summarize_reference(getattr(row, reference.target))
            if summary is not None:
                data[reference.field] = summary
        if selected:
            return self._table.entity.model_construct(**data)
        return self._table.entity.model_validate(data)

    def _writable(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return writable(data, self._table.columns, self.entity_name)

    # -- contract ---------------------------------------------------------

    def get_all(self, filter: Optional[Mapping[str, Any]] = None, options: Optional[QueryOptions] = None) -> List[T]:
        with self._session("read") as db:
            rows = self._query(db, filter, options).all()
            logger.debug(f"{self.entity_name}: fetched {len(rows)} rows")
            return [self._to_entity(row, options) for row in rows]

    def get_detail_by_id(self, id: InternalKey, options: Optional[QueryOptions] = None) -> Optional[T]:
        return self.get_detail({"id": id}, options)

    def get_detail(self, filter: Mapping[str, Any], options: Optional[QueryOptions] = None) -> Optional[T]:
        with self._session("read") as db:
            row = self._query(db, filter, options).first()
            return self._to_entity(row, options) if row is not None else None

    def insert(self, data: Mapping[str, Any]) -> T:
        payload = self._writable(data)
        payload["public_id"] = new_public_id()
        with self._session("insert into") as db:
            db_row = self._model(**payload)
            db.add(db_row)
            db.commit()
            db.refresh(db_row)
            return self._to_entity(db_row)

    def update_by_id(self, id: InternalKey, data: Mapping[str, Any]) -> T:
        payload = self._writable(data)
        with self._session("update") as db:
            db_row = db.get(self._model, id)
            if db_row is None:
                raise NotFoundError(f"{self.entity_name} with id {id} not found", details={"id": id})
            for key, value in payload.items():
                setattr(db_row, key, value)
            db.commit()
            db.refresh(db_row)
            return self._to_entity(db_row)

    def update_many(self, filter: Mapping[str, Any], data: Mapping[str, Any]) -> BulkUpdateResult[T]:
        payload = self._writable(data)
        criteria = self._criteria(filter)
        with self._session("bulk update") as db:
            count = db.query(self._model).filter(*criteria).update(payload, synchronize_session=False)
            db.commit()
            # Bulk UPDATE returns no rows; re-read with the same criteria
            updated = [self._to_entity(row) for row in db.query(self._model).filter(*criteria).all()]
        logger.info(f"{self.entity_name}: bulk updated {count} rows")
        return BulkUpdateResult(count=count, updated=updated)

    def delete_by_id(self, id: InternalKey) -> bool:
        db = self._session_factory()
        try:
            db_row = db.get(self._model, id)
            if db_row is None:
                return False
            if self._table.soft_delete_field:
                setattr(db_row, self._table.soft_delete_field, False)
            else:
                db.delete(db_row)
            db.commit()
            return True
        except SQLAlchemyError as e:
            db.rollback()
            logger.warning(f"Failed to delete {self.entity_name} {id}: {str(e)}")
            return False
        finally:
            db.close()

    def delete_many(self, filter: Mapping[str, Any]) -> BulkDeleteResult[T]:
        criteria = self._criteria(filter)
        with self._session("bulk delete") as db:
            deleted = [self._to_entity(row) for row in db.query(self._model).filter(*criteria).all()]
            count = db.query(self._model).filter(*criteria).delete(synchronize_session=False)
            db.commit()
        logger.info(f"{self.entity_name}: bulk deleted {count} rows")
        return BulkDeleteResult(count=count, deleted=deleted)

    def count(self, filter: Optional[Mapping[str, Any]] = None) -> int:
        with self._session("count") as db:
            return db.query(self._model).filter(*self._criteria(filter)).count()

    def exists(self, filter: Mapping[str, Any]) -> bool:
        try:
            with self._session("check") as db:
                return db.query(self._model.id).filter(*self._criteria(filter)).first() is not None
        except BackendError as e:
            logger.warning(f"Existence check on {self.entity_name} failed: {e}")
            return False

    def increment(self, id: InternalKey, field: str, amount: int = 1) -> Optional[T]:
        column = self._column(field)
        with self._session("increment") as db:
            matched = db.query(self._model).filter(self._model.id == id).update(
                {column: column + amount}, synchronize_session=False
            )
            db.commit()
            if not matched:
                return None
            return self._to_entity(db.get(self._model, id))

    def max_value(self, field: str, filter: Optional[Mapping[str, Any]] = None) -> Optional[Any]:
        with self._session("aggregate") as db:
            return db.query(func.max(self._column(field))).filter(*self._criteria(filter)).scalar()

    def set_exclusive(self, id: InternalKey, field: str, on_value: Any, off_value: Any) -> T:
        """Single UPDATE: ``field = CASE WHEN id = :target THEN on ELSE off END``."""
        column = self._column(field)
        with self._session("update") as db:
            if db.get(self._model, id) is None:
                raise NotFoundError(f"{self.entity_name} with id {id} not found", details={"id": id})
            db.query(self._model).update(
                {column: case((self._model.id == id, on_value), else_=off_value)},
                synchronize_session=False,
            )
            db.commit()
            db.expire_all()
            return self._to_entity(db.get(self._model, id))
