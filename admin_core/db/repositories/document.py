"""
Document-store adapter: the repository contract over a pymongo collection.

Documents keep their own shape (``_id`` ObjectId, ObjectId references), so
each collection is configured with a ``to_entity``/``to_document`` pair. The
default pair from ``document_mapping`` converts identifiers to and from
strings and collapses populated language references to ``{public_id, name}``.
"""
from __future__ import annotations

import logging
import re
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Any, Callable, Generic, Iterator, List, Mapping, Optional, Sequence, Type, TypeVar

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

from admin_core.errors import BackendError, NotFoundError
from admin_core.db.types import InternalKey, new_public_id
from .base import Repository
from .filters import AnyOf, Contains, FilterConverter, IEquals, Not, identity_filter, is_membership
from .mapping import Reference, summarize_reference, writable
from .query import BulkDeleteResult, BulkUpdateResult, QueryOptions

logger = logging.getLogger(__name__)

T = TypeVar("T")

ToEntity = Callable[..., Any]
ToDocument = Callable[[Mapping[str, Any]], dict]


def _now() -> datetime:
    return datetime.now(UTC)


def _object_id(value: Any) -> Any:
    """Return ``value`` as an ObjectId when it is a valid hex key, else unchanged."""
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def document_mapping(entity: Type[T], references: Sequence[Reference] = ()) -> tuple[ToEntity, ToDocument]:
    """Build the default ``(to_entity, to_document)`` pair for ``entity``."""
    reference_fields = [ref.field for ref in references]

    def to_entity(document: Mapping[str, Any], partial: bool = False) -> T:
        data = {k: v for k, v in document.items() if k != "_id"}
        if "_id" in document:
            data["id"] = str(document["_id"])
        for name in reference_fields:
            value = data.get(name)
            if isinstance(value, Mapping):
                # populated: never leak the other collection's internal key
                data[name] = summarize_reference(value) or str(value.get("_id"))
            elif isinstance(value, ObjectId):
                data[name] = str(value)
        if partial:
            return entity.model_construct(**data)
        return entity.model_validate(data)

    def to_document(data: Mapping[str, Any]) -> dict:
        document = dict(data)
        if "id" in document:
            document["_id"] = _object_id(document.pop("id"))
        for name in reference_fields:
            if name in document:
                document[name] = _object_id(document[name])
        return document

    return to_entity, to_document


@dataclass(frozen=True)
class DocumentCollection(Generic[T]):
    name: str
    entity: Type[T]
    fields: frozenset
    to_entity: Optional[ToEntity] = None
    to_document: Optional[ToDocument] = None
    convert_filter: FilterConverter = identity_filter
    references: Sequence[Reference] = ()
    soft_delete_field: Optional[str] = None
    defaults: Mapping[str, Any] = field(default_factory=dict)
    reference_fields: frozenset = field(init=False)

    def __post_init__(self):
        if self.to_entity is None or self.to_document is None:
            to_entity, to_document = document_mapping(self.entity, self.references)
            object.__setattr__(self, "to_entity", self.to_entity or to_entity)
            object.__setattr__(self, "to_document", self.to_document or to_document)
        object.__setattr__(self, "reference_fields", frozenset(ref.field for ref in self.references))


class DocumentRepository(Repository[T]):
    def __init__(self, database: Database, collection: DocumentCollection[T], *, use_transactions: bool = False):
        self._database = database
        self._meta = collection
        self._collection = database[collection.name]
        self._references = {ref.path: ref for ref in collection.references}
        self._use_transactions = use_transactions
        self._exclusive_lock = threading.Lock()

    @property
    def entity_name(self) -> str:
        return self._meta.name

    # -- plumbing ---------------------------------------------------------

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except PyMongoError as e:
            raise BackendError(f"Failed to {action} {self.entity_name}: {str(e)}") from e

    def _coerce(self, name: str, value: Any) -> Any:
        if name == "_id" or name in self._meta.reference_fields:
            return _object_id(value)
        return value

    def _condition(self, name: str, value: Any) -> Any:
        if isinstance(value, Contains):
            return {"$regex": re.escape(value.value), "$options": "i"}
        if isinstance(value, IEquals):
            return {"$regex": f"^{re.escape(value.value)}$", "$options": "i"}
        if isinstance(value, Not):
            return {"$ne": self._coerce(name, value.value)}
        if is_membership(value):
            return {"$in": [self._coerce(name, item) for item in value]}
        return self._coerce(name, value)

    def _translate_raw(self, filter: Mapping[str, Any]) -> dict:
        query: dict = {}
        for key, value in filter.items():
            if isinstance(value, AnyOf):
                query.setdefault("$and", []).append(
                    {"$or": [self._translate_raw(sub) for sub in value.filters]}
                )
                continue
            name = "_id" if key == "id" else key
            query[name] = self._condition(name, value)
        return query

    def _translate(self, filter: Optional[Mapping[str, Any]]) -> dict:
        return self._translate_raw(self._meta.convert_filter(filter or {}))

    def _find(self, query: dict, options: Optional[QueryOptions]) -> List[dict]:
        projection = None
        if options is not None and options.select:
            projection = {("_id" if name == "id" else name): 1 for name in options.select}
        cursor = self._collection.find(query, projection)
        if options is not None:
            if options.sort:
                cursor = cursor.sort([
                    ("_id" if name == "id" else name, ASCENDING if direction == 1 else DESCENDING)
                    for name, direction in options.sort.items()
                ])
            if options.skip:
                cursor = cursor.skip(options.skip)
            if options.limit:
                cursor = cursor.limit(options.limit)
        documents = list(cursor)
        if options is not None and options.populate:
            self._populate(documents, options.populate)
        return documents

    def _populate(self, documents: List[dict], paths: Sequence[str]) -> None:
        for path in paths:
            reference = self._references.get(path)
            if reference is None:
                raise ValueError(f"Unknown populate path for {self.entity_name}: {path}")
            keys = {doc.get(reference.field) for doc in documents if isinstance(doc.get(reference.field), ObjectId)}
            if not keys:
                continue
            related = {
                doc["_id"]: doc
                for doc in self._database[reference.target].find({"_id": {"$in": list(keys)}}, {"public_id": 1, "name": 1})
            }
            for doc in documents:
                key = doc.get(reference.field)
                if key in related:
                    doc[reference.field] = related[key]

    def _to_entity(self, document: dict, options: Optional[QueryOptions] = None) -> T:
        partial = bool(options is not None and options.select)
        return self._meta.to_entity(document, partial=partial)

    def _writable(self, data: Mapping[str, Any]) -> dict:
        return self._meta.to_document(writable(data, self._meta.fields, self.entity_name))

    # -- contract ---------------------------------------------------------

    def get_all(self, filter: Optional[Mapping[str, Any]] = None, options: Optional[QueryOptions] = None) -> List[T]:
        with self._guard("read"):
            documents = self._find(self._translate(filter), options)
        logger.debug(f"{self.entity_name}: fetched {len(documents)} documents")
        return [self._to_entity(doc, options) for doc in documents]

    def get_detail_by_id(self, id: InternalKey, options: Optional[QueryOptions] = None) -> Optional[T]:
        return self.get_detail({"id": id}, options)

    def get_detail(self, filter: Mapping[str, Any], options: Optional[QueryOptions] = None) -> Optional[T]:
        single = (options or QueryOptions()).model_copy(update={"limit": 1})
        with self._guard("read"):
            documents = self._find(self._translate(filter), single)
        return self._to_entity(documents[0], options) if documents else None

    def insert(self, data: Mapping[str, Any]) -> T:
        # store defaulted fields so filters see them like relational column defaults
        document = self._writable({**self._meta.defaults, **data})
        now = _now()
        document.update({"public_id": new_public_id(), "created_at": now, "updated_at": now})
        with self._guard("insert into"):
            result = self._collection.insert_one(document)
        document["_id"] = result.inserted_id
        return self._to_entity(document)

    def update_by_id(self, id: InternalKey, data: Mapping[str, Any]) -> T:
        changes = self._writable(data)
        changes["updated_at"] = _now()
        with self._guard("update"):
            document = self._collection.find_one_and_update(
                {"_id": _object_id(id)}, {"$set": changes}, return_document=ReturnDocument.AFTER
            )
        if document is None:
            raise NotFoundError(f"Document with id {id} not found in {self.entity_name}", details={"id": id})
        return self._to_entity(document)

    def update_many(self, filter: Mapping[str, Any], data: Mapping[str, Any]) -> BulkUpdateResult[T]:
        changes = self._writable(data)
        changes["updated_at"] = _now()
        query = self._translate(filter)
        with self._guard("bulk update"):
            result = self._collection.update_many(query, {"$set": changes})
            updated = self._find(query, None)
        logger.info(f"{self.entity_name}: bulk updated {result.matched_count} documents")
        return BulkUpdateResult(count=result.matched_count, updated=[self._to_entity(doc) for doc in updated])

    def delete_by_id(self, id: InternalKey) -> bool:
        key = _object_id(id)
        if not isinstance(key, ObjectId):
            return False
        try:
            if self._meta.soft_delete_field:
                result = self._collection.update_one(
                    {"_id": key}, {"$set": {self._meta.soft_delete_field: False, "updated_at": _now()}}
                )
                return result.matched_count > 0
            return self._collection.delete_one({"_id": key}).deleted_count > 0
        except PyMongoError as e:
            logger.warning(f"Failed to delete {self.entity_name} {id}: {str(e)}")
            return False

    def delete_many(self, filter: Mapping[str, Any]) -> BulkDeleteResult[T]:
        query = self._translate(filter)
        with self._guard("bulk delete"):
            snapshot = self._find(query, None)
            result = self._collection.delete_many(query)
        logger.info(f"{self.entity_name}: bulk deleted {result.deleted_count} documents")
        return BulkDeleteResult(count=result.deleted_count, deleted=[self._to_entity(doc) for doc in snapshot])

    def count(self, filter: Optional[Mapping[str, Any]] = None) -> int:
        with self._guard("count"):
            return self._collection.count_documents(self._translate(filter))

    def exists(self, filter: Mapping[str, Any]) -> bool:
        try:
            return self._collection.find_one(self._translate(filter), {"_id": 1}) is not None
        except PyMongoError as e:
            logger.warning(f"Existence check on {self.entity_name} failed: {e}")
            return False

    def increment(self, id: InternalKey, field: str, amount: int = 1) -> Optional[T]:
        with self._guard("increment"):
            document = self._collection.find_one_and_update(
                {"_id": _object_id(id)},
                {"$inc": {field: amount}, "$set": {"updated_at": _now()}},
                return_document=ReturnDocument.AFTER,
            )
        return self._to_entity(document) if document is not None else None

    def max_value(self, field: str, filter: Optional[Mapping[str, Any]] = None) -> Optional[Any]:
        query = self._translate(filter)
        query.setdefault(field, {"$ne": None})
        with self._guard("aggregate"):
            cursor = self._collection.find(query, {field: 1}).sort(field, DESCENDING).limit(1)
            documents = list(cursor)
        return documents[0].get(field) if documents else None

    def set_exclusive(self, id: InternalKey, field: str, on_value: Any, off_value: Any) -> T:
        """One pipeline update flips ``field`` on every document in a single command.

        The command is atomic per document only, so promotions from this process
        are serialized; across processes enable ``use_transactions``.
        """
        key = _object_id(id)
        pipeline = [{"$set": {
            field: {"$cond": [{"$eq": ["$_id", key]}, on_value, off_value]},
            "updated_at": _now(),
        }}]
        with self._guard("update"):
            if self._collection.find_one({"_id": key}, {"_id": 1}) is None:
                raise NotFoundError(f"Document with id {id} not found in {self.entity_name}", details={"id": id})
            with self._exclusive_lock:
                if self._use_transactions:
                    client = self._database.client
                    with client.start_session() as session:
                        with session.start_transaction():
                            self._collection.update_many({}, pipeline, session=session)
                else:
                    self._collection.update_many({}, pipeline)
            document = self._collection.find_one({"_id": key})
        return self._to_entity(document)
