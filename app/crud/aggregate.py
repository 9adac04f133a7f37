# app/crud/aggregate.py
"""
All-or-nothing writes of a parent row plus its child collections.

Each aggregate kind is described once by an ``AggregateDefinition`` (parent
model, child collections in write order, status set). ``AggregateWriter``
turns a definition into create/update/delete operations that run inside a
single transaction opened on the injected ``PersistenceGateway``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple, Type

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.constants.catalog import EntityKind
from app.db.base_class import Base
from app.db.gateway import PersistenceGateway, TransactionHandle
from app.models.mixins import utcnow
from app.schemas.base import ChildItem
from app.schemas.result import NotFound, PersistenceFailure, Success, ValidationFailure
from app.utils.validators import NormalizedPayload, validate

logger = logging.getLogger(__name__)


def column_names(model: Type[Base]) -> set:
    return {c.name for c in model.__table__.columns}


def row_to_dict(obj: Any) -> dict:
    return {c.name: getattr(obj, c.name) for c in obj.__table__.columns}


@dataclass(frozen=True)
class Reference:
    """A parent field that must point at a live row of another aggregate."""

    field: str
    model: Type[Base]
    message: str


@dataclass(frozen=True)
class ChildCollection:
    name: str
    model: Type[Base]
    # Foreign key column on ``model`` pointing at the owning row.
    parent_key: str
    order_by: str = "id"
    descending: bool = False
    # Nested collections written under each row of this one.
    children: Tuple["ChildCollection", ...] = ()
    # For nested collections: pulls the nested items out of the owning item.
    items: Optional[Callable[[ChildItem], list]] = None
    # For nested collections: extra foreign key to the aggregate root.
    root_key: Optional[str] = None
    # Overrides the default item -> column values mapping.
    build: Optional[Callable[[Any, int], dict]] = None
    # Shapes one projected row (e.g. a language row becomes a bare string).
    project: Optional[Callable[[dict], Any]] = None
    # Read-only collections appear in the detail view but are managed elsewhere.
    writable: bool = True

    def values(self, item: Any, position: int) -> dict:
        if self.build is not None:
            return self.build(item, position)

        columns = column_names(self.model)
        nested = {child.name for child in self.children}
        data = {
            key: value
            for key, value in item.model_dump().items()
            if key in columns and key not in nested and key != "id"
        }
        if "order_index" in columns and data.get("order_index") is None:
            data["order_index"] = position
        return data


@dataclass(frozen=True)
class AggregateDefinition:
    kind: EntityKind
    model: Type[Base]
    collections: Tuple[ChildCollection, ...]
    status_set: Any
    references: Tuple[Reference, ...] = ()

    @property
    def label(self) -> str:
        return self.kind.value.capitalize()

    def collection(self, name: str) -> ChildCollection:
        for collection in self.collections:
            if collection.name == name:
                return collection
        raise KeyError(name)


class AggregateWriter:
    def __init__(self, definition: AggregateDefinition):
        """
        Write operations for one aggregate kind.

        **Parameters**

        * `definition`: The parent model and child collections, in write order
        """
        self.definition = definition
        self.model = definition.model

    # --- Reads used by the write paths ---

    def get(self, db: Session, id: int) -> Optional[Any]:
        """Live (not soft-deleted) parent row, or None."""
        return (
            db.query(self.model)
            .filter(self.model.id == id, self.model.deleted_at.is_(None))
            .first()
        )

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Any]:
        return (
            db.query(self.model)
            .filter(self.model.deleted_at.is_(None))
            .order_by(self.model.id)
            .offset(skip)
            .limit(limit)
            .all()
        )

    # --- Writes ---

    def create(
        self,
        gateway: PersistenceGateway,
        payload: Any,
        created_by: Optional[str] = None,
    ):
        outcome = validate(payload, self.definition.kind)
        if not outcome.ok:
            return ValidationFailure(reasons=outcome.reasons)
        normalized = outcome.payload

        try:
            with gateway.begin_transaction() as tx:
                broken = self._broken_references(tx.session, normalized.fields)
                if broken:
                    return ValidationFailure(reasons=broken)

                values = dict(normalized.fields)
                if "created_by" in column_names(self.model):
                    values["created_by"] = created_by
                db_obj = tx.add(self.model(**values))
                tx.flush()

                for collection in self._writable():
                    items = normalized.collections.get(collection.name)
                    if items:
                        self._insert(tx, collection, items, db_obj.id, db_obj.id)

                tx.commit()
                new_id = db_obj.id
        except SQLAlchemyError as e:
            return self._persistence_failure("create", e)

        logger.info(f"{self.definition.label} {new_id} created")
        return Success(id=new_id)

    def update(self, gateway: PersistenceGateway, id: int, payload: Any):
        """
        Full-field update of the parent plus clear-and-reinsert of every
        child collection present in ``payload``. Collections the payload
        omits keep their rows.
        """
        try:
            with gateway.begin_transaction() as tx:
                db_obj = self.get(tx.session, id)
                if db_obj is None:
                    return NotFound()

                outcome = validate(payload, self.definition.kind, current=row_to_dict(db_obj))
                if not outcome.ok:
                    return ValidationFailure(reasons=outcome.reasons)
                broken = self._broken_references(tx.session, outcome.payload.fields)
                if broken:
                    return ValidationFailure(reasons=broken)

                self._apply_fields(db_obj, outcome.payload)
                tx.flush()

                for collection in self._writable():
                    items = outcome.payload.collections.get(collection.name)
                    if items is None:
                        continue
                    self._clear(tx, collection, id)
                    if items:
                        self._insert(tx, collection, items, id, id)

                tx.commit()
        except SQLAlchemyError as e:
            return self._persistence_failure("update", e, id=id)

        logger.info(f"{self.definition.label} {id} updated")
        return Success(id=id)

    def delete(self, gateway: PersistenceGateway, id: int):
        """Soft delete: stamps ``deleted_at`` on the parent row only."""
        try:
            with gateway.begin_transaction() as tx:
                db_obj = self.get(tx.session, id)
                if db_obj is None:
                    return NotFound()
                now = utcnow()
                db_obj.deleted_at = now
                db_obj.updated_at = now
                tx.commit()
        except SQLAlchemyError as e:
            return self._persistence_failure("delete", e, id=id)

        logger.info(f"{self.definition.label} {id} soft-deleted")
        return Success(id=id)

    # --- Helpers ---

    def _writable(self) -> List[ChildCollection]:
        return [c for c in self.definition.collections if c.writable]

    def _broken_references(self, db: Session, fields: dict) -> List[str]:
        reasons = []
        for reference in self.definition.references:
            target_id = fields.get(reference.field)
            if target_id is None:
                continue
            target = reference.model
            live = (
                db.query(target.id)
                .filter(target.id == target_id, target.deleted_at.is_(None))
                .first()
            )
            if live is None:
                reasons.append(reference.message)
        return reasons

    def _apply_fields(self, db_obj: Any, payload: NormalizedPayload) -> None:
        for name, value in payload.fields.items():
            setattr(db_obj, name, value)
        db_obj.updated_at = utcnow()

    def _insert(
        self,
        tx: TransactionHandle,
        collection: ChildCollection,
        items: list,
        parent_id: int,
        root_id: int,
    ) -> None:
        rows: List[Tuple[Any, Any]] = []
        for position, item in enumerate(items):
            values = collection.values(item, position)
            values[collection.parent_key] = parent_id
            if collection.root_key:
                values[collection.root_key] = root_id
            rows.append((item, tx.add(collection.model(**values))))
        tx.flush()

        for child in collection.children:
            for item, row in rows:
                nested = child.items(item) if child.items else []
                if nested:
                    self._insert(tx, child, nested, row.id, root_id)

    def _clear(self, tx: TransactionHandle, collection: ChildCollection, parent_id: int) -> None:
        owner_key = getattr(collection.model, collection.parent_key)
        for child in collection.children:
            self._clear_nested(tx, child, collection, owner_key == parent_id)
        tx.execute(
            delete(collection.model)
            .where(owner_key == parent_id)
            .execution_options(synchronize_session=False)
        )

    def _clear_nested(
        self,
        tx: TransactionHandle,
        child: ChildCollection,
        owner: ChildCollection,
        owner_filter: Any,
    ) -> None:
        owner_ids = select(owner.model.id).where(owner_filter)
        child_key = getattr(child.model, child.parent_key)
        for grandchild in child.children:
            self._clear_nested(tx, grandchild, child, child_key.in_(owner_ids))
        tx.execute(
            delete(child.model)
            .where(child_key.in_(owner_ids))
            .execution_options(synchronize_session=False)
        )

    def _persistence_failure(self, operation: str, error: SQLAlchemyError, id: Any = None):
        logger.error(
            f"Failed to {operation} {self.definition.kind.value} {id or ''}: {str(error)}",
            exc_info=True,
            extra={"entity_kind": self.definition.kind.value, "entity_id": id},
        )
        return PersistenceFailure(
            message=f"Could not {operation} {self.definition.kind.value}; no changes were saved",
            detail=str(error),
        )
