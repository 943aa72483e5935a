"""
Document store abstraction: Firestore, SQL (Postgres) and an in-memory
implementation for development and tests.

Every store addresses documents by (collection, doc_id) and reports failures
using the exceptions in `aster_backend.errors`, so callers never see a
vendor-specific error type.
"""

from __future__ import annotations

import time
import uuid
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Protocol

import firebase_admin
from firebase_admin import firestore
from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as google_auth_exceptions
from sqlalchemy import (
    JSON,
    Column,
    Float,
    Integer,
    String,
    UniqueConstraint,
    create_engine,
    select,
)
from sqlalchemy import exc as sa_exc
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from aster_backend.errors import (
    StoreError,
    StoreNotFound,
    StorePermissionDenied,
    StoreUnavailable,
)
from aster_shared.json_utils import to_plain_json


class DocumentStore(Protocol):
    """The six operations the content repository needs from a store."""

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        ...

    def list(self, collection: str) -> list[dict]:
        ...

    def set(self, collection: str, doc_id: str, data: dict) -> None:
        ...

    def update(self, collection: str, doc_id: str, delta: dict) -> None:
        ...

    def delete(self, collection: str, doc_id: str) -> None:
        ...

    def add(self, collection: str, data: dict) -> str:
        ...


class InMemoryDocumentStore:
    """Dict-backed store for development and tests.

    `fail(operation, error)` makes every later call of that operation raise
    `error` until `reset()` or `fail(operation, None)`.
    """

    OPERATIONS = ("get", "list", "set", "update", "delete", "add")

    def __init__(self):
        self.collections: Dict[str, Dict[str, dict]] = {}
        self.failures: Dict[str, Exception] = {}
        self.calls: list[tuple[str, str]] = []

    def reset(self) -> None:
        """Clear all stored data and injected failures."""
        self.collections.clear()
        self.failures.clear()
        self.calls.clear()

    def fail(self, operation: str, error: Optional[Exception]) -> None:
        if operation not in self.OPERATIONS:
            raise ValueError(f"Unknown store operation: {operation}")
        if error is None:
            self.failures.pop(operation, None)
        else:
            self.failures[operation] = error

    def _enter(self, operation: str, collection: str) -> None:
        self.calls.append((operation, collection))
        error = self.failures.get(operation)
        if error is not None:
            raise error

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        self._enter("get", collection)
        doc = self.collections.get(collection, {}).get(doc_id)
        return to_plain_json(doc) if doc is not None else None

    def list(self, collection: str) -> list[dict]:
        self._enter("list", collection)
        return [
            {**to_plain_json(doc), "id": doc_id}
            for doc_id, doc in self.collections.get(collection, {}).items()
        ]

    def set(self, collection: str, doc_id: str, data: dict) -> None:
        self._enter("set", collection)
        self.collections.setdefault(collection, {})[doc_id] = to_plain_json(data)

    def update(self, collection: str, doc_id: str, delta: dict) -> None:
        self._enter("update", collection)
        docs = self.collections.get(collection, {})
        if doc_id not in docs:
            raise StoreNotFound(f"{collection}/{doc_id}")
        docs[doc_id] = {**docs[doc_id], **to_plain_json(delta)}

    def delete(self, collection: str, doc_id: str) -> None:
        self._enter("delete", collection)
        self.collections.get(collection, {}).pop(doc_id, None)

    def add(self, collection: str, data: dict) -> str:
        self._enter("add", collection)
        doc_id = uuid.uuid4().hex
        self.collections.setdefault(collection, {})[doc_id] = to_plain_json(data)
        return doc_id


@contextmanager
def _translate_google_errors() -> Iterator[None]:
    try:
        yield
    except google_exceptions.NotFound as e:
        raise StoreNotFound(str(e)) from e
    except (
        google_exceptions.PermissionDenied,
        google_exceptions.Forbidden,
        google_exceptions.Unauthenticated,
        google_auth_exceptions.RefreshError,
        google_auth_exceptions.DefaultCredentialsError,
    ) as e:
        raise StorePermissionDenied(str(e)) from e
    except (
        google_exceptions.ServiceUnavailable,
        google_exceptions.DeadlineExceeded,
        google_exceptions.GatewayTimeout,
        google_exceptions.RetryError,
        google_auth_exceptions.TransportError,
        TimeoutError,
        ConnectionError,
    ) as e:
        raise StoreUnavailable(str(e)) from e
    except google_exceptions.GoogleAPIError as e:
        raise StoreError(str(e)) from e


class FirestoreDocumentStore:
    """
    Firestore-backed store. Every call carries an explicit timeout; an expired
    deadline surfaces as StoreUnavailable.
    """

    def __init__(
        self,
        client=None,
        *,
        project_id: Optional[str] = None,
        timeout: float = 5.0,
    ):
        if client is None:
            try:
                firebase_admin.get_app()
            except ValueError:
                options = {"projectId": project_id} if project_id else None
                firebase_admin.initialize_app(options=options)
            client = firestore.client()
        self._client = client
        self.timeout = timeout

    def _doc_ref(self, collection: str, doc_id: str):
        return self._client.collection(collection).document(doc_id)

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        with _translate_google_errors():
            snapshot = self._doc_ref(collection, doc_id).get(timeout=self.timeout)
            if not snapshot.exists:
                return None
            return snapshot.to_dict()

    def list(self, collection: str) -> list[dict]:
        with _translate_google_errors():
            return [
                {**snapshot.to_dict(), "id": snapshot.id}
                for snapshot in self._client.collection(collection).stream(
                    timeout=self.timeout
                )
            ]

    def set(self, collection: str, doc_id: str, data: dict) -> None:
        with _translate_google_errors():
            self._doc_ref(collection, doc_id).set(data, timeout=self.timeout)

    def update(self, collection: str, doc_id: str, delta: dict) -> None:
        with _translate_google_errors():
            self._doc_ref(collection, doc_id).update(delta, timeout=self.timeout)

    def delete(self, collection: str, doc_id: str) -> None:
        with _translate_google_errors():
            self._doc_ref(collection, doc_id).delete(timeout=self.timeout)

    def add(self, collection: str, data: dict) -> str:
        with _translate_google_errors():
            _, doc_ref = self._client.collection(collection).add(
                data, timeout=self.timeout
            )
            return doc_ref.id


# Postgres SQLSTATE for insufficient_privilege.
_PG_INSUFFICIENT_PRIVILEGE = "42501"


@contextmanager
def _translate_sql_errors() -> Iterator[None]:
    try:
        yield
    except (sa_exc.TimeoutError, sa_exc.OperationalError, sa_exc.InterfaceError) as e:
        raise StoreUnavailable(str(e)) from e
    except sa_exc.DBAPIError as e:
        if getattr(e.orig, "pgcode", None) == _PG_INSUFFICIENT_PRIVILEGE:
            raise StorePermissionDenied(str(e)) from e
        raise StoreError(str(e)) from e
    except sa_exc.SQLAlchemyError as e:
        raise StoreError(str(e)) from e


class SqlDocumentStore:
    """
    SQLAlchemy-backed store keeping each document as a JSON column. Accepts any
    SQLAlchemy URL (Postgres in production, SQLite for tests).
    """

    def __init__(self, database_url: str, *, timeout: float = 5.0):
        if not database_url:
            raise ValueError("A database URL is required for SqlDocumentStore")
        self.timeout = timeout
        self.engine = create_engine(
            database_url, future=True, **self._engine_options(database_url, timeout)
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    @staticmethod
    def _engine_options(database_url: str, timeout: float) -> dict:
        options: dict = {"pool_pre_ping": True, "pool_recycle": 1800}
        backend = make_url(database_url).get_backend_name()
        if backend == "sqlite":
            return options
        options["pool_timeout"] = timeout
        if backend == "postgresql":
            options["connect_args"] = {
                "connect_timeout": max(1, int(timeout)),
                "options": f"-c statement_timeout={int(timeout * 1000)}",
            }
        return options

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        with _translate_sql_errors(), self.Session() as session:
            row = _find_row(session, collection, doc_id)
            return dict(row.data) if row else None

    def list(self, collection: str) -> list[dict]:
        with _translate_sql_errors(), self.Session() as session:
            stmt = (
                select(DocumentRow)
                .where(DocumentRow.collection == collection)
                .order_by(DocumentRow.seq.asc())
            )
            rows = session.execute(stmt).scalars().all()
            return [{**row.data, "id": row.doc_id} for row in rows]

    def set(self, collection: str, doc_id: str, data: dict) -> None:
        now = time.time()
        payload = to_plain_json(data)
        with _translate_sql_errors(), self.Session() as session:
            row = _find_row(session, collection, doc_id)
            if row:
                row.data = payload
                row.updated_at = now
            else:
                session.add(
                    DocumentRow(
                        collection=collection,
                        doc_id=doc_id,
                        data=payload,
                        created_at=now,
                        updated_at=now,
                    )
                )
            session.commit()

    def update(self, collection: str, doc_id: str, delta: dict) -> None:
        with _translate_sql_errors(), self.Session() as session:
            row = _find_row(session, collection, doc_id)
            if not row:
                raise StoreNotFound(f"{collection}/{doc_id}")
            # Reassign so the JSON column is flagged dirty.
            row.data = {**row.data, **to_plain_json(delta)}
            row.updated_at = time.time()
            session.commit()

    def delete(self, collection: str, doc_id: str) -> None:
        with _translate_sql_errors(), self.Session() as session:
            row = _find_row(session, collection, doc_id)
            if row:
                session.delete(row)
                session.commit()

    def add(self, collection: str, data: dict) -> str:
        doc_id = uuid.uuid4().hex
        self.set(collection, doc_id, data)
        return doc_id


Base = declarative_base()


class DocumentRow(Base):
    __tablename__ = "documents"
    __table_args__ = (UniqueConstraint("collection", "doc_id"),)

    # Insertion order; list() returns documents in this order.
    seq = Column(Integer, primary_key=True, autoincrement=True)
    collection = Column(String, nullable=False)
    doc_id = Column(String, nullable=False)
    data = Column(JSON, nullable=False)
    created_at = Column(Float, nullable=False)
    updated_at = Column(Float, nullable=False)


def _find_row(session: Session, collection: str, doc_id: str) -> Optional[DocumentRow]:
    stmt = select(DocumentRow).where(
        DocumentRow.collection == collection, DocumentRow.doc_id == doc_id
    )
    return session.execute(stmt).scalar_one_or_none()
