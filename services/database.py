"""Database model and key-value persistence helpers for the studio tools."""
from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    String,
    Text,
    UniqueConstraint,
    create_engine,
    delete,
    select,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from config import settings

logger = logging.getLogger(__name__)

_SQLITE_PREFIX = "sqlite:///"
Base = declarative_base()


class StoredValue(Base):
    __tablename__ = "stored_values"

    id: int = Column(Integer, primary_key=True)
    namespace: str = Column(String(255), nullable=False, index=True)
    key: str = Column(String(255), nullable=False)
    value_json: str = Column(Text, nullable=False)
    updated_at: datetime = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (UniqueConstraint("namespace", "key", name="uq_stored_value_key"),)


def create_db_engine(url: str) -> Engine:
    connect_args = {"check_same_thread": False} if url.startswith(_SQLITE_PREFIX) else {}
    return create_engine(url, echo=False, future=True, connect_args=connect_args)


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Engine bound to ``settings.DATABASE_URL``, created once per process."""

    return create_db_engine(settings.DATABASE_URL)


def init_db(engine: Optional[Engine] = None) -> None:
    """Create all tables if they don't exist."""

    Base.metadata.create_all(bind=engine or get_engine())


@contextmanager
def get_session(engine: Optional[Engine] = None) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""

    factory = sessionmaker(bind=engine or get_engine(), autocommit=False, autoflush=False, future=True)
    session: Session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Type {type(value)!r} is not JSON serialisable")


def dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=_json_default)


class KeyValueStore:
    """String key to JSON value storage, one row per ``(namespace, key)``."""

    def __init__(self, engine: Optional[Engine] = None, *, namespace: str = "default") -> None:
        self.engine = engine or get_engine()
        self.namespace = namespace
        init_db(self.engine)

    @classmethod
    def from_url(cls, url: str, *, namespace: str = "default") -> "KeyValueStore":
        return cls(create_db_engine(url), namespace=namespace)

    def _find(self, session: Session, key: str) -> Optional[StoredValue]:
        stmt = select(StoredValue).where(StoredValue.namespace == self.namespace, StoredValue.key == key)
        return session.execute(stmt).scalar_one_or_none()

    def get(self, key: str, default: Any = None) -> Any:
        with get_session(self.engine) as session:
            record = self._find(session, key)
            if record is None:
                return default
            return json.loads(record.value_json)

    def set(self, key: str, value: Any) -> None:
        payload = dumps(value)
        with get_session(self.engine) as session:
            record = self._find(session, key)
            if record is None:
                session.add(StoredValue(namespace=self.namespace, key=key, value_json=payload))
            else:
                record.value_json = payload
                record.updated_at = datetime.utcnow()
        logger.info("Stored %s for namespace %s", key, self.namespace)

    def delete(self, key: str) -> bool:
        with get_session(self.engine) as session:
            record = self._find(session, key)
            if record is None:
                return False
            session.delete(record)
        logger.info("Deleted %s for namespace %s", key, self.namespace)
        return True

    def keys(self) -> List[str]:
        with get_session(self.engine) as session:
            stmt = (
                select(StoredValue.key)
                .where(StoredValue.namespace == self.namespace)
                .order_by(StoredValue.key.asc())
            )
            return list(session.execute(stmt).scalars())

    def clear(self) -> int:
        """Remove every value of the namespace and return how many were deleted."""

        with get_session(self.engine) as session:
            result = session.execute(delete(StoredValue).where(StoredValue.namespace == self.namespace))
            removed = int(result.rowcount or 0)
        logger.info("Cleared %d values for namespace %s", removed, self.namespace)
        return removed

    def backup_blob(self) -> Dict[str, Any]:
        """Return a serialisable backup of all values of the namespace."""

        with get_session(self.engine) as session:
            stmt = (
                select(StoredValue)
                .where(StoredValue.namespace == self.namespace)
                .order_by(StoredValue.key.asc())
            )
            values = {
                record.key: {
                    "updated_at": record.updated_at.isoformat(),
                    "value": json.loads(record.value_json),
                }
                for record in session.execute(stmt).scalars()
            }
        return {
            "generated_at": datetime.utcnow().isoformat(),
            "namespace": self.namespace,
            "values": values,
        }


__all__ = [
    "Base",
    "KeyValueStore",
    "StoredValue",
    "create_db_engine",
    "dumps",
    "get_engine",
    "get_session",
    "init_db",
]
