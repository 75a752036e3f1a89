"""Pipeboard — Key-Value Record Store.

Per-user persistence behind a two-call interface: get(key) and set(key, value).
Values are opaque strings; callers serialize. Every set replaces the whole
value for its key.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.errors import StoreUnavailableError
from app.models.store_models import KeyValueRecord
from app.core.logging import get_logger

logger = get_logger("services.store")


def sales_key(user_id: str) -> str:
    return f"sales:{user_id}"


def targets_key(user_id: str) -> str:
    return f"targets:{user_id}"


def password_key(user_id: str) -> str:
    return f"password:{user_id}"


class RecordStore(ABC):
    """Abstract key-value store."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent.

        Raises StoreUnavailableError when the backend cannot be read.
        """
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> bool:
        """Replace the value for ``key``. Returns False on failure."""
        ...


class InMemoryRecordStore(RecordStore):
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> bool:
        self._data[key] = value
        return True

    def keys(self):
        return list(self._data.keys())


class SQLRecordStore(RecordStore):
    """Store backed by the ``kv_records`` table."""

    def __init__(self, engine):
        self.engine = engine

    def get(self, key: str) -> Optional[str]:
        try:
            with Session(self.engine) as session:
                record = session.get(KeyValueRecord, key)
                return record.value if record else None
        except SQLAlchemyError as e:
            logger.error(f"Store read failed for {key}: {e}")
            raise StoreUnavailableError(key, str(e)) from e

    def set(self, key: str, value: str) -> bool:
        try:
            with Session(self.engine) as session:
                record = session.get(KeyValueRecord, key)
                if record is None:
                    record = KeyValueRecord(key=key, value=value)
                else:
                    record.value = value
                    record.updated_at = datetime.now(timezone.utc)
                session.add(record)
                session.commit()
            return True
        except SQLAlchemyError as e:
            logger.error(f"Store write failed for {key}: {e}")
            return False
