"""Shared API dependencies."""
from functools import lru_cache
from typing import Optional

from guestlist.core.config import settings
from guestlist.core.locks import KeyedLock, checkin_locks
from guestlist.sheets import GoogleSheetsStore, TableStore


@lru_cache(maxsize=1)
def _sheets_store() -> GoogleSheetsStore:
    return GoogleSheetsStore.from_settings(settings)


def get_store() -> TableStore:
    """Dependency for FastAPI to get the guest table store."""
    return _sheets_store()


def get_checkin_locks() -> Optional[KeyedLock]:
    """Per-identifier locks, or None when check-ins are not serialized."""
    if settings.SERIALIZE_CHECKINS:
        return checkin_locks
    return None


__all__ = ["get_store", "get_checkin_locks"]
