# backend/dashboard/tables.py
"""
Thin data-access layer over the Supabase (PostgREST) table API.

Every call either returns its payload or raises ``DataServiceError`` with a
human-readable message. PostgREST reports "zero rows for .single()" with the
code ``PGRST116``; that case is raised as ``RowNotFoundError`` so callers can
tell an empty singleton apart from a failed query.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx
from postgrest.exceptions import APIError

logger = logging.getLogger(__name__)

NO_ROWS_CODE = "PGRST116"

POSTS = "posts"
PAGES = "pages"
MEDIA = "media"
SETTINGS = "settings"


class DataServiceError(Exception):
    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class RowNotFoundError(DataServiceError):
    pass


def _error_from_api(exc: APIError) -> DataServiceError:
    message = getattr(exc, "message", None) or str(exc)
    code = getattr(exc, "code", None)
    if code == NO_ROWS_CODE:
        return RowNotFoundError(message, code)
    return DataServiceError(message, code)


class Collection:
    """One named table of the remote data service."""

    def __init__(self, client, name: str):
        self.client = client
        self.name = name

    def _table(self):
        return self.client.table(self.name)

    def _execute(self, query, action: str):
        try:
            return query.execute()
        except APIError as e:
            err = _error_from_api(e)
            logger.debug("%s %s failed: code=%s message=%s", action, self.name, err.code, err.message)
            raise err from e
        except httpx.HTTPError as e:
            logger.debug("%s %s transport error: %s", action, self.name, e)
            raise DataServiceError(f"Request to '{self.name}' failed: {e}") from e

    def count(self) -> int:
        resp = self._execute(self._table().select("*", count="exact", head=True), "count")
        return resp.count or 0

    def list_recent(self, limit: int, order_by: str = "created_at") -> List[Dict[str, Any]]:
        query = self._table().select("*").order(order_by, desc=True).limit(limit)
        resp = self._execute(query, "list")
        return list(resp.data or [])

    def get(self, ident) -> Dict[str, Any]:
        resp = self._execute(self._table().select("*").eq("id", ident).single(), "get")
        if not resp.data:
            raise RowNotFoundError(f"No row in '{self.name}' with id {ident}", NO_ROWS_CODE)
        return resp.data

    def get_single(self) -> Dict[str, Any]:
        resp = self._execute(self._table().select("*").single(), "get_single")
        if not resp.data:
            raise RowNotFoundError(f"No row in '{self.name}'", NO_ROWS_CODE)
        return resp.data

    def update(self, ident, record: Dict[str, Any]) -> List[Dict[str, Any]]:
        resp = self._execute(self._table().update(record).eq("id", ident), "update")
        return list(resp.data or [])

    def insert(self, record: Dict[str, Any]) -> List[Dict[str, Any]]:
        resp = self._execute(self._table().insert([record]), "insert")
        return list(resp.data or [])


class DataService:
    """Hands out collections of a single Supabase client by name."""

    def __init__(self, client):
        self.client = client
        self._collections = {}

    def collection(self, name: str) -> Collection:
        if name not in self._collections:
            self._collections[name] = Collection(self.client, name)
        return self._collections[name]

    @property
    def posts(self) -> Collection:
        return self.collection(POSTS)

    @property
    def pages(self) -> Collection:
        return self.collection(PAGES)

    @property
    def media(self) -> Collection:
        return self.collection(MEDIA)

    @property
    def settings(self) -> Collection:
        return self.collection(SETTINGS)


def get_data_service(request=None) -> DataService:
    """Build a DataService for the current request (forwards its Supabase token)."""
    from core.supabase_client import get_supabase

    token = getattr(request, "supabase_token", None) if request is not None else None
    return DataService(get_supabase(access_token=token))
