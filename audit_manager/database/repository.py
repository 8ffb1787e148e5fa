"""
Table access shared by every entity service.

Every page-level operation is one of four shapes against a named relation:
list (with optional filters, embedded relations and ordering), insert,
update by id, delete by id. All of them are single-shot coroutines; a store
failure is raised as DataAccessError carrying the store's message.

Embedded relations use PostgREST syntax, so ``joins=["clients", "tasks"]``
selects ``*, clients(*), tasks(*)``. A missing related row comes back as a
null relation on the composite record, never as an error.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from supabase import Client
from audit_manager.core.errors import DataAccessError

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


def utc_now() -> str:
    """Client-side timestamp for created_at/updated_at/checked_at columns."""
    return datetime.now(timezone.utc).isoformat()


def build_select(columns: str = "*", joins: Optional[Sequence[str]] = None) -> str:
    parts = [columns]
    for relation in joins or ():
        parts.append(relation if "(" in relation else f"{relation}(*)")
    return ", ".join(parts)


def apply_filters(query, filters: Optional[Mapping[str, Any]]):
    """Equality filters; list values become IN, None becomes IS NULL."""
    for column, value in (filters or {}).items():
        if isinstance(value, (list, tuple, set)):
            query = query.in_(column, list(value))
        elif value is None:
            query = query.is_(column, "null")
        else:
            query = query.eq(column, value)
    return query


def error_message(exc: Exception) -> str:
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or exc.__class__.__name__


class TableRepository:
    def __init__(self, supabase: Client, table: str):
        self.supabase = supabase
        self.table = table

    async def _execute(self, operation: str, build: Callable[[], Any]):
        # supabase-py's client is blocking; keep the event loop free
        try:
            return await asyncio.to_thread(build)
        except DataAccessError:
            raise
        except Exception as e:
            logger.error(f"{operation} on {self.table} failed: {e}")
            raise DataAccessError(error_message(e), table=self.table) from e

    async def query(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        joins: Optional[Sequence[str]] = None,
        order: Optional[str] = "created_at",
        desc: bool = True,
        limit: Optional[int] = None,
        offset: int = 0,
        columns: str = "*",
    ) -> List[Row]:
        def build():
            q = self.supabase.table(self.table).select(build_select(columns, joins))
            q = apply_filters(q, filters)
            if order:
                q = q.order(order, desc=desc)
            if limit is not None:
                q = q.limit(limit).offset(offset)
            return q.execute()

        result = await self._execute("select", build)
        return result.data or []

    async def get(self, row_id: str, joins: Optional[Sequence[str]] = None) -> Optional[Row]:
        def build():
            return self.supabase.table(self.table)\
                .select(build_select("*", joins))\
                .eq("id", row_id)\
                .maybe_single()\
                .execute()

        result = await self._execute("select", build)
        # postgrest returns no response object at all when maybe_single matches nothing
        if result is None or not result.data:
            return None
        return result.data

    async def count(self, filters: Optional[Mapping[str, Any]] = None) -> int:
        def build():
            q = self.supabase.table(self.table).select("id", count="exact")
            return apply_filters(q, filters).execute()

        result = await self._execute("count", build)
        if result.count is not None:
            return result.count
        return len(result.data or [])

    async def insert(self, row: Mapping[str, Any]) -> Row:
        def build():
            return self.supabase.table(self.table).insert(dict(row)).execute()

        result = await self._execute("insert", build)
        if not result.data:
            raise DataAccessError(f"Insert into {self.table} returned no row", table=self.table)
        return result.data[0]

    async def update(self, row_id: str, changes: Mapping[str, Any]) -> Optional[Row]:
        """Last write wins; returns None when no row has this id."""
        def build():
            return self.supabase.table(self.table)\
                .update(dict(changes))\
                .eq("id", row_id)\
                .execute()

        result = await self._execute("update", build)
        return result.data[0] if result.data else None

    async def delete(self, row_id: str) -> bool:
        def build():
            return self.supabase.table(self.table)\
                .delete()\
                .eq("id", row_id)\
                .execute()

        result = await self._execute("delete", build)
        return bool(result.data)

    async def upsert(self, rows: Sequence[Mapping[str, Any]], on_conflict: str = "id") -> List[Row]:
        def build():
            return self.supabase.table(self.table)\
                .upsert([dict(r) for r in rows], on_conflict=on_conflict)\
                .execute()

        result = await self._execute("upsert", build)
        return result.data or []
