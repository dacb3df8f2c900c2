from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict

import httpx
import psycopg2
from psycopg2 import sql
from starlette.concurrency import run_in_threadpool

from hosting_functions.config import Settings
from hosting_functions.db.client import get_conn
from hosting_functions.domain.errors import OrderConflictError, OrderStoreError
from hosting_functions.domain.statuses import OrderPaymentUpdate


class OrderStore(ABC):
    """Persistence for the order rows reconciled by the webhook."""

    @abstractmethod
    async def apply_payment_update(self, payment_id: str, update: OrderPaymentUpdate) -> int:
        """Write ``update`` to the order carrying ``payment_id``.

        Returns the number of rows updated (0 or 1). Raises
        OrderConflictError without writing anything when more than one order
        carries the payment id.
        """


class InMemoryOrderStore(OrderStore):
    """Dict-backed order store keyed by order id."""

    def __init__(self) -> None:
        self.rows: Dict[int, Dict[str, Any]] = {}

    def add(self, order_id: int, payment_id: str | None, **fields: Any) -> Dict[str, Any]:
        row = {"id": order_id, "payment_id": payment_id, **fields}
        self.rows[order_id] = row
        return row

    async def apply_payment_update(self, payment_id: str, update: OrderPaymentUpdate) -> int:
        matches = [row for row in self.rows.values() if row.get("payment_id") == payment_id]
        if len(matches) > 1:
            raise OrderConflictError(payment_id, len(matches))
        for row in matches:
            row.update(update.as_row())
        return len(matches)


class SupabaseOrderStore(OrderStore):
    """Order store on top of the Supabase PostgREST API (service-role key)."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.table_url = f"{settings.supabase_url.rstrip('/')}/rest/v1/{settings.orders_table}"
        self.headers = {
            "apikey": settings.supabase_service_role_key,
            "Authorization": f"Bearer {settings.supabase_service_role_key}",
            "Content-Type": "application/json",
        }
        self.configured = settings.supabase_enabled
        self.transport = transport

    async def apply_payment_update(self, payment_id: str, update: OrderPaymentUpdate) -> int:
        if not self.configured:
            raise OrderStoreError("Supabase credentials not configured")
        params = {"payment_id": f"eq.{payment_id}"}
        async with httpx.AsyncClient(transport=self.transport) as client:
            found = await client.get(self.table_url, headers=self.headers, params={**params, "select": "id"})
            self._raise_for_error(found, "lookup")
            matches = found.json()
            count = len(matches)
            if count > 1:
                raise OrderConflictError(payment_id, count)
            if count == 0:
                return 0
            resp = await client.patch(
                self.table_url,
                headers={**self.headers, "Prefer": "return=minimal"},
                params={"id": f"eq.{matches[0]['id']}", **params},
                json=update.as_row(),
            )
            self._raise_for_error(resp, "update")
        return count

    @staticmethod
    def _raise_for_error(resp: httpx.Response, operation: str) -> None:
        if not resp.is_error:
            return
        try:
            detail = resp.json()
        except ValueError:
            detail = {"message": resp.text[:512]}
        message = detail.get("message") if isinstance(detail, dict) else None
        raise OrderStoreError(f"Order {operation} failed: {message or resp.status_code}")


class PgOrderStore(OrderStore):
    """Order store using a direct Postgres connection to the same database."""

    def __init__(self, settings: Settings):
        if not settings.db_enabled:
            raise ValueError("Database connection not configured")
        self.settings = settings
        self.table = sql.Identifier(settings.orders_table)

    async def apply_payment_update(self, payment_id: str, update: OrderPaymentUpdate) -> int:
        return await run_in_threadpool(self._apply, payment_id, update)

    def _apply(self, payment_id: str, update: OrderPaymentUpdate) -> int:
        try:
            with get_conn(self.settings) as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        sql.SQL("SELECT id FROM {} WHERE payment_id = %s FOR UPDATE").format(self.table),
                        (payment_id,),
                    )
                    ids = [row[0] for row in cur.fetchall()]
                    if len(ids) > 1:
                        raise OrderConflictError(payment_id, len(ids))
                    if not ids:
                        return 0
                    cur.execute(
                        sql.SQL(
                            """
                            UPDATE {}
                               SET gopay_status = %s,
                                   payment_status = %s,
                                   status = %s,
                                   payment_date = %s
                             WHERE id = %s
                            """
                        ).format(self.table),
                        (
                            update.gopay_status,
                            update.payment_status.value,
                            update.status.value,
                            update.payment_date,
                            ids[0],
                        ),
                    )
                    return cur.rowcount
        except psycopg2.Error as exc:
            raise OrderStoreError(str(exc)) from exc


def get_order_store(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> OrderStore:
    """Return the order store based on configuration."""
    if settings.db_enabled:
        return PgOrderStore(settings)
    return SupabaseOrderStore(settings, transport=transport)
