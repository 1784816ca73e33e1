"""
Lead repository.

Writes one row per successful submission into the `leads` table. Duplicate
emails are allowed by the schema, but older databases may still carry the
`leads_email_key` unique constraint; that surfaces as a conflict error
(code 23505) which callers treat as success.
"""

import logging
from typing import Awaitable, Callable, Optional, Protocol

from postgrest.exceptions import APIError
from supabase import AsyncClient

from leadcapture import config
from leadcapture.db.client import get_async_client
from leadcapture.exceptions import LeadPersistenceError
from leadcapture.models import LeadRecord

logger = logging.getLogger(__name__)


class LeadRepository(Protocol):
    async def insert(self, record: LeadRecord) -> None:
        ...


class SupabaseLeadRepository:
    """
    Inserts leads with PostgREST.

    Args:
        client_factory: Coroutine returning the AsyncClient
        table: Target table name
    """

    def __init__(
        self,
        client_factory: Callable[[], Awaitable[AsyncClient]] = get_async_client,
        table: Optional[str] = None,
    ):
        self._client_factory = client_factory
        self.table = table or config.LEADS_TABLE

    async def insert(self, record: LeadRecord) -> None:
        client = await self._client_factory()

        logger.info(f"💾 Saving lead to {self.table}...")
        try:
            await client.table(self.table).insert([record.to_row()]).execute()
        except APIError as e:
            code = str(e.code) if e.code is not None else None
            raise LeadPersistenceError(e.message or str(e), code=code) from e

        logger.info(f"✅ Lead saved to {self.table}")
