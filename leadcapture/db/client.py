"""
Supabase Client Management
==========================

The form talks to Supabase with the ANON key only: it is a public client,
so row-level security on the `leads` table applies to every insert.

The async client is created lazily on first use and shared by the
confirmation sender and the lead repository. Creation is guarded by an
asyncio.Lock so two concurrent first calls build one client.
"""

import asyncio
import logging
from typing import Optional

from supabase import AsyncClient, create_async_client

from leadcapture import config

logger = logging.getLogger(__name__)

# ============================================================
# Async Singleton Client (lazily initialized)
# ============================================================
_async_client: Optional[AsyncClient] = None
_async_lock: Optional[asyncio.Lock] = None


def _get_lock() -> asyncio.Lock:
    global _async_lock
    if _async_lock is None:
        _async_lock = asyncio.Lock()
    return _async_lock


async def get_async_client() -> AsyncClient:
    """
    Get the async Supabase client (ANON key).
    Non-blocking: releases the event loop during HTTP I/O.
    """
    global _async_client

    if _async_client is not None:
        return _async_client

    async with _get_lock():
        if _async_client is not None:
            return _async_client

        if not config.SUPABASE_URL:
            raise RuntimeError("SUPABASE_URL not configured")
        if not config.SUPABASE_ANON_KEY:
            raise RuntimeError("SUPABASE_ANON_KEY not configured")

        _async_client = await create_async_client(config.SUPABASE_URL, config.SUPABASE_ANON_KEY)
        logger.info("✅ Async Supabase client initialized (ANON_KEY)")

        return _async_client


def reset_clients() -> None:
    """Drop the cached client (tests, config reloads)."""
    global _async_client, _async_lock
    _async_client = None
    _async_lock = None
