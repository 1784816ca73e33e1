"""Supabase client management for the lead-capture form."""

from .client import get_async_client, reset_clients

__all__ = ["get_async_client", "reset_clients"]
