"""
Confirmation email sender.

Invokes the `send-confirmation` Edge Function with the normalized lead and
the request id. The function itself (templating, SMTP provider) lives in the
Supabase project, not here.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Protocol

from supabase import AsyncClient

from leadcapture import config
from leadcapture.db.client import get_async_client
from leadcapture.exceptions import ConfirmationSendError

logger = logging.getLogger(__name__)


class ConfirmationSender(Protocol):
    async def send(self, name: str, email: str, industry: str, request_id: str) -> None:
        ...


def build_payload(name: str, email: str, industry: str, request_id: str) -> Dict[str, str]:
    """JSON body expected by the Edge Function (camelCase requestId)."""
    return {
        "name": name,
        "email": email,
        "industry": industry,
        "requestId": request_id,
    }


def _error_message(error: Exception) -> str:
    # FunctionsHttpError / FunctionsRelayError carry a `message`; fall back to str()
    message = getattr(error, "message", None)
    return str(message) if message else str(error) or error.__class__.__name__


class SupabaseConfirmationSender:
    """
    Sends confirmation emails through `client.functions.invoke`.

    Args:
        client_factory: Coroutine returning the AsyncClient
        function_name: Edge Function to invoke
    """

    def __init__(
        self,
        client_factory: Callable[[], Awaitable[AsyncClient]] = get_async_client,
        function_name: Optional[str] = None,
    ):
        self._client_factory = client_factory
        self.function_name = function_name or config.CONFIRMATION_FUNCTION

    async def send(self, name: str, email: str, industry: str, request_id: str) -> None:
        client = await self._client_factory()
        body = build_payload(name, email, industry, request_id)

        logger.info(f"📧 Invoking {self.function_name} for request {request_id}")
        try:
            response: Any = await client.functions.invoke(
                self.function_name,
                invoke_options={"body": body},
            )
        except Exception as e:
            logger.error(f"❌ {self.function_name} failed for request {request_id}: {e}")
            raise ConfirmationSendError(_error_message(e)) from e

        logger.debug(f"{self.function_name} response for {request_id}: {response!r}")
