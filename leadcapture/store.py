"""
Shared lead state.

Holds the leads submitted in this session and the "submitted" flag so other
views (header counters, success banners) can react without talking to the
form directly.
"""

import logging
from typing import Callable, List

from leadcapture.models import LeadRecord

logger = logging.getLogger(__name__)

Listener = Callable[["LeadStore"], None]


class LeadStore:
    """In-memory application state with change listeners."""

    def __init__(self):
        self._leads: List[LeadRecord] = []
        self._submitted = False
        self._listeners: List[Listener] = []

    @property
    def leads(self) -> List[LeadRecord]:
        return list(self._leads)

    @property
    def submitted(self) -> bool:
        return self._submitted

    def add_lead(self, record: LeadRecord) -> None:
        self._leads.append(record)
        self._emit()

    def set_submitted(self, submitted: bool) -> None:
        self._submitted = submitted
        self._emit()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener`; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                # Listener errors are logged, never raised to the caller
                logger.error(f"LeadStore listener {listener!r} failed: {e}")
