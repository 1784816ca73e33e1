import asyncio
from typing import List, Optional

import pytest

from leadcapture.exceptions import ConfirmationSendError, LeadPersistenceError
from leadcapture.guard import SubmissionGuard
from leadcapture.models import LeadRecord
from leadcapture.notifications import NotificationLog
from leadcapture.store import LeadStore
from leadcapture.workflow import SubmissionWorkflow


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSender:
    """Records confirmation emails; can fail or block until released."""

    def __init__(self, error: Optional[str] = None):
        self.error = error
        self.calls: List[dict] = []
        self.gate: Optional[asyncio.Event] = None

    async def send(self, name, email, industry, request_id):
        self.calls.append({"name": name, "email": email, "industry": industry, "request_id": request_id})
        if self.gate is not None:
            await self.gate.wait()
        if self.error:
            raise ConfirmationSendError(self.error)


class FakeRepository:
    """Records inserted leads; can fail with a database error code."""

    def __init__(self, error: Optional[LeadPersistenceError] = None):
        self.error = error
        self.rows: List[LeadRecord] = []

    async def insert(self, record):
        self.rows.append(record)
        if self.error is not None:
            raise self.error


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def guard(clock):
    return SubmissionGuard(cooldown_seconds=3.0, request_id_ttl=None, clock=clock)


@pytest.fixture
def sender():
    return FakeSender()


@pytest.fixture
def repository():
    return FakeRepository()


@pytest.fixture
def notifications():
    return NotificationLog()


@pytest.fixture
def store():
    return LeadStore()


@pytest.fixture
def workflow(guard, sender, repository, store, notifications):
    wf = SubmissionWorkflow(
        guard=guard,
        sender=sender,
        repository=repository,
        store=store,
        notifier=notifications,
        settle_delay=0,
    )
    wf.mount()
    return wf


def fill(workflow, name="Ana", email="a@b.com", industry="technology"):
    workflow.handle_input_change("name", name)
    workflow.handle_input_change("email", email)
    workflow.handle_input_change("industry", industry)
