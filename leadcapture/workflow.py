"""
Submission Workflow
===================

Drives one lead submission from the form values to a stored lead, and holds
the form's view state (field values, field errors, submitting/submitted
flags, leads of this session).

Flow of `submit()`:
1. Block if the guard already has a submission in flight
2. Validate fields (errors stay on the form, nothing is sent)
3. Generate a request id and admit it through the guard
4. Send the confirmation email (abort on failure)
5. Save the lead (a duplicate-key conflict counts as success)
6. Record the lead, clear the form, notify success
7. Always release the guard

No failure escapes `submit()`: every path ends in a SubmissionStatus and,
for failures, a destructive notification.
"""

import asyncio
import logging
import time
import uuid
from typing import Callable, List, Optional

from leadcapture.api.confirmation import ConfirmationSender
from leadcapture.api.leads import LeadRepository
from leadcapture.config import SUBMIT_SETTLE_DELAY_SECONDS
from leadcapture.exceptions import ConfirmationSendError, LeadPersistenceError
from leadcapture.guard import SubmissionGuard
from leadcapture.models import (
    FORM_FIELDS,
    FieldError,
    FormInput,
    Industry,
    LeadRecord,
    Notification,
    NotificationKind,
    SubmissionStatus,
)
from leadcapture.notifications import LoggingNotifier, Notifier
from leadcapture.store import LeadStore
from leadcapture.validation import normalize_email, validate_lead_form

logger = logging.getLogger(__name__)

Validator = Callable[[FormInput], List[FieldError]]


def generate_request_id() -> str:
    """Millisecond timestamp plus a 9-character random suffix."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


class SubmissionWorkflow:
    """
    Lead-capture form controller.

    Args:
        guard: Duplicate-submission guard owned by this form session
        sender: Confirmation email collaborator
        repository: Lead persistence collaborator
        store: Shared application state
        notifier: Toast sink (defaults to the log)
        validator: Field validation rules
        settle_delay: Pause before the first remote call, absorbs
            double-dispatched submit events
        request_id_factory: Source of fresh request ids
    """

    def __init__(
        self,
        guard: SubmissionGuard,
        sender: ConfirmationSender,
        repository: LeadRepository,
        store: Optional[LeadStore] = None,
        notifier: Optional[Notifier] = None,
        validator: Validator = validate_lead_form,
        settle_delay: float = SUBMIT_SETTLE_DELAY_SECONDS,
        request_id_factory: Callable[[], str] = generate_request_id,
    ):
        self.guard = guard
        self.sender = sender
        self.repository = repository
        self.store = store if store is not None else LeadStore()
        self.notifier = notifier if notifier is not None else LoggingNotifier()
        self.validator = validator
        self.settle_delay = settle_delay
        self.request_id_factory = request_id_factory

        self.form = FormInput()
        self.validation_errors: List[FieldError] = []
        self.is_submitting = False
        self.submitted = False
        self.leads: List[LeadRecord] = []

    # ============================================================
    # View state
    # ============================================================

    def mount(self) -> None:
        """Called when the form view appears."""
        self.submitted = False
        self.guard.reset()

    @property
    def can_press_submit(self) -> bool:
        return not (self.is_submitting or self.guard.is_in_flight)

    @property
    def session_position(self) -> int:
        """How many leads were submitted from this form in this session."""
        return len(self.leads)

    def get_field_error(self, field: str) -> Optional[str]:
        for error in self.validation_errors:
            if error.field == field:
                return error.message
        return None

    def handle_input_change(self, field: str, value: str) -> None:
        """Update one field and drop the errors shown for it."""
        if field not in FORM_FIELDS:
            raise ValueError(f"Unknown form field: {field}")
        setattr(self.form, field, value)
        self.validation_errors = [e for e in self.validation_errors if e.field != field]

    def reset_form(self) -> None:
        """Back to an empty form and a fresh guard ("Submit another lead")."""
        logger.info("🔄 Resetting form and all guards...")
        self.submitted = False
        self.store.set_submitted(False)
        self.form = FormInput()
        self.validation_errors = []
        self.guard.reset()
        logger.info("✅ Form reset completed")

    # ============================================================
    # Submission
    # ============================================================

    async def submit(self) -> SubmissionStatus:
        if self.guard.is_in_flight:
            logger.info("🛑 Form submission blocked: a submission is already in progress")
            return SubmissionStatus.REJECTED

        try:
            errors = self.validator(self.form)
            self.validation_errors = list(errors)
            if errors:
                logger.info(f"Form has {len(errors)} invalid field(s): {[e.field for e in errors]}")
                return SubmissionStatus.INVALID
            request_id = self.request_id_factory()
        except Exception:
            logger.exception("❌ Error preparing form submission")
            self._notify_error("Submission Error", "Failed to submit lead. Please try again.")
            return SubmissionStatus.FAILED

        if not self.guard.try_start(request_id):
            # Silent rejection: logged by the guard, no notification
            return SubmissionStatus.REJECTED

        self.is_submitting = True
        try:
            return await self._run(request_id)
        except Exception:
            logger.exception(f"❌ Error in form submission {request_id}")
            self._notify_error("Submission Error", "Failed to submit lead. Please try again.")
            return SubmissionStatus.FAILED
        finally:
            self.is_submitting = False
            self.guard.end(request_id)
            logger.info(f"🔄 Form submission process completed ({request_id})")

    async def _run(self, request_id: str) -> SubmissionStatus:
        name = self.form.name
        email = normalize_email(self.form.email)
        industry = Industry(self.form.industry)

        if self.settle_delay > 0:
            await asyncio.sleep(self.settle_delay)

        logger.info(f"🚀 Starting form submission... Request ID: {request_id}")

        # Step 1: confirmation email
        try:
            await self.sender.send(name, email, industry.value, request_id)
        except ConfirmationSendError as e:
            logger.error(f"❌ Error sending confirmation email for {request_id}: {e.message}")
            self._notify_error("Email Error", f"Failed to send confirmation email: {e.message}")
            return SubmissionStatus.SEND_FAILED

        logger.info(f"✅ Confirmation email sent for Request ID: {request_id}")
        self._notify(Notification(
            title="Email Sent!",
            description="Confirmation email sent successfully!",
        ))

        # Step 2: persist
        record = LeadRecord(name=name, email=email, industry=industry)
        try:
            await self.repository.insert(record)
        except LeadPersistenceError as e:
            if not e.is_conflict:
                logger.error(f"❌ Error saving lead for {request_id}: {e}")
                self._notify_error("Database Error", f"Failed to save lead: {e.message}")
                return SubmissionStatus.PERSIST_FAILED
            logger.info(f"ℹ️ Duplicate email constraint for {request_id} - continuing with success flow")

        # Step 3: success
        self.leads.append(record)
        self.store.add_lead(record)
        self.store.set_submitted(True)
        self.submitted = True
        self.form = FormInput()

        logger.info(f"🎉 Form submission completed successfully for Request ID: {request_id}")
        self._notify(Notification(
            title="Welcome aboard! 🎉",
            description="You've successfully joined our community!",
        ))
        return SubmissionStatus.SUCCEEDED

    def _notify(self, notification: Notification) -> None:
        try:
            self.notifier.notify(notification)
        except Exception:
            # Delivery is fire-and-forget: the submission outcome stands
            logger.exception(f"Notifier failed to show {notification.title!r}")

    def _notify_error(self, title: str, description: str) -> None:
        self._notify(Notification(
            title=title,
            description=description,
            kind=NotificationKind.DESTRUCTIVE,
        ))
