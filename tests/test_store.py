"""
Tests for the shared lead store and notification sinks.
"""

import logging

from leadcapture.models import LeadRecord, Notification, NotificationKind
from leadcapture.notifications import LoggingNotifier, NotificationLog
from leadcapture.store import LeadStore


def _record(email="a@b.com"):
    return LeadRecord(name="Ana", email=email, industry="technology")


class TestLeadStore:

    def test_add_lead_and_submitted_flag(self):
        store = LeadStore()
        record = _record()

        store.add_lead(record)
        store.set_submitted(True)

        assert store.leads == [record]
        assert store.submitted

    def test_leads_property_returns_a_copy(self):
        store = LeadStore()
        store.add_lead(_record())
        store.leads.clear()
        assert len(store.leads) == 1

    def test_listeners_are_notified_until_unsubscribed(self):
        store = LeadStore()
        seen = []
        unsubscribe = store.subscribe(lambda s: seen.append((len(s.leads), s.submitted)))

        store.add_lead(_record())
        store.set_submitted(True)
        unsubscribe()
        store.set_submitted(False)

        assert seen == [(1, False), (1, True)]

    def test_failing_listener_does_not_block_others(self):
        store = LeadStore()
        calls = []
        store.subscribe(lambda s: 1 / 0)
        store.subscribe(lambda s: calls.append(s.submitted))

        store.set_submitted(True)

        assert calls == [True]


class TestNotifiers:

    def test_notification_log(self):
        log = NotificationLog()
        log.notify(Notification(title="Email Sent!"))
        log.notify(Notification(title="Database Error", kind=NotificationKind.DESTRUCTIVE))

        assert log.titles == ["Email Sent!", "Database Error"]
        assert [n.title for n in log.errors] == ["Database Error"]

    def test_logging_notifier_levels(self, caplog):
        notifier = LoggingNotifier()
        with caplog.at_level(logging.INFO, logger="leadcapture.toast"):
            notifier.notify(Notification(title="Welcome aboard!", description="joined"))
            notifier.notify(Notification(title="Email Error", description="down", kind=NotificationKind.DESTRUCTIVE))

        levels = [(r.levelno, r.getMessage()) for r in caplog.records]
        assert (logging.INFO, "✅ Welcome aboard!: joined") in levels
        assert (logging.ERROR, "❌ Email Error: down") in levels
