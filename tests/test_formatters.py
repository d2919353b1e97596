"""Tests for display formatting and the date/URI helpers."""
import pytest

from calendly_cli.formatters import (
    format_availability,
    format_event_type,
    format_invitee,
    format_scheduled_event,
    format_user,
    format_webhook,
)
from calendly_cli.utils.date_utils import format_time, uuid_from_uri

from conftest import ME

EVENT_TYPE = {
    "uri": "https://api.calendly.com/event_types/ET123",
    "name": "Consultation",
    "active": True,
    "secret": False,
    "slug": "consultation",
    "color": "#0099ff",
    "duration": 45,
    "description_plain": None,
    "locations": [{"kind": "zoom_conference"}],
    "scheduling_url": "https://calendly.com/ada/consultation",
    "created_at": "2024-01-01T10:00:00.000000Z",
    "updated_at": "2024-01-02T10:00:00.000000Z",
}


class TestHelpers:
    def test_uuid_from_uri(self):
        assert uuid_from_uri("https://api.calendly.com/scheduled_events/abc123") == "abc123"

    def test_uuid_from_uri_trailing_slash(self):
        assert uuid_from_uri("https://api.calendly.com/users/abc123/") == "abc123"

    def test_uuid_from_missing_uri(self):
        assert uuid_from_uri(None) == "(none)"

    def test_format_time_none(self):
        assert format_time(None) == "(none)"

    def test_format_time_in_timezone(self):
        assert format_time("2024-03-01T15:00:00.000000Z", "UTC") == "2024-03-01 03:00 PM UTC"
        assert format_time("2024-03-01T15:00:00Z", "America/New_York") == "2024-03-01 10:00 AM EST"

    @pytest.mark.parametrize("raw", ["not-a-date", "2024-13-45T99:00:00Z"])
    def test_format_time_falls_back_to_raw(self, raw):
        assert format_time(raw, "UTC") == raw

    def test_format_time_unknown_zone_falls_back(self):
        assert format_time("2024-03-01T15:00:00Z", "Mars/Olympus") == "2024-03-01T15:00:00Z"


class TestEventType:
    def test_compact(self):
        text = format_event_type(EVENT_TYPE)
        lines = text.splitlines()
        assert lines[0] == "✅ active  Consultation"
        assert "    UUID:     ET123" in lines
        assert "    Duration: 45 min" in lines
        assert "Slug" not in text

    def test_verbose_adds_details(self):
        text = format_event_type(EVENT_TYPE, verbose=True)
        assert "    Slug:     consultation" in text
        assert "    Color:    #0099ff" in text
        assert "    Desc:     (none)" in text
        assert "    Location: zoom_conference" in text
        assert "    Created:  2024-01-01T10:00:00.000000Z" in text

    def test_inactive_secret(self):
        text = format_event_type({"name": "Hidden", "active": False, "secret": True})
        assert text.splitlines()[0] == "⏸  inactive 🔒  Hidden"

    def test_missing_fields_do_not_raise(self):
        text = format_event_type({}, verbose=True)
        assert "    Location: (none)" in text
        assert "    UUID:     (none)" in text


class TestScheduledEvent:
    @pytest.mark.parametrize("status,icon", [("active", "📅"), ("canceled", "❌"), ("weird", "❓")])
    def test_status_icons(self, status, icon):
        text = format_scheduled_event({"name": "Call", "status": status})
        assert text.splitlines()[0] == f"{icon} Call  ({status})"

    def test_verbose_location_prefers_join_url(self):
        ev = {
            "name": "Call",
            "status": "active",
            "uri": "https://api.calendly.com/scheduled_events/EV9",
            "start_time": "2024-03-01T15:00:00Z",
            "end_time": "bad",
            "location": {"type": "zoom", "join_url": "https://zoom.us/j/1"},
            "event_type": "https://api.calendly.com/event_types/ET123",
        }
        text = format_scheduled_event(ev, verbose=True, tz_name="UTC")
        assert "    Start:    2024-03-01 03:00 PM UTC" in text
        assert "    End:      bad" in text
        assert "    UUID:     EV9" in text
        assert "    Location: https://zoom.us/j/1" in text
        assert "    Event type: https://api.calendly.com/event_types/ET123" in text

    def test_location_without_type_is_omitted(self):
        text = format_scheduled_event({"name": "Call", "status": "active", "location": {}}, verbose=True)
        assert "Location" not in text


def test_format_invitee_with_answers():
    inv = {
        "name": "Bob",
        "email": "bob@example.com",
        "status": "active",
        "uri": "https://api.calendly.com/scheduled_events/EV1/invitees/INV1",
        "questions_and_answers": [{"question": "Topic?", "answer": "Billing"}],
    }
    lines = format_invitee(inv).splitlines()
    assert lines[0] == "  👤 Bob <bob@example.com>"
    assert "      UUID:    INV1" in lines
    assert lines[-2:] == ["      Q: Topic?", "      A: Billing"]


def test_format_availability_skips_empty_days():
    sched = {
        "name": "Working hours",
        "timezone": "Europe/London",
        "default": True,
        "uri": "https://api.calendly.com/user_availability_schedules/S1",
        "rules": [
            {"type": "wday", "wday": "monday", "intervals": [{"from": "09:00", "to": "12:00"}, {"from": "13:00", "to": "17:00"}]},
            {"type": "wday", "wday": "sunday", "intervals": []},
        ],
    }
    lines = format_availability(sched).splitlines()
    assert lines[0] == "📅 Working hours (Europe/London)"
    assert "    Default: true" in lines
    assert "    Monday     09:00-12:00, 13:00-17:00" in lines
    assert not any("Sunday" in line for line in lines)


def test_format_webhook_states():
    wh = {
        "callback_url": "https://example.com/hook",
        "events": ["invitee.created", "invitee.canceled"],
        "state": "active",
        "uri": "https://api.calendly.com/webhook_subscriptions/WH1",
        "created_at": "2024-01-01T00:00:00Z",
    }
    lines = format_webhook(wh).splitlines()
    assert lines[0] == "✅ https://example.com/hook"
    assert "    Events: invitee.created, invitee.canceled" in lines
    assert "    UUID:   WH1" in lines
    assert format_webhook({"state": "disabled"}).startswith("⏸  (none)")


def test_format_user():
    text = format_user(ME["resource"])
    assert text.splitlines()[0] == "👤 Ada Lovelace (ada@example.com)"
    assert "   Timezone:      Europe/London" in text
