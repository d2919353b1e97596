"""Plain-text renderers for API resources.

Each function takes a decoded resource dict and returns the lines to print,
joined with newlines. Missing fields render as "(none)"; nothing here
raises on partial or malformed data.
"""
from typing import Dict, Optional

from calendly_cli.utils.date_utils import PLACEHOLDER, format_time, uuid_from_uri

EVENT_STATUS_ICONS = {
    "active": "📅",
    "canceled": "❌",
}
UNKNOWN_STATUS_ICON = "❓"


def _value(d: Dict, key: str) -> str:
    v = d.get(key)
    if v is None or v == "":
        return PLACEHOLDER
    return str(v)


def format_user(user: Dict) -> str:
    lines = [
        f"👤 {_value(user, 'name')} ({_value(user, 'email')})",
        f"   Timezone:      {_value(user, 'timezone')}",
        f"   Scheduling:    {_value(user, 'scheduling_url')}",
        f"   Organization:  {_value(user, 'current_organization')}",
        f"   URI:           {_value(user, 'uri')}",
    ]
    return "\n".join(lines)


def format_event_type(et: Dict, verbose: bool = False) -> str:
    status = "✅ active" if et.get("active") else "⏸  inactive"
    secret = " 🔒" if et.get("secret") else ""
    lines = [
        f"{status}{secret}  {_value(et, 'name')}",
        f"    URL:      {_value(et, 'scheduling_url')}",
        f"    UUID:     {uuid_from_uri(et.get('uri'))}",
        f"    Duration: {_value(et, 'duration')} min",
    ]
    if verbose:
        kinds = [loc.get("kind") for loc in (et.get("locations") or []) if loc.get("kind")]
        lines.append(f"    Slug:     {_value(et, 'slug')}")
        lines.append(f"    Color:    {_value(et, 'color')}")
        lines.append(f"    Desc:     {_value(et, 'description_plain')}")
        lines.append(f"    Location: {', '.join(kinds) if kinds else PLACEHOLDER}")
        lines.append(f"    Created:  {_value(et, 'created_at')}")
        lines.append(f"    Updated:  {_value(et, 'updated_at')}")
    return "\n".join(lines)


def _location_text(location: Optional[Dict]) -> Optional[str]:
    location = location or {}
    if not location.get("type"):
        return None
    return location.get("join_url") or location.get("location") or location["type"]


def format_scheduled_event(ev: Dict, verbose: bool = False, tz_name: Optional[str] = None) -> str:
    status = ev.get("status")
    icon = EVENT_STATUS_ICONS.get(status, UNKNOWN_STATUS_ICON)
    lines = [
        f"{icon} {_value(ev, 'name')}  ({status or PLACEHOLDER})",
        f"    Start:    {format_time(ev.get('start_time'), tz_name)}",
        f"    End:      {format_time(ev.get('end_time'), tz_name)}",
        f"    UUID:     {uuid_from_uri(ev.get('uri'))}",
    ]
    if verbose:
        loc = _location_text(ev.get("location"))
        if loc:
            lines.append(f"    Location: {loc}")
        lines.append(f"    Event type: {_value(ev, 'event_type')}")
        lines.append(f"    Created:  {_value(ev, 'created_at')}")
        lines.append(f"    Updated:  {_value(ev, 'updated_at')}")
    return "\n".join(lines)


def format_invitee(inv: Dict) -> str:
    lines = [
        f"  👤 {_value(inv, 'name')} <{_value(inv, 'email')}>",
        f"      Status:  {_value(inv, 'status')}",
        f"      UUID:    {uuid_from_uri(inv.get('uri'))}",
    ]
    for qa in inv.get("questions_and_answers") or []:
        lines.append(f"      Q: {_value(qa, 'question')}")
        lines.append(f"      A: {_value(qa, 'answer')}")
    return "\n".join(lines)


def format_availability(sched: Dict) -> str:
    lines = [
        f"📅 {_value(sched, 'name')} ({_value(sched, 'timezone')})",
        f"    UUID:    {uuid_from_uri(sched.get('uri'))}",
        f"    Default: {str(bool(sched.get('default'))).lower()}",
    ]
    for rule in sched.get("rules") or []:
        intervals = rule.get("intervals") or []
        if not intervals:
            continue
        spans = ", ".join(f"{i.get('from')}-{i.get('to')}" for i in intervals)
        day = (rule.get("wday") or rule.get("date") or "").capitalize()
        lines.append(f"    {day.ljust(10)} {spans}")
    return "\n".join(lines)


def format_webhook(wh: Dict) -> str:
    events = ", ".join(wh.get("events") or []) or PLACEHOLDER
    state = "✅" if wh.get("state") == "active" else "⏸ "
    lines = [
        f"{state} {_value(wh, 'callback_url')}",
        f"    Events: {events}",
        f"    State:  {_value(wh, 'state')}",
        f"    UUID:   {uuid_from_uri(wh.get('uri'))}",
        f"    Created: {_value(wh, 'created_at')}",
    ]
    return "\n".join(lines)
