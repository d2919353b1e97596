"""Calendly CLI: manage event types, scheduled events, availability, and webhooks.

Usage:
  calendly <command> [subcommand] [args] [options]

Run `calendly help` for the full command list. Requires CALENDLY_ACCESS_TOKEN
in .env or the environment.
"""
import sys
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests
from pydantic import ValidationError

from calendly_cli.calendly_client import CalendlyClient
from calendly_cli.exceptions import CalendlyError, UsageError
from calendly_cli.formatters import (
    format_availability,
    format_event_type,
    format_invitee,
    format_scheduled_event,
    format_user,
    format_webhook,
)
from calendly_cli.models.event_type import EventTypeCreate, EventTypeUpdate
from calendly_cli.services.calendly_service import CalendlyService, DEFAULT_EVENT_COUNT
from calendly_cli.utils.config import Config

logger = logging.getLogger(__name__)

PROG = "calendly"

USAGE = f"""Calendly CLI

Usage:
  {PROG} <command> [subcommand] [args] [options]

Event Types (booking link templates):
  {PROG} types [--active] [-v]                       List event types
  {PROG} types get <uuid> [-v]                       Get a single event type
  {PROG} types create <name> [options]               Create a new event type
  {PROG} types update <uuid> [options]               Update an event type
  {PROG} types activate <uuid>                       Activate an event type
  {PROG} types deactivate <uuid>                     Deactivate (soft-delete)
  {PROG} types link <uuid>                           Generate a single-use scheduling link

Scheduled Events (actual bookings):
  {PROG} events [--status active|canceled] [--count N]  List scheduled events
  {PROG} events get <uuid>                              Get event details + invitees
  {PROG} events cancel <uuid> [--reason "…"]            Cancel a scheduled event

Invitees:
  {PROG} invitees <event_uuid>                       List invitees for a scheduled event

Availability:
  {PROG} availability                                Show all availability schedules
  {PROG} availability get <uuid>                     Show a specific schedule

Webhooks:
  {PROG} webhooks                                    List webhook subscriptions
  {PROG} webhooks create <url> [--events e1,e2,…]    Create a webhook subscription
  {PROG} webhooks delete <uuid>                      Delete a webhook subscription

Account:
  {PROG} me                                          Show current user info

Options (for types create/update):
  --name <name>              Event type name
  --duration <minutes>       Duration (default: 30)
  --slug <slug>              URL slug (create only, auto-generated from name)
  --description <text>       Plain-text description
  --color <hex>              Color (e.g. "#0099ff")
  --location <kind>          zoom_conference, google_conference, phone, etc.
  --active / --inactive      Set active status
  --secret / --no-secret     Set secret (unlisted) status
  -v, --verbose              Show full details

Examples:
  {PROG} types create "Consultation" --duration 45 --location zoom_conference --active
  {PROG} types update <uuid> --description "Updated description"
  {PROG} types link <uuid>
  {PROG} types deactivate <uuid>
  {PROG} events --status active --count 10
  {PROG} events cancel <uuid> --reason "Rescheduling"
  {PROG} webhooks create https://example.com/hook --events invitee.created,invitee.canceled
"""

# ---------------------------------------------------------------------------
# Option parsing
# ---------------------------------------------------------------------------

# flag -> option name; each consumes the following token
VALUE_OPTIONS = {
    "--name": "name",
    "--duration": "duration",
    "--slug": "slug",
    "--description": "description",
    "--color": "color",
    "--location": "location",
    "--status": "status",
    "--reason": "reason",
    "--events": "events",
    "--count": "count",
}
INT_OPTIONS = {"duration", "count"}

# flag -> (option name, value); consume nothing
BOOL_OPTIONS = {
    "--active": ("active", True),
    "--inactive": ("active", False),
    "--secret": ("secret", True),
    "--no-secret": ("secret", False),
    "-v": ("verbose", True),
    "--verbose": ("verbose", True),
}

CREATE_FIELDS = ("duration", "slug", "description", "color", "location", "active", "secret")
UPDATE_FIELDS = ("name", "duration", "slug", "description", "color", "location", "active", "secret")


def _convert(flag: str, option: str, raw: str) -> Any:
    if option in INT_OPTIONS:
        try:
            value = int(raw)
        except ValueError:
            raise UsageError(f"Option {flag} expects a whole number, got {raw!r}")
        if option == "count" and value < 1:
            raise UsageError(f"Option {flag} must be at least 1, got {value}")
        return value
    if option == "events":
        return [e.strip() for e in raw.split(",") if e.strip()]
    return raw


def parse_options(tokens: List[str]) -> Tuple[List[str], Dict[str, Any]]:
    """Split tokens into leading positionals and recognized options.

    Unrecognized flags are ignored (with a warning), matching the permissive
    behaviour users of the tool rely on.
    """
    positionals: List[str] = []
    opts: Dict[str, Any] = {}
    seen_flag = False
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        if tok in BOOL_OPTIONS:
            name, value = BOOL_OPTIONS[tok]
            opts[name] = value
            seen_flag = True
        elif tok in VALUE_OPTIONS:
            if i + 1 >= len(tokens):
                raise UsageError(f"Option {tok} requires a value")
            name = VALUE_OPTIONS[tok]
            i += 1
            opts[name] = _convert(tok, name, tokens[i])
            seen_flag = True
        elif tok.startswith("-") and len(tok) > 1:
            logger.warning("Ignoring unrecognized option %s", tok)
            seen_flag = True
        elif not seen_flag:
            positionals.append(tok)
        else:
            logger.warning("Ignoring unexpected argument %r", tok)
        i += 1
    return positionals, opts


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

class Context:
    """Per-invocation state handed to every command handler."""

    def __init__(self, service_factory: Callable[[], CalendlyService],
                 tz_name: Optional[str] = None, out: Callable[..., None] = print):
        self._service_factory = service_factory
        self._service: Optional[CalendlyService] = None
        self.tz_name = tz_name
        self.out = out

    @property
    def service(self) -> CalendlyService:
        # Built on first use so `help` and usage errors need no token
        if self._service is None:
            self._service = self._service_factory()
        return self._service


def _require(args: List[str], usage: str) -> str:
    if not args:
        raise UsageError(f"Usage: {PROG} {usage}")
    return args[0]


def _print_list(ctx: Context, items: List[Dict], render: Callable[[Dict], str], empty: str):
    if not items:
        ctx.out(empty)
        return
    for item in items:
        ctx.out(render(item))
        ctx.out()


# --- Account ---

def cmd_me(ctx, args, opts):
    ctx.out(format_user(ctx.service.current_user()))


# --- Event types ---

def types_list(ctx, args, opts):
    types = ctx.service.list_event_types(active_only=bool(opts.get("active")))
    verbose = bool(opts.get("verbose"))
    _print_list(ctx, types, lambda et: format_event_type(et, verbose=verbose),
                "No event types found.")


def types_get(ctx, args, opts):
    uuid = _require(args, "types get <uuid>")
    ctx.out(format_event_type(ctx.service.get_event_type(uuid), verbose=True))


def types_create(ctx, args, opts):
    name = _require(args, "types create <name> [options]")
    fields = {k: opts[k] for k in CREATE_FIELDS if k in opts}
    try:
        data = EventTypeCreate(name=name, **fields)
    except ValidationError as e:
        raise UsageError(f"Invalid event type options: {e.errors()[0]['msg']}")
    et = ctx.service.create_event_type(data)
    ctx.out("✅ Created event type!")
    ctx.out(format_event_type(et, verbose=True))


def types_update(ctx, args, opts):
    uuid = _require(args, "types update <uuid> [options]")
    try:
        changes = EventTypeUpdate(**{k: opts[k] for k in UPDATE_FIELDS if k in opts})
    except ValidationError as e:
        raise UsageError(f"Invalid event type options: {e.errors()[0]['msg']}")
    et = ctx.service.update_event_type(uuid, changes)
    ctx.out("✅ Updated event type!")
    ctx.out(format_event_type(et, verbose=True))


def types_activate(ctx, args, opts):
    uuid = _require(args, "types activate <uuid>")
    et = ctx.service.activate_event_type(uuid)
    ctx.out(f"✅ Activated: {et.get('name')}")
    ctx.out(f"   URL: {et.get('scheduling_url')}")


def types_deactivate(ctx, args, opts):
    uuid = _require(args, "types deactivate <uuid>")
    et = ctx.service.deactivate_event_type(uuid)
    ctx.out(f"⏸  Deactivated: {et.get('name')}")


def types_link(ctx, args, opts):
    uuid = _require(args, "types link <uuid>")
    link = ctx.service.create_scheduling_link(uuid)
    ctx.out("🔗 Single-use scheduling link:")
    ctx.out(f"   {link.get('booking_url')}")


# --- Scheduled events ---

def events_list(ctx, args, opts):
    events = ctx.service.list_scheduled_events(
        status=opts.get("status"),
        count=opts.get("count", DEFAULT_EVENT_COUNT),
    )
    verbose = bool(opts.get("verbose"))
    _print_list(ctx, events,
                lambda ev: format_scheduled_event(ev, verbose=verbose, tz_name=ctx.tz_name),
                "No scheduled events found.")


def events_get(ctx, args, opts):
    uuid = _require(args, "events get <uuid>")
    ev = ctx.service.get_scheduled_event(uuid)
    ctx.out(format_scheduled_event(ev, verbose=True, tz_name=ctx.tz_name))
    ctx.out()
    invitees = ctx.service.list_invitees(uuid)
    if not invitees:
        ctx.out("  No invitees.")
        return
    ctx.out("  Invitees:")
    for inv in invitees:
        ctx.out(format_invitee(inv))
        ctx.out()


def events_cancel(ctx, args, opts):
    uuid = _require(args, 'events cancel <uuid> [--reason "…"]')
    ctx.service.cancel_scheduled_event(uuid, reason=opts.get("reason"))
    ctx.out(f"❌ Canceled event {uuid}")


# --- Invitees ---

def cmd_invitees(ctx, args, opts):
    event_uuid = _require(args, "invitees <event_uuid>")
    _print_list(ctx, ctx.service.list_invitees(event_uuid), format_invitee, "No invitees found.")


# --- Availability ---

def availability_list(ctx, args, opts):
    for sched in ctx.service.list_availability_schedules():
        ctx.out(format_availability(sched))
        ctx.out()


def availability_get(ctx, args, opts):
    uuid = _require(args, "availability get <uuid>")
    ctx.out(format_availability(ctx.service.get_availability_schedule(uuid)))


# --- Webhooks ---

def webhooks_list(ctx, args, opts):
    _print_list(ctx, ctx.service.list_webhooks(), format_webhook, "No webhook subscriptions found.")


def webhooks_create(ctx, args, opts):
    url = _require(args, "webhooks create <url> [--events e1,e2,…]")
    wh = ctx.service.create_webhook(url, events=opts.get("events"))
    ctx.out("✅ Created webhook!")
    ctx.out(format_webhook(wh))


def webhooks_delete(ctx, args, opts):
    uuid = _require(args, "webhooks delete <uuid>")
    ctx.service.delete_webhook(uuid)
    ctx.out(f"🗑  Deleted webhook {uuid}")


def cmd_help(ctx, args, opts):
    ctx.out(USAGE)


# command -> {subcommand: handler}; the "list" entry is the default action
COMMANDS: Dict[str, Dict[str, Callable]] = {
    "me": {"list": cmd_me},
    "types": {
        "list": types_list,
        "get": types_get,
        "create": types_create,
        "update": types_update,
        "activate": types_activate,
        "deactivate": types_deactivate,
        "link": types_link,
    },
    "events": {
        "list": events_list,
        "get": events_get,
        "cancel": events_cancel,
    },
    "invitees": {"list": cmd_invitees},
    "availability": {
        "list": availability_list,
        "get": availability_get,
    },
    "webhooks": {
        "list": webhooks_list,
        "create": webhooks_create,
        "delete": webhooks_delete,
    },
    "help": {"list": cmd_help},
}
HELP_ALIASES = {"-h", "--help"}


def resolve(argv: List[str]) -> Tuple[Callable, List[str]]:
    """Map argv to (handler, remaining tokens)."""
    command = argv[0] if argv else "help"
    if command in HELP_ALIASES:
        command = "help"
    if command not in COMMANDS:
        raise UsageError(f"Unknown command: {command}\nRun '{PROG} help' for usage.")

    subcommands = COMMANDS[command]
    sub = argv[1] if len(argv) > 1 else None
    # single-action commands take their arguments directly
    if len(subcommands) > 1 and sub in subcommands:
        return subcommands[sub], argv[2:]
    return subcommands["list"], argv[1:]


def dispatch(argv: List[str], service_factory: Callable[[], CalendlyService],
             tz_name: Optional[str] = None, out: Callable[..., None] = print) -> None:
    handler, rest = resolve(argv)
    args, opts = parse_options(rest)
    logger.debug("Dispatching %s args=%s opts=%s", handler.__name__, args, opts)
    handler(Context(service_factory, tz_name=tz_name, out=out), args, opts)


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    try:
        config = Config()
    except CalendlyError as e:
        print(str(e), file=sys.stderr)
        return 1
    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    def build_service() -> CalendlyService:
        config.validate_config()
        client = CalendlyClient(
            config.CALENDLY_ACCESS_TOKEN,
            base_url=config.CALENDLY_API_BASE,
            timeout=config.CALENDLY_TIMEOUT,
        )
        return CalendlyService(client)

    try:
        dispatch(argv, build_service, tz_name=config.CALENDLY_TIMEZONE)
    except CalendlyError as e:
        print(str(e), file=sys.stderr)
        return 1
    except requests.RequestException as e:
        print(f"Request failed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
