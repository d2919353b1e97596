import logging
from typing import Optional, Dict, List, Any

from calendly_cli.calendly_client import CalendlyClient
from calendly_cli.models.event_type import EventTypeCreate, EventTypeUpdate

logger = logging.getLogger(__name__)

DEFAULT_WEBHOOK_EVENTS = ("invitee.created", "invitee.canceled")
DEFAULT_EVENT_COUNT = 20


class CalendlyService:
    """Resource accessors for one CLI invocation.

    The current user is looked up at most once and reused, since its URI and
    organization URI are query parameters for most list and create calls.
    """

    def __init__(self, client: CalendlyClient):
        self.client = client
        self._user: Optional[Dict[str, Any]] = None

    # ------------------------------------------------------------------
    # User
    # ------------------------------------------------------------------

    def current_user(self) -> Dict[str, Any]:
        """Get current user information"""
        if self._user is None:
            self._user = self.client.get("/users/me")["resource"]
        else:
            logger.debug("Reusing cached user %s", self._user.get("uri"))
        return self._user

    @property
    def user_uri(self) -> str:
        return self.current_user()["uri"]

    @property
    def org_uri(self) -> str:
        return self.current_user()["current_organization"]

    def _collect(self, path: str, params: Dict[str, Any]) -> List[Dict]:
        """Read a list endpoint, following pagination.next_page links"""
        out = []
        url = path
        while url:
            js = self.client.get(url, params=params) or {}
            out.extend(js.get("collection", []))
            url = (js.get("pagination") or {}).get("next_page")
            # next_page already carries the query string
            params = None
        return out

    # ------------------------------------------------------------------
    # Event types
    # ------------------------------------------------------------------

    def list_event_types(self, active_only: bool = False) -> List[Dict]:
        """List event types owned by the current user"""
        types = self._collect("/event_types", {"user": self.user_uri})
        if active_only:
            types = [et for et in types if et.get("active")]
        return types

    def get_event_type(self, uuid: str) -> Dict:
        return self.client.get(f"/event_types/{uuid}")["resource"]

    def create_event_type(self, data: EventTypeCreate) -> Dict:
        body = data.to_body(owner=self.user_uri)
        logger.info("Creating event type %r", data.name)
        return self.client.post("/event_types", body)["resource"]

    def update_event_type(self, uuid: str, changes: EventTypeUpdate) -> Dict:
        # Raises UsageError on an empty patch, before anything is sent
        body = changes.to_body()
        logger.info("Updating event type %s fields=%s", uuid, sorted(body))
        return self.client.patch(f"/event_types/{uuid}", body)["resource"]

    def activate_event_type(self, uuid: str) -> Dict:
        return self.client.patch(f"/event_types/{uuid}", {"active": True})["resource"]

    def deactivate_event_type(self, uuid: str) -> Dict:
        """Soft delete: the API has no hard delete for event types"""
        return self.client.patch(f"/event_types/{uuid}", {"active": False})["resource"]

    def create_scheduling_link(self, event_type_uuid: str, max_event_count: int = 1) -> Dict:
        owner_uri = self.client.url_for(f"/event_types/{event_type_uuid}")
        return self.client.post("/scheduling_links", {
            "max_event_count": max_event_count,
            "owner": owner_uri,
            "owner_type": "EventType",
        })["resource"]

    # ------------------------------------------------------------------
    # Scheduled events
    # ------------------------------------------------------------------

    def list_scheduled_events(self, status: Optional[str] = None,
                              count: int = DEFAULT_EVENT_COUNT) -> List[Dict]:
        params = {"user": self.user_uri, "count": count, "sort": "start_time:desc"}
        if status:
            params["status"] = status
        return self.client.get("/scheduled_events", params=params)["collection"]

    def get_scheduled_event(self, uuid: str) -> Dict:
        return self.client.get(f"/scheduled_events/{uuid}")["resource"]

    def cancel_scheduled_event(self, uuid: str, reason: Optional[str] = None) -> Optional[Dict]:
        body = {}
        if reason is not None:
            body["reason"] = reason
        logger.info("Canceling scheduled event %s", uuid)
        js = self.client.post(f"/scheduled_events/{uuid}/cancellation", body)
        return js.get("resource") if js else None

    # ------------------------------------------------------------------
    # Invitees
    # ------------------------------------------------------------------

    def list_invitees(self, event_uuid: str) -> List[Dict]:
        return self.client.get(f"/scheduled_events/{event_uuid}/invitees")["collection"]

    # ------------------------------------------------------------------
    # Availability (read only)
    # ------------------------------------------------------------------

    def list_availability_schedules(self) -> List[Dict]:
        return self._collect("/user_availability_schedules", {"user": self.user_uri})

    def get_availability_schedule(self, uuid: str) -> Dict:
        return self.client.get(f"/user_availability_schedules/{uuid}")["resource"]

    # ------------------------------------------------------------------
    # Webhooks
    # ------------------------------------------------------------------

    def list_webhooks(self) -> List[Dict]:
        params = {"organization": self.org_uri, "scope": "user", "user": self.user_uri}
        return self._collect("/webhook_subscriptions", params)

    def create_webhook(self, url: str, events: Optional[List[str]] = None) -> Dict:
        events = list(events) if events else list(DEFAULT_WEBHOOK_EVENTS)
        return self.client.post("/webhook_subscriptions", {
            "url": url,
            "events": events,
            "organization": self.org_uri,
            "user": self.user_uri,
            "scope": "user",
        })["resource"]

    def delete_webhook(self, uuid: str) -> None:
        logger.info("Deleting webhook subscription %s", uuid)
        self.client.delete(f"/webhook_subscriptions/{uuid}")
