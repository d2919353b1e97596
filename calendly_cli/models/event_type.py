from pydantic import BaseModel, field_validator
from typing import Optional, Dict, Any

from calendly_cli.exceptions import UsageError

UPDATE_HINT = "Nothing to update. Pass options like --name, --duration, --description, etc."


def _locations(kind: str):
    return [{"kind": kind}]


def _positive_duration(v: Optional[int]) -> Optional[int]:
    if v is not None and v <= 0:
        raise ValueError('Duration must be a positive number of minutes')
    return v


class EventTypeCreate(BaseModel):
    name: str
    duration: int = 30
    slug: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    location: Optional[str] = None  # location kind, e.g. zoom_conference
    active: bool = False
    secret: bool = False

    @field_validator('duration')
    @classmethod
    def validate_duration(cls, v):
        return _positive_duration(v)

    def to_body(self, owner: str) -> Dict[str, Any]:
        body = {
            "name": self.name,
            "owner": owner,
            "duration": self.duration,
            "active": self.active,
            "secret": self.secret,
        }
        if self.slug is not None:
            body["slug"] = self.slug
        if self.description is not None:
            body["description"] = self.description
        if self.color is not None:
            body["color"] = self.color
        if self.location is not None:
            body["locations"] = _locations(self.location)
        return body


class EventTypeUpdate(BaseModel):
    """Partial update; only fields the caller explicitly set are sent."""
    name: Optional[str] = None
    duration: Optional[int] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    location: Optional[str] = None
    active: Optional[bool] = None
    secret: Optional[bool] = None

    @field_validator('duration')
    @classmethod
    def validate_duration(cls, v):
        return _positive_duration(v)

    def to_body(self) -> Dict[str, Any]:
        body = self.model_dump(exclude_unset=True)
        if "location" in body:
            body["locations"] = _locations(body.pop("location"))
        if not body:
            raise UsageError(UPDATE_HINT)
        return body
