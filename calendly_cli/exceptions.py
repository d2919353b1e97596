"""Exceptions raised by the Calendly CLI. Any of them aborts the invocation."""
import json
from typing import Optional


class CalendlyError(Exception):
    """Base class for every fatal CLI error."""


class ConfigurationError(CalendlyError):
    """Raised when required configuration (the access token) is missing."""


class UsageError(CalendlyError):
    """Raised for bad command-line input: missing arguments, empty updates, unknown commands."""


class CalendlyAPIError(CalendlyError):
    """Raised when the API answers with a non-success status code."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body or ""
        super().__init__(f"API error ({status_code}):\n{self.pretty_body()}")

    def pretty_body(self) -> str:
        # Pretty-print JSON bodies, otherwise return the text untouched
        try:
            return json.dumps(json.loads(self.body), indent=2)
        except (ValueError, TypeError):
            return self.body

    @property
    def details(self) -> Optional[dict]:
        try:
            parsed = json.loads(self.body)
        except (ValueError, TypeError):
            return None
        return parsed if isinstance(parsed, dict) else None
