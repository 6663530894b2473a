from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .envelope import ResponseEnvelope


class LeadloversError(Exception):
    """Base client error."""


class ValidationError(LeadloversError, ValueError):
    """Required input is missing; raised before any request is sent."""

    def __init__(self, errors: list[str]):
        super().__init__("\r\n".join(errors))
        self.errors = list(errors)


class TransportError(LeadloversError):
    """Transport/network layer error (connection failure, timeout)."""

    def __init__(self, message: str, *, url: str | None = None, envelope: ResponseEnvelope | None = None):
        super().__init__(message)
        self.url = url
        self.envelope = envelope


class RemoteApiError(LeadloversError):
    def __init__(
            self,
            status_code: int,
            message: str,
            details: str | None = None,
            *,
            envelope: ResponseEnvelope | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details
        self.envelope = envelope

    @property
    def details_data(self) -> dict | None:
        """The serialized envelope in ``details`` parsed back, if any."""
        if not self.details:
            return None
        try:
            data = json.loads(self.details)
        except ValueError:
            return None
        return data if isinstance(data, dict) else None


class AuthError(RemoteApiError):
    """Auth-related API error."""
