from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ResponseEnvelope:
    """Normalized result of one HTTP exchange.

    ``info`` is only populated when the client runs in debug mode, ``error``
    only when the request never got an HTTP response (``http_code == 0``).
    """

    body: Any
    http_code: int
    info: dict[str, Any] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.http_code == 200

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"body": self.body, "httpCode": self.http_code}
        if self.info is not None:
            data["info"] = self.info
        if self.error is not None:
            data["error"] = self.error
        return data
