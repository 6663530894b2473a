from __future__ import annotations

import json
from typing import Any

from .envelope import ResponseEnvelope
from .errors import AuthError, RemoteApiError, TransportError
from .transport import mask_token


def extract_error_message(body: Any) -> str | None:
    if not isinstance(body, dict):
        return None
    message = body.get("message")
    if isinstance(message, str) and message:
        return message
    messages = body.get("mensagens")
    if isinstance(messages, list) and messages:
        return "\r\n".join(str(m) for m in messages)
    return None


def serialize_envelope(envelope: ResponseEnvelope) -> str:
    data = envelope.to_dict()
    info = data.get("info")
    if isinstance(info, dict) and isinstance(info.get("url"), str):
        data["info"] = {**info, "url": mask_token(info["url"])}
    return json.dumps(data, ensure_ascii=False, default=str)


def raise_for_envelope(envelope: ResponseEnvelope) -> ResponseEnvelope:
    if envelope.http_code == 200:
        return envelope

    url = envelope.info.get("url") if envelope.info else None
    if envelope.http_code == 0:
        raise TransportError(
            envelope.error or "request failed without a response",
            url=mask_token(url) if url else None,
            envelope=envelope,
        )

    details = None
    message = extract_error_message(envelope.body)
    if message is None:
        details = serialize_envelope(envelope)
        message = details

    if envelope.http_code in (401, 403):
        raise AuthError(envelope.http_code, message, details, envelope=envelope)
    raise RemoteApiError(envelope.http_code, message, details, envelope=envelope)
