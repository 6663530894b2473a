from __future__ import annotations

import json
import logging
import re
import time
from collections.abc import Iterable, Mapping
from typing import Any

import httpx

from .config_types import ClientConfig
from .envelope import ResponseEnvelope
from .params import ParamsInput, build_query_string, merge_query_params

log = logging.getLogger(__name__)

VERBS = ("GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS")
BODY_VERBS = ("POST", "PUT", "PATCH")

JSON_CONTENT_TYPE = "application/json"
MULTIPART_CONTENT_TYPE = "multipart/form-data"

HeadersInput = Iterable[str | tuple[str, str]] | None

_TOKEN_RE = re.compile(r"([?&]token=)[^&#]*")


def default_headers(cfg: ClientConfig) -> list[tuple[str, str]]:
    content_type = MULTIPART_CONTENT_TYPE if cfg.upload else JSON_CONTENT_TYPE
    return [("Accept", JSON_CONTENT_TYPE), ("Content-Type", content_type)]


def parse_headers(headers: HeadersInput) -> list[tuple[str, str | bytes]]:
    out: list[tuple[str, str | bytes]] = []
    for item in headers or ():
        if isinstance(item, str):
            name, sep, value = item.partition(":")
            if not sep:
                continue
            name, value = name.strip(), value.strip()
        else:
            name, value = item
        # httpx only accepts ASCII in str header values
        if not isinstance(value, bytes):
            value = str(value).encode("utf-8")
        out.append((str(name), value))
    return out


def build_url(base_url: str, path: str, query: str = "") -> str:
    if not path.startswith("/"):
        path = "/" + path
    return base_url.rstrip("/") + path + query


def mask_token(url: str) -> str:
    return _TOKEN_RE.sub(r"\1***", url)


def should_decode(decode: bool, http_code: int) -> bool:
    # non-200 bodies are treated as structured error payloads even in raw mode
    if decode:
        return True
    return http_code != 200


def decode_body(raw: str, http_code: int, decode: bool) -> Any:
    if not should_decode(decode, http_code):
        return raw
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


def _split_upload_payload(payload: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> list[tuple[str, Any]]:
    items = payload.items() if isinstance(payload, Mapping) else payload
    parts: list[tuple[str, Any]] = []
    for name, value in items:
        if isinstance(value, (bytes, tuple)) or hasattr(value, "read"):
            parts.append((str(name), value))
        else:
            # plain form field: no filename
            parts.append((str(name), (None, "" if value is None else str(value))))
    return parts


class Transport:
    """Executes exactly one HTTP exchange per call and never raises on HTTP
    or network outcomes; the result is always a ResponseEnvelope."""

    def __init__(self, cfg: ClientConfig, *, transport: httpx.BaseTransport | None = None):
        self._cfg = cfg
        self._transport = transport

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    def _request_headers(self, method: str, headers: HeadersInput) -> list[tuple[str, str | bytes]]:
        extra = parse_headers(headers)
        if method == "OPTIONS":
            return extra
        return default_headers(self._cfg) + extra

    def _encode_body(self, method: str, body: Any, headers: list[tuple[str, str | bytes]]) -> dict[str, Any]:
        if method not in BODY_VERBS or body is None:
            return {}
        if not self._cfg.upload:
            return {"content": json.dumps(body).encode("utf-8")}
        if isinstance(body, (bytes, str)):
            return {"content": body}
        if isinstance(body, (Mapping, list, tuple)):
            # httpx sets multipart/form-data with the boundary itself
            headers[:] = [
                (k, v) for k, v in headers
                if not (k.lower() == "content-type" and v == MULTIPART_CONTENT_TYPE)
            ]
            return {"files": _split_upload_payload(body)}
        raise TypeError(f"unsupported upload payload type: {type(body).__name__}")

    def execute(
            self,
            path: str,
            verb: str = "GET",
            *,
            body: Any = None,
            params: ParamsInput = None,
            reserved: Mapping[str, Any] | None = None,
            headers: HeadersInput = None,
    ) -> ResponseEnvelope:
        method = verb.upper()
        if method not in VERBS:
            raise ValueError(f"unsupported HTTP verb: {verb}")

        cfg = self._cfg
        merged = merge_query_params(params, reserved, token=cfg.token)
        url = build_url(cfg.base_url, path, build_query_string(merged))
        log.debug("%s %s", method, mask_token(url))
        started = time.perf_counter()
        try:
            request_headers = self._request_headers(method, headers)
            body_kwargs = self._encode_body(method, body, request_headers)
            with httpx.Client(transport=self._transport, headers={"User-Agent": cfg.user_agent}) as client:
                request = client.build_request(method, url, headers=request_headers, **body_kwargs)
                response = client.send(request)
        except (httpx.RequestError, httpx.InvalidURL, TypeError, ValueError) as e:
            # ValueError covers UnicodeEncodeError and unusable payloads
            elapsed = time.perf_counter() - started
            log.warning("%s %s failed: %s", method, mask_token(url), e)
            info = None
            if cfg.debug:
                info = {
                    "url": url,
                    "method": method,
                    "http_code": 0,
                    "total_time": elapsed,
                    "error": str(e) or type(e).__name__,
                }
            return ResponseEnvelope(body=None, http_code=0, info=info, error=str(e) or type(e).__name__)

        elapsed = time.perf_counter() - started
        log.debug("%s %s -> %s", method, mask_token(url), response.status_code)

        info = None
        if cfg.debug:
            info = {
                "url": str(response.url),
                "method": method,
                "http_code": response.status_code,
                "content_type": response.headers.get("content-type"),
                "total_time": elapsed,
                "size_download": len(response.content),
                "size_upload": int(request.headers.get("content-length") or 0),
                "redirect_count": len(response.history),
                "http_version": response.http_version,
                "request_headers": list(request.headers.items()),
                "response_headers": dict(response.headers),
            }

        return ResponseEnvelope(
            body=decode_body(response.text, response.status_code, cfg.decode),
            http_code=response.status_code,
            info=info,
        )
