from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from .config_types import ClientConfig
from .envelope import ResponseEnvelope
from .errors import ValidationError
from .errors_utils import raise_for_envelope
from .params import ParamsInput
from .transport import HeadersInput, Transport

LEAD_REQUIRED = {
    "MachineCode": "MachineCode (machine code) is required",
    "Email": "Email (lead e-mail) is required",
    "EmailSequenceCode": "EmailSequenceCode (e-mail sequence code) is required",
    "SequenceLevelCode": "SequenceLevelCode (sequence level code) is required",
}


def _validate_required(data: Mapping[str, Any], required: Mapping[str, str]) -> None:
    errors = [message for field, message in required.items() if not data.get(field)]
    if errors:
        raise ValidationError(errors)


class LeadloversClient:
    def __init__(
            self,
            cfg: ClientConfig | None = None,
            *,
            transport: httpx.BaseTransport | None = None,
    ):
        self._http_transport = transport
        self._t = Transport(cfg or ClientConfig(), transport=transport)

    # --- configuration ---
    @property
    def config(self) -> ClientConfig:
        return self._t.config

    def _reconfigure(self, **changes: Any) -> None:
        self._t = Transport(self.config.replace(**changes), transport=self._http_transport)

    def with_config(self, **changes: Any) -> LeadloversClient:
        """Return an independent client with ``changes`` applied."""
        return LeadloversClient(self.config.replace(**changes), transport=self._http_transport)

    def set_token(self, token: str) -> None:
        self._reconfigure(token=token)

    def set_debug(self, debug: bool) -> None:
        self._reconfigure(debug=debug)

    def set_upload(self, upload: bool) -> None:
        self._reconfigure(upload=upload)

    def set_decode(self, decode: bool) -> None:
        self._reconfigure(decode=decode)

    @property
    def token(self) -> str:
        return self.config.token

    @property
    def debug(self) -> bool:
        return self.config.debug

    @property
    def upload(self) -> bool:
        return self.config.upload

    @property
    def decode(self) -> bool:
        return self.config.decode

    # --- raw requests, no interpretation of the status ---
    def request(
            self,
            verb: str,
            path: str,
            *,
            body: Any = None,
            params: ParamsInput = None,
            headers: HeadersInput = None,
    ) -> ResponseEnvelope:
        return self._t.execute(path, verb, body=body, params=params, headers=headers)

    def get(self, path: str, params: ParamsInput = None, headers: HeadersInput = None) -> ResponseEnvelope:
        return self._t.execute(path, "GET", params=params, headers=headers)

    def post(self, path: str, body: Any = None, params: ParamsInput = None,
             headers: HeadersInput = None) -> ResponseEnvelope:
        return self._t.execute(path, "POST", body=body, params=params, headers=headers)

    def put(self, path: str, body: Any = None, params: ParamsInput = None,
            headers: HeadersInput = None) -> ResponseEnvelope:
        return self._t.execute(path, "PUT", body=body, params=params, headers=headers)

    def patch(self, path: str, body: Any = None, params: ParamsInput = None,
              headers: HeadersInput = None) -> ResponseEnvelope:
        return self._t.execute(path, "PATCH", body=body, params=params, headers=headers)

    def delete(self, path: str, params: ParamsInput = None, headers: HeadersInput = None) -> ResponseEnvelope:
        return self._t.execute(path, "DELETE", params=params, headers=headers)

    def options(self, path: str, params: ParamsInput = None, headers: HeadersInput = None) -> ResponseEnvelope:
        return self._t.execute(path, "OPTIONS", params=params, headers=headers)

    def _call(
            self,
            verb: str,
            path: str,
            *,
            body: Any = None,
            params: ParamsInput = None,
            reserved: Mapping[str, Any] | None = None,
    ) -> ResponseEnvelope:
        envelope = self._t.execute(path, verb, body=body, params=params, reserved=reserved)
        return raise_for_envelope(envelope)

    # --- products / customers ---
    def list_products(self, params: ParamsInput = None) -> ResponseEnvelope:
        return self._call("GET", "products", params=params)

    def create_customer(self, data: dict[str, Any], params: ParamsInput = None) -> ResponseEnvelope:
        _validate_required(data, {
            "Name": "Name (customer name) is required",
            "Email": "Email (customer e-mail) is required",
            "ProductId": "ProductId (product the customer is linked to) is required",
        })
        return self._call("POST", "customer", body=data, params=params)

    # --- leads ---
    def get_lead(self, email: str, params: ParamsInput = None) -> ResponseEnvelope:
        return self._call("GET", "lead", params=params, reserved={"email": email})

    def create_lead(self, data: dict[str, Any], params: ParamsInput = None) -> ResponseEnvelope:
        _validate_required(data, LEAD_REQUIRED)
        return self._call("POST", "lead", body=data, params=params)

    def update_lead(self, data: dict[str, Any], params: ParamsInput = None) -> ResponseEnvelope:
        _validate_required(data, {"Email": LEAD_REQUIRED["Email"]})
        return self._call("PATCH", "lead", body=data, params=params)

    def upsert_lead(self, data: dict[str, Any], params: ParamsInput = None) -> ResponseEnvelope:
        _validate_required(data, LEAD_REQUIRED)
        return self._call("PUT", "lead", body=data, params=params)

    def remove_lead(self, machine_code: int, email: str, params: ParamsInput = None) -> ResponseEnvelope:
        reserved = {"machineCode": int(machine_code), "email": email}
        return self._call("DELETE", "lead", params=params, reserved=reserved)

    def remove_lead_from_funnel(
            self,
            machine_code: int,
            sequence_code: int,
            email: str,
            params: ParamsInput = None,
    ) -> ResponseEnvelope:
        reserved = {
            "machineCode": int(machine_code),
            "sequenceCode": int(sequence_code),
            "email": email,
        }
        return self._call("DELETE", "lead/funnel", params=params, reserved=reserved)

    # --- email sequences ---
    def list_email_sequences(self, machine_code: int, params: ParamsInput = None) -> ResponseEnvelope:
        return self._call("GET", "emailsequences", params=params, reserved={"machineCode": int(machine_code)})

    def list_sequence_levels(self, machine_code: int, sequence_code: int,
                             params: ParamsInput = None) -> ResponseEnvelope:
        reserved = {"machineCode": int(machine_code), "sequenceCode": int(sequence_code)}
        return self._call("GET", "levels", params=params, reserved=reserved)

    # --- tags ---
    def remove_lead_tag(self, data: dict[str, Any], params: ParamsInput = None) -> ResponseEnvelope:
        _validate_required(data, {"Email": LEAD_REQUIRED["Email"], "Tag": "Tag (tag to remove) is required"})
        reserved = {"email": data["Email"], "tag": data["Tag"]}
        return self._call("DELETE", "Tag", params=params, reserved=reserved)
