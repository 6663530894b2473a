from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from .version import __version__

API_URL = "http://llapi.leadlovers.com/webapi"


@dataclass(frozen=True)
class ClientConfig:
    token: str = ""
    debug: bool = False
    upload: bool = False
    decode: bool = True
    base_url: str = API_URL
    user_agent: str = f"leadlovers-client/{__version__}"

    def replace(self, **changes) -> ClientConfig:
        return dataclasses.replace(self, **changes)
