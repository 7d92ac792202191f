"""Domain entities for authentication and session state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from axiom_client.shared.consts import DEFAULT_APPLICATION, DEFAULT_TIME_ZONE


class TokenState(str, Enum):
    """Lifecycle of a session or live data token."""

    ABSENT = "absent"
    ACTIVE = "active"
    REVOKED = "revoked"


@dataclass(frozen=True, slots=True)
class Credentials:
    """Connection details supplied once per session attempt."""

    base_url: str
    username: str
    password: str = field(repr=False)

    def url_for(self, endpoint: str) -> str:
        return f"{self.base_url.rstrip('/')}{endpoint}"


@dataclass(frozen=True, slots=True)
class SessionOptions:
    """Optional fields of the authentication request."""

    application: str = DEFAULT_APPLICATION
    time_zone: str = DEFAULT_TIME_ZONE
