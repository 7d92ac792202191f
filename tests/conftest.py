from __future__ import annotations

import asyncio
import copy
import sys
from collections import defaultdict
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
import pytest_asyncio

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from axiom_client.application.use_cases.session_manager import (  # noqa: E402
    SessionManager,
)
from axiom_client.domain.entities.errors import TransportError  # noqa: E402
from axiom_client.domain.entities.session import Credentials  # noqa: E402
from axiom_client.domain.gateways.transport import ITransport  # noqa: E402
from axiom_client.shared.consts import AxiomEndpoint  # noqa: E402

BASE_URL = "http://axiom.test/AxiomWebAPI"


class FakeTransport(ITransport):
    """In-memory service: responses are scripted per endpoint path."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Optional[Dict[str, Any]]]] = []
        self._queued: Dict[str, List[Any]] = defaultdict(list)
        self._defaults: Dict[str, Any] = {}

    def queue(self, endpoint: AxiomEndpoint, *responses: Any) -> None:
        """Answer the next calls to ``endpoint`` with ``responses`` in order."""
        self._queued[endpoint.value].extend(responses)

    def always(self, endpoint: AxiomEndpoint, response: Any) -> None:
        """Answer ``endpoint`` with ``response`` once the queue is empty."""
        self._defaults[endpoint.value] = response

    def bodies(self, endpoint: AxiomEndpoint) -> List[Optional[Dict[str, Any]]]:
        return [body for path, body in self.calls if path == endpoint.value]

    async def post(self, url: str, body: Optional[Dict[str, Any]] = None) -> Any:
        path = "/" + url.rsplit("/", 1)[-1]
        self.calls.append((path, copy.deepcopy(body)))
        await asyncio.sleep(0)

        if self._queued[path]:
            response = self._queued[path].pop(0)
        elif path in self._defaults:
            response = self._defaults[path]
        else:
            raise TransportError(f"No response scripted for {path}", status_code=404)

        if isinstance(response, BaseException):
            raise response
        if callable(response):
            return response(body)
        return copy.deepcopy(response)


def make_page(
    series: Dict[str, List[Any]], continuation: Optional[str] = None
) -> Dict[str, Any]:
    """Build a ``getTagData2`` page from plain values (None marks missing)."""
    return {
        "data": {
            tag: [
                {"t": f"2024-01-01T{index:02d}:00:00Z", "v": value, "q": 192}
                for index, value in enumerate(values)
            ]
            for tag, values in series.items()
        },
        "continuation": continuation,
    }


@pytest.fixture()
def page_factory() -> Callable[..., Dict[str, Any]]:
    return make_page


@pytest.fixture()
def credentials() -> Credentials:
    return Credentials(base_url=BASE_URL, username="operator", password="s3cret")


@pytest.fixture()
def fake_transport() -> FakeTransport:
    transport = FakeTransport()
    transport.always(AxiomEndpoint.GET_USER_TOKEN, {"userToken": "token-1"})
    transport.always(AxiomEndpoint.REVOKE_USER_TOKEN, {})
    return transport


@pytest.fixture()
def session_manager(fake_transport: FakeTransport) -> SessionManager:
    return SessionManager(fake_transport)


@pytest_asyncio.fixture()
async def active_session(
    session_manager: SessionManager, credentials: Credentials
) -> SessionManager:
    await session_manager.acquire(credentials)
    return session_manager
