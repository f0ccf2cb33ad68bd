from pathlib import Path
import sys
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest

# Ensure project root is importable for tests (backend.app.*)
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


"""
Test configuration

No test touches the network: upstream YouTube / Vimeo / PeerTube endpoints are
served by an in-process httpx.MockTransport, and cache time is driven by a
fake clock handed to ThumbnailCache.
"""


class FakeClock:
    """Manually advanced replacement for time.monotonic."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class Upstream:
    """Canned upstream responses keyed by (method, URL without query).

    Unknown routes answer 404. Every request is recorded in ``calls``.
    """

    def __init__(self) -> None:
        self.calls: List[httpx.Request] = []
        self._routes: Dict[Tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}

    @staticmethod
    def _key(method: str, url: str) -> Tuple[str, str]:
        u = httpx.URL(url)
        return method.upper(), f"{u.scheme}://{u.netloc.decode('ascii')}{u.path}"

    def add(
        self,
        method: str,
        url: str,
        status: int = 200,
        json: Any = None,
        content: Optional[bytes] = None,
        exc: Optional[Exception] = None,
    ) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if exc is not None:
                raise exc
            if json is not None:
                return httpx.Response(status, json=json)
            return httpx.Response(status, content=content or b"")

        self._routes[self._key(method, url)] = respond

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        respond = self._routes.get(self._key(request.method, str(request.url)))
        if respond is None:
            return httpx.Response(404)
        return respond(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def upstream() -> Upstream:
    return Upstream()


@pytest.fixture
async def http_client(upstream: Upstream):
    async with upstream.client() as client:
        yield client


@pytest.fixture
def cache(http_client, clock):
    from backend.app.utils.thumbnail_cache import ThumbnailCache

    return ThumbnailCache(client=http_client, clock=clock)
