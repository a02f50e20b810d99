import asyncio
import logging
from collections.abc import AsyncIterator

import aiohttp
import aiohttp.test_utils
import aiohttp.web
import aiohttp.web_request
import aiohttp.web_response
import multidict
import pytest

import typed_http

logging.basicConfig(level="DEBUG")


class FakeLoader(typed_http.Loader):
    __slots__ = ("_outcomes", "requests", "delay")

    def __init__(self, *outcomes: typed_http.LoadOutcome | BaseException, delay: float = 0) -> None:
        self._outcomes = list(reversed(outcomes))
        self.requests: list[typed_http.WireRequest] = []
        self.delay = delay

    @property
    def calls(self) -> int:
        return len(self.requests)

    async def perform(self, request: typed_http.WireRequest) -> typed_http.LoadOutcome:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if not self._outcomes:
            raise RuntimeError("No outcome left")

        outcome = self._outcomes.pop()
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def ok(body: bytes | None = None, status: int = 200, **headers: str) -> typed_http.LoadOutcome:
    return typed_http.LoadOutcome(
        data=body,
        response=typed_http.WireResponse(
            status=status,
            headers=multidict.CIMultiDictProxy[str](multidict.CIMultiDict[str](headers)),
        ),
    )


@pytest.fixture
async def server() -> AsyncIterator[aiohttp.test_utils.TestServer]:
    async def echo(request: aiohttp.web_request.Request) -> aiohttp.web_response.Response:
        return aiohttp.web_response.json_response(
            {
                "method": request.method,
                "path": request.path,
                "query": [[k, v] for k, v in request.query.items()],
                "headers": {k: request.headers.getall(k) for k in request.headers.keys()},
                "body": (await request.read()).decode("utf-8"),
            }
        )

    async def status(request: aiohttp.web_request.Request) -> aiohttp.web_response.Response:
        return aiohttp.web_response.Response(status=int(request.match_info["status"]))

    async def slow(request: aiohttp.web_request.Request) -> aiohttp.web_response.Response:
        await asyncio.sleep(float(request.query.get("delay", "1")))
        return aiohttp.web_response.Response(text="slow")

    async def redirect(request: aiohttp.web_request.Request) -> aiohttp.web_response.Response:
        raise aiohttp.web.HTTPFound("/redirect")

    app = aiohttp.web.Application()
    app.router.add_route("*", "/echo", echo)
    app.router.add_get("/status/{status}", status)
    app.router.add_get("/slow", slow)
    app.router.add_get("/redirect", redirect)

    async with aiohttp.test_utils.TestServer(app) as test_server:
        yield test_server


def request_to(server: aiohttp.test_utils.TestServer, path: str, **kwargs: object) -> typed_http.Request:
    return typed_http.Request(scheme="http", host=server.host, port=server.port, path=path, **kwargs)  # type: ignore
