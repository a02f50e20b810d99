import logging
from typing import Any

import aiohttp
import multidict

from .models import LoadOutcome, WireRequest, WireResponse
from .result import ErrorCode
from .transport import Loader, classify_error

logger = logging.getLogger(__package__)

MAX_REDIRECTS = 10


class AioHttpLoader(Loader):
    __slots__ = ("__allow_redirects", "__client_session", "__max_redirects", "__timeout")

    def __init__(
        self,
        client_session: aiohttp.ClientSession,
        *,
        timeout: float | None = None,
        allow_redirects: bool = True,
        max_redirects: int = MAX_REDIRECTS,
    ) -> None:
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout should be positive")
        if max_redirects < 1:
            raise ValueError("max_redirects must be at least 1")

        self.__client_session = client_session
        self.__timeout = timeout
        self.__allow_redirects = allow_redirects
        self.__max_redirects = max_redirects

    async def perform(self, request: WireRequest) -> LoadOutcome:
        options: dict[str, Any] = {
            "headers": request.headers,
            "data": request.body,
            "allow_redirects": self.__allow_redirects,
            "max_redirects": self.__max_redirects,
        }
        if self.__timeout is not None:
            options["timeout"] = aiohttp.ClientTimeout(total=self.__timeout)

        try:
            response = await self.__client_session.request(request.method, request.url, **options)
        except (aiohttp.ClientError, TimeoutError) as e:
            return LoadOutcome(error=e)

        async with response:
            wire_response = WireResponse(
                status=response.status,
                headers=multidict.CIMultiDictProxy[str](multidict.CIMultiDict[str](response.headers)),
            )
            try:
                data = await response.read()
            except (aiohttp.ClientError, TimeoutError) as e:
                logger.warning(
                    "Request %s %s has failed: response body cannot be read",
                    request.method,
                    request.url,
                    exc_info=True,
                    extra={
                        "request_method": request.method,
                        "request_url": request.url,
                    },
                )
                return LoadOutcome(response=wire_response, error=e)

        return LoadOutcome(data=data or None, response=wire_response)

    def classify(self, error: BaseException) -> ErrorCode:
        if isinstance(error, aiohttp.ClientSSLError):
            return ErrorCode.INSECURE_CONNECTION
        if isinstance(error, aiohttp.ClientConnectorError):
            return ErrorCode.CANNOT_CONNECT
        if isinstance(error, TimeoutError):
            return ErrorCode.REQUEST_TIMEOUT
        if isinstance(error, aiohttp.InvalidURL):
            return ErrorCode.INVALID_REQUEST
        if isinstance(error, (aiohttp.ClientResponseError, aiohttp.ClientPayloadError, aiohttp.ServerDisconnectedError)):
            return ErrorCode.INVALID_RESPONSE
        return classify_error(error)
