import logging
import ssl
from typing import Any

import httpx
import multidict

from .models import LoadOutcome, WireRequest, WireResponse
from .result import ErrorCode
from .transport import Loader, classify_error

logger = logging.getLogger(__package__)


class HttpxLoader(Loader):
    __slots__ = ("__client", "__follow_redirects", "__timeout")

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        timeout: float | None = None,
        follow_redirects: bool = True,
    ) -> None:
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout should be positive")

        self.__client = client
        self.__timeout = timeout
        self.__follow_redirects = follow_redirects

    async def perform(self, request: WireRequest) -> LoadOutcome:
        options: dict[str, Any] = {}
        if self.__timeout is not None:
            options["timeout"] = self.__timeout

        client_request = self.__client.build_request(
            method=request.method,
            url=httpx.URL(str(request.url)),
            content=request.body,
            headers=list(request.headers.items()),
            **options,
        )

        try:
            client_response = await self.__client.send(
                client_request, follow_redirects=self.__follow_redirects, stream=True
            )
        except httpx.HTTPError as e:
            return LoadOutcome(error=e)

        try:
            wire_response = WireResponse(
                status=client_response.status_code,
                headers=multidict.CIMultiDictProxy[str](multidict.CIMultiDict[str](client_response.headers.multi_items())),
            )
            try:
                data = await client_response.aread()
            except httpx.HTTPError as e:
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
        finally:
            await client_response.aclose()

        return LoadOutcome(data=data or None, response=wire_response)

    def classify(self, error: BaseException) -> ErrorCode:
        if isinstance(error, httpx.ConnectError):
            if _is_caused_by_ssl_error(error):
                return ErrorCode.INSECURE_CONNECTION
            return ErrorCode.CANNOT_CONNECT
        if isinstance(error, httpx.TimeoutException):
            return ErrorCode.REQUEST_TIMEOUT
        if isinstance(error, (httpx.TooManyRedirects, httpx.RemoteProtocolError, httpx.DecodingError)):
            return ErrorCode.INVALID_RESPONSE
        if isinstance(error, (httpx.UnsupportedProtocol, httpx.LocalProtocolError)):
            return ErrorCode.INVALID_REQUEST
        return classify_error(error)


def _is_caused_by_ssl_error(error: BaseException) -> bool:
    seen: set[int] = set()
    cause: BaseException | None = error
    while cause is not None and id(cause) not in seen:
        if isinstance(cause, ssl.SSLError):
            return True
        seen.add(id(cause))
        cause = cause.__cause__ or cause.__context__
    return False
