import abc
import asyncio
import logging
import ssl

import multidict
import yarl

from .models import LoadOutcome, WireRequest, WireResponse
from .request import AsyncRequestEnricher, InvalidUrlError, Request, RequestEnricher, build_url
from .response import Response
from .result import ErrorCode, Failure, HttpError, Result, Success

logger = logging.getLogger(__package__)


def classify_error(error: BaseException) -> ErrorCode:
    if isinstance(error, asyncio.CancelledError):
        return ErrorCode.CANCELLED
    if isinstance(error, TimeoutError):
        return ErrorCode.REQUEST_TIMEOUT
    if isinstance(error, ssl.SSLError):
        return ErrorCode.INSECURE_CONNECTION
    if isinstance(error, ConnectionError):
        return ErrorCode.CANNOT_CONNECT
    return ErrorCode.UNKNOWN


class Loader(abc.ABC):
    """Network capability performing a fully formed request."""

    __slots__ = ()

    @abc.abstractmethod
    async def perform(self, request: WireRequest) -> LoadOutcome: ...

    def classify(self, error: BaseException) -> ErrorCode:
        return classify_error(error)


class Transport(abc.ABC):
    __slots__ = ()

    @abc.abstractmethod
    async def submit(self, request: Request) -> Result: ...


class LoaderTransport(Transport):
    __slots__ = ("__loader", "__request_enricher")

    def __init__(
        self,
        loader: Loader,
        *,
        request_enricher: RequestEnricher | AsyncRequestEnricher | None = None,
    ) -> None:
        self.__loader = loader
        self.__request_enricher = request_enricher

    @property
    def loader(self) -> Loader:
        return self.__loader

    async def submit(self, request: Request) -> Result:
        try:
            request = await self.__enrich(request.copy())
        except asyncio.CancelledError as e:
            return self.__cancelled(request, e)
        except Exception as e:
            logger.warning(
                "Request %s cannot be enriched",
                request,
                exc_info=True,
                extra={"request_method": str(request.method)},
            )
            return Failure(HttpError(ErrorCode.INVALID_REQUEST, request, underlying_error=e))

        try:
            url = build_url(request)
        except InvalidUrlError:
            logger.warning(
                "Request %s has an invalid url",
                request,
                exc_info=True,
                extra={"request_method": str(request.method)},
            )
            return Failure(HttpError(ErrorCode.INVALID_REQUEST, request))
        except Exception as e:
            logger.warning(
                "Request %s has malformed url components",
                request,
                exc_info=True,
                extra={"request_method": str(request.method)},
            )
            return Failure(HttpError(ErrorCode.INVALID_REQUEST, request, underlying_error=e))

        try:
            wire_request = _build_wire_request(request, url)
        except Exception as e:
            logger.warning(
                "Request %s %s has failed: body or headers cannot be encoded",
                request.method,
                url,
                exc_info=True,
                extra={"request_method": str(request.method), "request_url": url},
            )
            return Failure(HttpError(ErrorCode.INVALID_REQUEST, request, underlying_error=e))

        logger.debug(
            "Sending request %s %s",
            request.method,
            url,
            extra={"request_method": str(request.method), "request_url": url},
        )
        try:
            outcome = await self.__loader.perform(wire_request)
        except asyncio.CancelledError as e:
            return self.__cancelled(request, e)
        except Exception as e:
            outcome = LoadOutcome(error=e)

        return self.__to_result(request, wire_request, outcome)

    async def __enrich(self, request: Request) -> Request:
        if self.__request_enricher is None:
            return request

        enriched_request = self.__request_enricher(request)
        if asyncio.iscoroutine(enriched_request):
            enriched_request = await enriched_request
        return enriched_request  # type: ignore

    @staticmethod
    def __cancelled(request: Request, error: asyncio.CancelledError) -> Result:
        # The cancellation is consumed here and reported once as a Failure.
        task = asyncio.current_task()
        if task is not None and task.cancelling():
            task.uncancel()
        logger.info(
            "Request %s has been cancelled",
            request,
            extra={"request_method": str(request.method)},
        )
        return Failure(HttpError(ErrorCode.CANCELLED, request, underlying_error=error))

    def __to_result(self, request: Request, wire_request: WireRequest, outcome: LoadOutcome) -> Result:
        if outcome.response is not None:
            return Success(_build_response(request, outcome.response, outcome.data))

        code = self.__loader.classify(outcome.error) if outcome.error is not None else ErrorCode.UNKNOWN
        logger.warning(
            "Request %s %s has failed: %s",
            wire_request.method,
            wire_request.url,
            code,
            exc_info=outcome.error,
            extra={"request_method": wire_request.method, "request_url": wire_request.url},
        )
        return Failure(HttpError(code, request, underlying_error=outcome.error))


def _build_response(request: Request, wire_response: WireResponse, data: bytes | None) -> Response:
    return Response(request=request, status=wire_response.status, headers=wire_response.headers, body=data)


def _build_wire_request(request: Request, url: yarl.URL) -> WireRequest:
    headers = multidict.CIMultiDict[str](request.headers)
    body: bytes | None = None
    if not request.body.is_empty:
        headers.extend(request.body.additional_headers)
        body = request.body.encode()
    return WireRequest(
        method=request.method.value,
        url=url,
        headers=multidict.CIMultiDictProxy[str](headers),
        body=body,
    )
