import collections.abc
from typing import Any

from .request import AsyncRequestEnricher, Request, RequestEnricher
from .transport import Loader, LoaderTransport, Transport

MISSING: Any = object()


def setup(
    *,
    loader: Loader = MISSING,
    client_session: Any = MISSING,
    async_client: Any = MISSING,
    timeout: float | None = None,
    request_enricher: RequestEnricher | AsyncRequestEnricher | None = None,
    default_headers: collections.abc.Mapping[str, str] | None = None,
) -> Transport:
    provided = [x for x in (loader, client_session, async_client) if x is not MISSING]
    if not provided:
        raise ValueError("Either loader, client_session or async_client must be provided")
    if len(provided) > 1:
        raise ValueError("Only one of loader, client_session or async_client must be provided")

    if client_session is not MISSING:
        from .aiohttp import AioHttpLoader

        loader = AioHttpLoader(client_session, timeout=timeout)
    elif async_client is not MISSING:
        from .httpx import HttpxLoader

        loader = HttpxLoader(async_client, timeout=timeout)

    return LoaderTransport(loader, request_enricher=_get_enricher(request_enricher, default_headers))


def _get_enricher(
    enricher: RequestEnricher | AsyncRequestEnricher | None,
    default_headers: collections.abc.Mapping[str, str] | None,
) -> RequestEnricher | AsyncRequestEnricher | None:
    if not default_headers:
        return enricher

    def _add_default_headers(r: Request) -> Request:
        present = {name.lower() for name in r.headers}
        for name, value in default_headers.items():
            if name.lower() not in present:
                r.headers[name] = value
        return r

    if enricher is None:
        return _add_default_headers

    async def _enrich(r: Request) -> Request:
        enriched = enricher(_add_default_headers(r))
        if isinstance(enriched, collections.abc.Awaitable):
            return await enriched
        return enriched

    return _enrich
