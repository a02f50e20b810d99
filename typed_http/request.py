import collections.abc
import json
from typing import Any

import yarl

from .base import Method
from .body import Body, EmptyBody, FormBody, FormValues, JsonBody, RawBody

DEFAULT_SCHEME = "https"

QueryParameters = collections.abc.Mapping[str, Any] | collections.abc.Iterable[tuple[str, Any]]
Headers = collections.abc.Mapping[str, str]

RequestEnricher = collections.abc.Callable[["Request"], "Request"]
AsyncRequestEnricher = collections.abc.Callable[["Request"], collections.abc.Awaitable["Request"]]


class InvalidUrlError(ValueError):
    """Request components do not form an absolute url"""


class Request:
    """Request line, headers and body of a single exchange.

    Fields may be changed freely until the request is submitted. Transports
    work on copies, so the caller's instance is never modified.
    """

    __slots__ = (
        "method",
        "__scheme",
        "host",
        "port",
        "path",
        "__query_parameters",
        "headers",
        "body",
    )

    def __init__(
        self,
        *,
        method: Method | str = Method.GET,
        scheme: str | None = DEFAULT_SCHEME,
        host: str | None = None,
        port: int | None = None,
        path: str = "",
        query_parameters: QueryParameters | None = None,
        headers: Headers | None = None,
        body: Body | None = None,
    ) -> None:
        self.method = method if isinstance(method, Method) else Method(method)
        self.scheme = scheme
        self.host = host
        self.port = port
        self.path = path
        self.query_parameters = query_parameters
        self.headers: dict[str, str] = dict(headers) if headers is not None else {}
        self.body: Body = body if body is not None else EmptyBody()

    @property
    def query_parameters(self) -> tuple[tuple[str, Any], ...] | None:
        return self.__query_parameters

    @query_parameters.setter
    def query_parameters(self, value: QueryParameters | None) -> None:
        self.__query_parameters = _to_pairs(value) if value is not None else None

    @property
    def scheme(self) -> str:
        return self.__scheme

    @scheme.setter
    def scheme(self, value: str | None) -> None:
        self.__scheme = value or DEFAULT_SCHEME

    def copy(self) -> "Request":
        return Request(
            method=self.method,
            scheme=self.scheme,
            host=self.host,
            port=self.port,
            path=self.path,
            query_parameters=self.query_parameters,
            headers=self.headers,
            body=self.body,
        )

    __copy__ = copy

    def update_headers(self, headers: Headers) -> "Request":
        updated = self.copy()
        updated.headers.update(headers)
        return updated

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Request):
            return NotImplemented
        return (
            self.method == other.method
            and self.scheme == other.scheme
            and self.host == other.host
            and self.port == other.port
            and self.path == other.path
            and self.query_parameters == other.query_parameters
            and self.headers == other.headers
            and self.body == other.body
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"<Request [{self.method} {self.scheme}://{self.host or ''}{self.path}]>"


def build_url(request: Request) -> yarl.URL:
    if not request.host:
        raise InvalidUrlError("Request has no host")
    if request.path and not request.path.startswith("/"):
        raise InvalidUrlError(f"Path {request.path!r} should start with '/'")

    try:
        url = yarl.URL.build(
            scheme=request.scheme,
            host=request.host,
            port=request.port,
            path=request.path,
        )
        if request.query_parameters is not None:
            query = flatten_query_parameters(request.query_parameters)
            if query:
                url = url.with_query(query)
    except (TypeError, ValueError) as e:
        raise InvalidUrlError(str(e)) from e

    if not url.is_absolute():
        raise InvalidUrlError(f"Url {url} is not absolute")
    return url


def flatten_query_parameters(query_parameters: QueryParameters) -> list[tuple[str, str]]:
    """Expands iterable values into repeated names and drops ``None`` values."""
    query: list[tuple[str, str]] = []
    for name, value in _to_pairs(query_parameters):
        if value is None:
            continue
        if not isinstance(value, str) and isinstance(value, collections.abc.Iterable):
            query.extend((name, str(v)) for v in value if v is not None)
        else:
            query.append((name, str(value)))
    return query


def _to_pairs(query_parameters: QueryParameters) -> tuple[tuple[str, Any], ...]:
    # Mapping.items() of a multidict yields every value of a repeated name.
    pairs = query_parameters.items() if isinstance(query_parameters, collections.abc.Mapping) else query_parameters
    return tuple((name, value) for name, value in pairs)


def request(
    method: Method | str,
    url: str | yarl.URL,
    *,
    headers: Headers | None = None,
    body: Body | bytes | None = None,
    query_parameters: QueryParameters | None = None,
) -> Request:
    parsed = yarl.URL(url) if isinstance(url, str) else url
    if not parsed.is_absolute():
        raise InvalidUrlError(f"Url {url} should be absolute")

    query: list[tuple[str, Any]] = list(parsed.query.items())
    if query_parameters is not None:
        query.extend(
            query_parameters.items() if isinstance(query_parameters, collections.abc.Mapping) else query_parameters
        )

    return Request(
        method=method,
        scheme=parsed.scheme,
        host=parsed.host,
        port=parsed.explicit_port,
        path=parsed.path,
        query_parameters=query or None,
        headers=headers,
        body=RawBody(body) if isinstance(body, bytes) else body,
    )


build_request = request


def get(
    url: str | yarl.URL, *, headers: Headers | None = None, query_parameters: QueryParameters | None = None
) -> Request:
    return request(Method.GET, url, headers=headers, query_parameters=query_parameters)


def head(
    url: str | yarl.URL, *, headers: Headers | None = None, query_parameters: QueryParameters | None = None
) -> Request:
    return request(Method.HEAD, url, headers=headers, query_parameters=query_parameters)


def delete(
    url: str | yarl.URL, *, headers: Headers | None = None, query_parameters: QueryParameters | None = None
) -> Request:
    return request(Method.DELETE, url, headers=headers, query_parameters=query_parameters)


def post(
    url: str | yarl.URL,
    body: Body | bytes | None = None,
    *,
    headers: Headers | None = None,
    query_parameters: QueryParameters | None = None,
) -> Request:
    return request(Method.POST, url, headers=headers, body=body, query_parameters=query_parameters)


def put(
    url: str | yarl.URL,
    body: Body | bytes | None = None,
    *,
    headers: Headers | None = None,
    query_parameters: QueryParameters | None = None,
) -> Request:
    return request(Method.PUT, url, headers=headers, body=body, query_parameters=query_parameters)


def patch(
    url: str | yarl.URL,
    body: Body | bytes | None = None,
    *,
    headers: Headers | None = None,
    query_parameters: QueryParameters | None = None,
) -> Request:
    return request(Method.PATCH, url, headers=headers, body=body, query_parameters=query_parameters)


def post_json(
    url: str | yarl.URL,
    data: Any,
    *,
    headers: Headers | None = None,
    query_parameters: QueryParameters | None = None,
    dumps: collections.abc.Callable[[Any], str | bytes] = json.dumps,
    encoding: str = "utf-8",
) -> Request:
    return request_json(
        Method.POST, url, data, headers=headers, query_parameters=query_parameters, dumps=dumps, encoding=encoding
    )


def put_json(
    url: str | yarl.URL,
    data: Any,
    *,
    headers: Headers | None = None,
    query_parameters: QueryParameters | None = None,
    dumps: collections.abc.Callable[[Any], str | bytes] = json.dumps,
    encoding: str = "utf-8",
) -> Request:
    return request_json(
        Method.PUT, url, data, headers=headers, query_parameters=query_parameters, dumps=dumps, encoding=encoding
    )


def patch_json(
    url: str | yarl.URL,
    data: Any,
    *,
    headers: Headers | None = None,
    query_parameters: QueryParameters | None = None,
    dumps: collections.abc.Callable[[Any], str | bytes] = json.dumps,
    encoding: str = "utf-8",
) -> Request:
    return request_json(
        Method.PATCH, url, data, headers=headers, query_parameters=query_parameters, dumps=dumps, encoding=encoding
    )


def request_json(
    method: Method | str,
    url: str | yarl.URL,
    data: Any,
    *,
    headers: Headers | None = None,
    query_parameters: QueryParameters | None = None,
    dumps: collections.abc.Callable[[Any], str | bytes] = json.dumps,
    encoding: str = "utf-8",
) -> Request:
    return request(
        method,
        url,
        headers=headers,
        body=JsonBody(data, dumps=dumps, encoding=encoding),
        query_parameters=query_parameters,
    )


def post_form(
    url: str | yarl.URL,
    values: FormValues,
    *,
    headers: Headers | None = None,
    query_parameters: QueryParameters | None = None,
) -> Request:
    return request(Method.POST, url, headers=headers, body=FormBody(values), query_parameters=query_parameters)
