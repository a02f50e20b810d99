import sys

from .base import EMPTY_HEADERS, Header, Method, Status
from .body import Body, EmptyBody, EncodingError, FormBody, JsonBody, RawBody, percent_encode
from .models import LoadOutcome, WireRequest, WireResponse
from .request import (
    AsyncRequestEnricher,
    InvalidUrlError,
    Request,
    RequestEnricher,
    build_url,
    delete,
    get,
    head,
    patch,
    patch_json,
    post,
    post_form,
    post_json,
    put,
    put_json,
    request,
    request_json,
)
from .response import Response, UnexpectedContentTypeError
from .result import ErrorCode, Failure, HttpError, Result, Success
from .setup import setup
from .transport import Loader, LoaderTransport, Transport, classify_error

__all__: tuple[str, ...] = (
    "AsyncRequestEnricher",
    "Body",
    "EMPTY_HEADERS",
    "EmptyBody",
    "EncodingError",
    "ErrorCode",
    "Failure",
    "FormBody",
    "Header",
    "HttpError",
    "InvalidUrlError",
    "JsonBody",
    "LoadOutcome",
    "Loader",
    "LoaderTransport",
    "Method",
    "RawBody",
    "Request",
    "RequestEnricher",
    "Response",
    "Result",
    "Status",
    "Success",
    "Transport",
    "UnexpectedContentTypeError",
    "WireRequest",
    "WireResponse",
    "build_url",
    "classify_error",
    "delete",
    "get",
    "head",
    "patch",
    "patch_json",
    "percent_encode",
    "post",
    "post_form",
    "post_json",
    "put",
    "put_json",
    "request",
    "request_json",
    "setup",
)

try:
    import aiohttp  # noqa

    from .aiohttp import AioHttpLoader

    __all__ += ("AioHttpLoader",)  # type: ignore
except ImportError:
    pass

try:
    import httpx  # noqa

    from .httpx import HttpxLoader

    __all__ += ("HttpxLoader",)  # type: ignore
except ImportError:
    pass

__version__ = "0.1.0"

version = f"{__version__}, Python {sys.version}"
