from dataclasses import dataclass
from typing import NamedTuple

from multidict import CIMultiDictProxy
from yarl import URL


@dataclass(frozen=True)
class WireRequest:
    __slots__ = ("method", "url", "headers", "body")

    method: str
    url: URL
    headers: CIMultiDictProxy[str]
    body: bytes | None


@dataclass(frozen=True)
class WireResponse:
    __slots__ = ("status", "headers")

    status: int
    headers: CIMultiDictProxy[str]


class LoadOutcome(NamedTuple):
    data: bytes | None = None
    response: WireResponse | None = None
    error: BaseException | None = None
