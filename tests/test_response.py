import multidict
import pytest

import typed_http

REQUEST = typed_http.Request(host="example.com", path="/users")


def build_response(body: bytes | None, content_type: str | None = None, status: int = 200) -> typed_http.Response:
    headers = multidict.CIMultiDict[str]()
    if content_type is not None:
        headers.add(typed_http.Header.CONTENT_TYPE, content_type)
    return typed_http.Response(
        request=REQUEST,
        status=status,
        headers=multidict.CIMultiDictProxy[str](headers),
        body=body,
    )


def test_response_fields() -> None:
    response = build_response(b"{}", "application/json", status=404)

    assert response.request is REQUEST
    assert response.status == typed_http.Status(404)
    assert response.message == "not found"
    assert response.headers["content-type"] == "application/json"
    assert response.body == b"{}"


def test_response_without_body() -> None:
    response = build_response(None)

    assert response.body is None
    assert response.text() == ""
    assert response.json(content_type=None) is None


@pytest.mark.parametrize(
    "is_json, response_content_type",
    [
        (False, ""),
        (False, "application/xml"),
        (True, "application/json"),
        (True, "application/problem+json"),
        (True, "application/json;charset=uft-8"),
        (True, "application/problem+json;charset=uft-8"),
    ],
)
def test_response_is_json(is_json: bool, response_content_type: str) -> None:
    assert build_response(b"", response_content_type).is_json == is_json


def test_json() -> None:
    response = build_response(b'{"name": "Arthur"}', "application/json; charset=utf-8")

    assert response.json() == {"name": "Arthur"}


def test_json_unexpected_content_type() -> None:
    response = build_response(b'{"name": "Arthur"}', "text/plain")

    with pytest.raises(typed_http.UnexpectedContentTypeError):
        response.json()
    assert response.json(content_type=None) == {"name": "Arthur"}


def test_text_uses_charset() -> None:
    response = build_response("Jörg".encode("latin-1"), "text/plain; charset=latin-1")

    assert response.text() == "Jörg"
    assert build_response("Jörg".encode("utf-8"), "text/plain").text() == "Jörg"
