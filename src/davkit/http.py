"""HTTP related utilities."""

from typing import TYPE_CHECKING, Any, Awaitable, Union

import httpx

if TYPE_CHECKING:
    from ._types import URLTypes

HTTPRequestError = httpx.RequestError
HTTPResponse = httpx.Response
HTTPRequest = httpx.Request


class Method:
    """HTTP methods, trying to prevent mistakes with this."""

    MKCOL = "MKCOL"
    COPY = "COPY"
    MOVE = "MOVE"
    DELETE = "DELETE"
    GET = "GET"
    PUT = "PUT"


def request(method: str):  # type: ignore[no-untyped-def]
    """Extending with new verb `method`."""

    def func(
        client: Union["Client", "AsyncClient"], url: "URLTypes", **kwargs: Any
    ) -> Union["HTTPResponse", Awaitable["HTTPResponse"]]:
        return client.request(method, url, **kwargs)

    return func


class Client(httpx.Client):
    """HTTP client with additional verbs for the Webdav."""

    mkcol = request(Method.MKCOL)
    copy = request(Method.COPY)
    move = request(Method.MOVE)


class AsyncClient(httpx.AsyncClient):
    """Async HTTP client with additional verbs for the Webdav."""

    mkcol = request(Method.MKCOL)
    copy = request(Method.COPY)
    move = request(Method.MOVE)
