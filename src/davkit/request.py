"""Build webdav requests for the operations."""
import os
from functools import partial
from itertools import takewhile
from typing import (
    TYPE_CHECKING,
    Any,
    AsyncIterator,
    Iterator,
    List,
    NamedTuple,
    Union,
)

import anyio

from .http import HTTPRequest
from .http import Method as HTTPMethod
from .urls import join_url

if TYPE_CHECKING:
    from os import PathLike

    from ._types import HeaderPair
    from .config import Config


DEFAULT_CHUNK_SIZE = 2 ** 22


class FileContent(NamedTuple):
    """Content to upload, read from a local file."""

    path: Union[str, "PathLike[str]"]


class BytesContent(NamedTuple):
    """Content to upload, given in memory."""

    data: bytes


ContentSource = Union[FileContent, BytesContent, bytes, bytearray]


def iter_file(
    path: Union[str, "PathLike[str]"], chunk_size: int = None
) -> Iterator[bytes]:
    """Read file in chunks, the file is closed after the last chunk."""
    with open(path, mode="rb") as fobj:
        func = partial(fobj.read, chunk_size or DEFAULT_CHUNK_SIZE)
        yield from takewhile(bool, iter(func, None))


async def aiter_file(
    path: Union[str, "PathLike[str]"], chunk_size: int = None
) -> AsyncIterator[bytes]:
    """Async version of `iter_file`, reads happen in a worker thread."""
    async with await anyio.open_file(path, mode="rb") as fobj:
        while True:
            chunk = await fobj.read(chunk_size or DEFAULT_CHUNK_SIZE)
            if not chunk:
                break
            yield chunk


def _build(
    config: "Config",
    method: str,
    path: str,
    headers: List["HeaderPair"] = None,
    add_trailing_slash: bool = False,
    **kwargs: Any,
) -> HTTPRequest:
    url = join_url(config.base_url, path, add_trailing_slash)
    return HTTPRequest(
        method, url, headers=[*config.headers, *(headers or [])], **kwargs
    )


def get(config: "Config", path: str) -> HTTPRequest:
    """GET request for a resource."""
    return _build(config, HTTPMethod.GET, path)


def put(
    config: "Config",
    path: str,
    content: ContentSource,
    chunk_size: int = None,
    asynchronous: bool = False,
) -> HTTPRequest:
    """PUT request uploading the content to the path.

    Files are streamed, we set the Content-Length from the size of the file
    to avoid chunked transfers which a lot of servers don't support.
    Pass `asynchronous` when the request is sent with an async client.
    """
    if isinstance(content, (bytes, bytearray)):
        content = BytesContent(bytes(content))

    if isinstance(content, BytesContent):
        return _build(config, HTTPMethod.PUT, path, content=content.data)
    if isinstance(content, FileContent):
        size = os.path.getsize(content.path)
        reader = aiter_file if asynchronous else iter_file
        return _build(
            config,
            HTTPMethod.PUT,
            path,
            headers=[("Content-Length", str(size))],
            content=reader(content.path, chunk_size=chunk_size),
        )
    raise TypeError(f"unsupported content: {type(content)!r}")


def _transfer(
    config: "Config",
    method: str,
    source: str,
    dest: str,
    overwrite: bool,
) -> HTTPRequest:
    assert method in {HTTPMethod.MOVE, HTTPMethod.COPY}

    to_url = join_url(config.base_url, dest)
    headers = [
        ("Destination", str(to_url)),
        ("Overwrite", "T" if overwrite else "F"),
    ]
    return _build(config, method, source, headers=headers)


def move(
    config: "Config", source: str, dest: str, overwrite: bool = True
) -> HTTPRequest:
    """MOVE request, with or without overwriting the destination."""
    return _transfer(config, HTTPMethod.MOVE, source, dest, overwrite)


def copy(
    config: "Config", source: str, dest: str, overwrite: bool = True
) -> HTTPRequest:
    """COPY request, with or without overwriting the destination."""
    return _transfer(config, HTTPMethod.COPY, source, dest, overwrite)


def delete(config: "Config", path: str) -> HTTPRequest:
    """DELETE request for a resource or a collection."""
    return _build(config, HTTPMethod.DELETE, path)


def mkcol(config: "Config", path: str) -> HTTPRequest:
    """MKCOL request, always on the url of a collection (ending with /)."""
    return _build(config, HTTPMethod.MKCOL, path, add_trailing_slash=True)


BUILDERS = {
    HTTPMethod.GET: get,
    HTTPMethod.PUT: put,
    HTTPMethod.MOVE: move,
    HTTPMethod.COPY: copy,
    HTTPMethod.DELETE: delete,
    HTTPMethod.MKCOL: mkcol,
}


def build_request(
    config: "Config", operation: str, *operands: Any, **kwargs: Any
) -> HTTPRequest:
    """Builds request for the operation with the given operands."""
    try:
        builder = BUILDERS[operation]
    except KeyError:
        raise ValueError(f"unsupported operation: {operation}") from None
    return builder(config, *operands, **kwargs)  # type: ignore[operator]
