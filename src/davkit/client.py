"""Client for the webdav."""
import logging
import threading
from typing import TYPE_CHECKING, Any, List, Optional, Type

from .config import Config, config_provider
from .http import AsyncClient as AsyncHTTPClient
from .http import Client as HTTPClient
from .http import HTTPRequestError
from .http import Method as HTTPMethod
from .request import DEFAULT_CHUNK_SIZE, build_request
from .results import ErrorKind, Ok, Outcome, interpret, transport_failure
from .urls import URL, iter_ancestors, join_url

if TYPE_CHECKING:
    from types import TracebackType

    from .config import ConfigTypes
    from .http import HTTPRequest, HTTPResponse
    from .request import ContentSource
    from .results import Result


logger = logging.getLogger(__name__)


def collection_steps(path: str) -> List[str]:
    """Collections to create, ancestors first.

    Root (or an empty path) is the base collection itself.
    """
    return iter_ancestors(path) or [path]


def is_fatal_step(result: "Result") -> bool:
    """Whether a step of mkcol_recursive should abort the whole operation.

    A collection that already exists is as good as created.
    """
    return not result.ok and result.kind is not ErrorKind.METHOD_NOT_ALLOWED


class BaseClient:
    """Shared bits between the sync and the async client."""

    def __init__(
        self,
        config: "ConfigTypes",
        http_client: Any = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        """Instantiate client for webdav.

        Examples:
            >>> client = Client(Config.new("https://webdav.example.org"))
            >>> client.get("images/foobar.png")

        Args:
            config: configuration of the client, or a callable returning
                one. The callable is invoked once for every operation, which
                lets the configuration be swapped at runtime.
            http_client: http client to use instead, useful in mocking.
                If not provided, one is created from `transport_options`
                of the first config and is reused afterwards.
            chunk_size: size of chunks to read local files with on upload.
        """
        self.get_config = config_provider(config)
        self._http = http_client
        self._owns_http = http_client is None
        self.chunk_size = chunk_size

    @property
    def config(self) -> Config:
        """Current configuration of the client."""
        return self.get_config()

    def join_url(self, path: str) -> URL:
        """Join resource path with base url of the webdav server."""
        return join_url(self.config.base_url, path)

    def _prepare(
        self, config: Config, operation: str, path: str, *operands: Any
    ) -> "HTTPRequest":
        request = build_request(config, operation, path, *operands)
        logger.debug("%s %s", request.method, request.url)
        return request

    @staticmethod
    def _interpret(
        operation: str, path: str, response: "HTTPResponse"
    ) -> "Result":
        result = interpret(
            operation, response.status_code, response.content, path=path
        )
        if result.ok:
            logger.debug(
                "%s %s: %s", operation, path, response.status_code
            )
        else:
            logger.debug(
                "%s %s failed with %s (%s)",
                operation,
                path,
                result.kind.value,
                response.status_code,
            )
        return result

    @staticmethod
    def _transport_failure(
        operation: str, path: str, exc: Exception
    ) -> "Result":
        logger.warning(
            "%s %s failed: %s: %s", operation, path, type(exc).__name__, exc
        )
        return transport_failure(exc, path=path)


class Client(BaseClient):
    """Provides higher level APIs for interacting with Webdav server.

    Every operation returns a result, either `Ok` or `Error`, and never
    raises on remote or network failures. Use `result.unwrap()` to get the
    value or an exception instead.
    """

    def __init__(
        self,
        config: "ConfigTypes",
        http_client: HTTPClient = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        """Instantiate client for webdav, see `BaseClient`."""
        super().__init__(config, http_client, chunk_size)
        self._http_lock = threading.Lock()

    @property
    def http(self) -> HTTPClient:
        """The http client requests are sent with."""
        if self._http is None:
            with self._http_lock:
                if self._http is None:
                    self._http = HTTPClient(**self.config.options())
        return self._http

    def close(self) -> None:
        """Close the http client, if it was created by us."""
        if self._owns_http and self._http is not None:
            self._http.close()
            self._http = None

    def __enter__(self) -> "Client":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional["TracebackType"],
    ) -> None:
        self.close()

    def request(
        self, config: Config, operation: str, path: str, *operands: Any
    ) -> "Result":
        """Sends request for the operation and interprets the response.

        Any `httpx.RequestError`, including undecodable bodies and redirect
        loops, is never retried and ends up as `ErrorKind.TRANSPORT_FAILURE`.
        """
        operands += (self.chunk_size,) if operation == HTTPMethod.PUT else ()
        request = self._prepare(config, operation, path, *operands)
        try:
            response = self.http.send(request)
        except HTTPRequestError as exc:
            return self._transport_failure(operation, path, exc)
        return self._interpret(operation, path, response)

    def get(self, path: str) -> "Result":
        """Get content of a resource, as bytes."""
        return self.request(self.config, HTTPMethod.GET, path)

    def put(self, path: str, content: "ContentSource") -> "Result":
        """Upload content to the path, from a file or from bytes."""
        return self.request(self.config, HTTPMethod.PUT, path, content)

    def move(
        self, source: str, dest: str, overwrite: bool = True
    ) -> "Result":
        """Move resource to a new destination (with or without overwriting)."""
        return self.request(
            self.config, HTTPMethod.MOVE, source, dest, overwrite
        )

    def copy(
        self, source: str, dest: str, overwrite: bool = True
    ) -> "Result":
        """Copy resource (with or without overwriting the destination)."""
        return self.request(
            self.config, HTTPMethod.COPY, source, dest, overwrite
        )

    def delete(self, path: str) -> "Result":
        """Remove a resource or a collection."""
        return self.request(self.config, HTTPMethod.DELETE, path)

    def mkcol(self, path: str) -> "Result":
        """Create a collection."""
        return self.request(self.config, HTTPMethod.MKCOL, path)

    def mkcol_recursive(self, path: str) -> "Result":
        """Create a collection, along with the missing parents.

        Parents are created one by one, stopping at the first failure.
        Collections created up to that point are left as they are.
        """
        config = self.config
        for step in collection_steps(path):
            result = self.request(config, HTTPMethod.MKCOL, step)
            if is_fatal_step(result):
                return result
        return Ok(Outcome.CREATED)


class AsyncClient(BaseClient):
    """Async version of the `Client`, built on top of `httpx.AsyncClient`."""

    def __init__(
        self,
        config: "ConfigTypes",
        http_client: AsyncHTTPClient = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        """Instantiate async client for webdav, see `BaseClient`."""
        super().__init__(config, http_client, chunk_size)

    @property
    def http(self) -> AsyncHTTPClient:
        """The async http client requests are sent with."""
        if self._http is None:
            self._http = AsyncHTTPClient(**self.config.options())
        return self._http

    async def aclose(self) -> None:
        """Close the http client, if it was created by us."""
        if self._owns_http and self._http is not None:
            await self._http.aclose()
            self._http = None

    async def __aenter__(self) -> "AsyncClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional["TracebackType"],
    ) -> None:
        await self.aclose()

    async def request(
        self, config: Config, operation: str, path: str, *operands: Any
    ) -> "Result":
        """Sends request for the operation and interprets the response."""
        if operation == HTTPMethod.PUT:
            operands += (self.chunk_size, True)
        request = self._prepare(config, operation, path, *operands)
        try:
            response = await self.http.send(request)
        except HTTPRequestError as exc:
            return self._transport_failure(operation, path, exc)
        return self._interpret(operation, path, response)

    async def get(self, path: str) -> "Result":
        """Get content of a resource, as bytes."""
        return await self.request(self.config, HTTPMethod.GET, path)

    async def put(self, path: str, content: "ContentSource") -> "Result":
        """Upload content to the path, from a file or from bytes."""
        return await self.request(self.config, HTTPMethod.PUT, path, content)

    async def move(
        self, source: str, dest: str, overwrite: bool = True
    ) -> "Result":
        """Move resource to a new destination (with or without overwriting)."""
        return await self.request(
            self.config, HTTPMethod.MOVE, source, dest, overwrite
        )

    async def copy(
        self, source: str, dest: str, overwrite: bool = True
    ) -> "Result":
        """Copy resource (with or without overwriting the destination)."""
        return await self.request(
            self.config, HTTPMethod.COPY, source, dest, overwrite
        )

    async def delete(self, path: str) -> "Result":
        """Remove a resource or a collection."""
        return await self.request(self.config, HTTPMethod.DELETE, path)

    async def mkcol(self, path: str) -> "Result":
        """Create a collection."""
        return await self.request(self.config, HTTPMethod.MKCOL, path)

    async def mkcol_recursive(self, path: str) -> "Result":
        """Create a collection, along with the missing parents.

        Each parent is awaited before its child is requested.
        """
        config = self.config
        for step in collection_steps(path):
            result = await self.request(config, HTTPMethod.MKCOL, step)
            if is_fatal_step(result):
                return result
        return Ok(Outcome.CREATED)
