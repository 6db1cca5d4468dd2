"""Results of the webdav operations and the interpretation of responses."""
from dataclasses import dataclass, field
from enum import Enum
from http import HTTPStatus
from typing import (
    Any,
    ClassVar,
    Dict,
    Generic,
    NoReturn,
    Optional,
    TypeVar,
    Union,
)

from .http import Method

_T = TypeVar("_T")


class ErrorKind(Enum):
    """Kinds of failures an operation can end up with."""

    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    PRECONDITION_FAILED = "precondition_failed"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    UNKNOWN = "unknown"
    TRANSPORT_FAILURE = "transport_failure"


class Outcome(Enum):
    """Successful outcomes of the operations (except for `get`)."""

    CREATED = "created"
    UPDATED = "updated"
    MOVED = "moved"
    COPIED = "copied"
    DELETED = "deleted"


class ClientError(Exception):
    """Custom exception thrown by the Client."""

    def __init__(self, msg: str) -> None:
        """Instantiate exception with a msg."""
        self.msg: str = msg
        super().__init__(msg)

    def __str__(self) -> str:
        """Provide str repr of the msg."""
        return self.msg


class ResourceConflict(ClientError):
    """Raised when there was conflict during the operation (got 409)."""


class ForbiddenOperation(ClientError):
    """Raised when the operation was forbidden (got 401/403)."""


class PreconditionFailed(ClientError):
    """Raised when the destination exists and overwrite is disallowed."""


class ResourceAlreadyExists(ClientError):
    """Error returned if the resource already exists."""

    def __init__(self, path: str) -> None:
        """Instantiate exception with the path that already exists."""
        self.path = path
        super().__init__(f"The resource {path} already exists")


class ResourceNotFound(ClientError):
    """Error when the resource does not exist on the server."""

    def __init__(self, path: str) -> None:
        """Instantiate exception with path that does not exist."""
        self.path = path
        super().__init__(
            f"The resource {path} could not be found in the server"
        )


class HTTPError(ClientError):
    """Raised for a status code the operation has no meaning for."""

    def __init__(self, status_code: int) -> None:
        """Instantiate exception with the unexpected status code."""
        self.status_code = status_code
        try:
            phrase = HTTPStatus(status_code).phrase
        except ValueError:
            phrase = "Unknown"
        super().__init__(f"received {status_code} ({phrase})")


class TransportFailure(ClientError):
    """Raised when the request never got a response from the server."""


@dataclass(frozen=True)
class Ok(Generic[_T]):
    """Successful result, holding an `Outcome` or the body for `get`."""

    value: _T
    ok: ClassVar[bool] = True

    def unwrap(self) -> _T:
        """Returns the value."""
        return self.value


@dataclass(frozen=True)
class Error:
    """Failed result.

    `status_code` is set whenever the server responded, `reason` holds the
    transport exception for `ErrorKind.TRANSPORT_FAILURE`.
    """

    kind: ErrorKind
    status_code: Optional[int] = None
    path: str = field(default="", compare=False)
    reason: Optional[BaseException] = field(
        default=None, compare=False, repr=False
    )
    ok: ClassVar[bool] = False

    def exception(self) -> ClientError:
        """Returns the exception matching the kind of failure."""
        kind = self.kind
        if kind is ErrorKind.NOT_FOUND:
            return ResourceNotFound(self.path)
        if kind is ErrorKind.FORBIDDEN:
            return ForbiddenOperation(
                f"the operation on {self.path} is forbidden"
            )
        if kind is ErrorKind.CONFLICT:
            return ResourceConflict(
                f"there was a conflict when operating on {self.path}"
            )
        if kind is ErrorKind.PRECONDITION_FAILED:
            return PreconditionFailed(
                "the destination already exists and overwrite is disallowed"
            )
        if kind is ErrorKind.METHOD_NOT_ALLOWED:
            return ResourceAlreadyExists(self.path)
        if kind is ErrorKind.TRANSPORT_FAILURE:
            return TransportFailure(f"request failed: {self.reason}")
        assert self.status_code is not None
        return HTTPError(self.status_code)

    def unwrap(self) -> NoReturn:
        """Raises the exception for the failure."""
        raise self.exception() from self.reason


Result = Union[Ok[Any], Error]

# `None` stands for the body of the response.
SUCCESS_STATUS: Dict[str, Dict[int, Optional[Outcome]]] = {
    Method.GET: {HTTPStatus.OK: None},
    Method.PUT: {
        HTTPStatus.CREATED: Outcome.CREATED,
        HTTPStatus.NO_CONTENT: Outcome.UPDATED,
    },
    Method.MOVE: {
        HTTPStatus.CREATED: Outcome.CREATED,
        HTTPStatus.NO_CONTENT: Outcome.MOVED,
    },
    Method.COPY: {
        HTTPStatus.CREATED: Outcome.CREATED,
        HTTPStatus.NO_CONTENT: Outcome.COPIED,
    },
    Method.DELETE: {
        HTTPStatus.OK: Outcome.DELETED,
        HTTPStatus.NO_CONTENT: Outcome.DELETED,
    },
    Method.MKCOL: {HTTPStatus.CREATED: Outcome.CREATED},
}

_TRANSFER_FAILURES = {
    HTTPStatus.FORBIDDEN: ErrorKind.FORBIDDEN,
    HTTPStatus.NOT_FOUND: ErrorKind.NOT_FOUND,
    HTTPStatus.CONFLICT: ErrorKind.CONFLICT,
    HTTPStatus.PRECONDITION_FAILED: ErrorKind.PRECONDITION_FAILED,
}

FAILURE_STATUS: Dict[str, Dict[int, ErrorKind]] = {
    Method.GET: {
        HTTPStatus.NOT_FOUND: ErrorKind.NOT_FOUND,
        HTTPStatus.UNAUTHORIZED: ErrorKind.FORBIDDEN,
        HTTPStatus.FORBIDDEN: ErrorKind.FORBIDDEN,
    },
    Method.PUT: {
        HTTPStatus.FORBIDDEN: ErrorKind.FORBIDDEN,
        HTTPStatus.CONFLICT: ErrorKind.CONFLICT,
    },
    Method.MOVE: _TRANSFER_FAILURES,
    Method.COPY: _TRANSFER_FAILURES,
    Method.DELETE: {
        HTTPStatus.NOT_FOUND: ErrorKind.NOT_FOUND,
        HTTPStatus.FORBIDDEN: ErrorKind.FORBIDDEN,
    },
    Method.MKCOL: {
        # the collection already exists
        HTTPStatus.METHOD_NOT_ALLOWED: ErrorKind.METHOD_NOT_ALLOWED,
        # parent of the collection does not exist
        HTTPStatus.CONFLICT: ErrorKind.CONFLICT,
        HTTPStatus.FORBIDDEN: ErrorKind.FORBIDDEN,
    },
}


def interpret(
    operation: str, status_code: int, body: bytes = b"", path: str = ""
) -> Result:
    """Maps status code of the response to the result of the operation.

    Status codes that have no meaning for the operation end up as
    `ErrorKind.UNKNOWN` errors, carrying the status code along.
    """
    if operation not in SUCCESS_STATUS:
        raise ValueError(f"unsupported operation: {operation}")

    successes = SUCCESS_STATUS[operation]
    if status_code in successes:
        outcome = successes[status_code]
        return Ok(body if outcome is None else outcome)

    kind = FAILURE_STATUS[operation].get(status_code, ErrorKind.UNKNOWN)
    return Error(kind, status_code, path=path)


def transport_failure(exc: BaseException, path: str = "") -> Error:
    """Result for a request that failed before getting any response."""
    return Error(ErrorKind.TRANSPORT_FAILURE, path=path, reason=exc)
