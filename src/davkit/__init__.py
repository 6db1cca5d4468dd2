"""WebDAV client built on top of httpx."""
from .client import AsyncClient, Client
from .config import Config
from .request import BytesContent, FileContent
from .results import (
    ClientError,
    Error,
    ErrorKind,
    ForbiddenOperation,
    HTTPError,
    Ok,
    Outcome,
    PreconditionFailed,
    ResourceAlreadyExists,
    ResourceConflict,
    ResourceNotFound,
    TransportFailure,
)
from .version import __version__

__all__ = [
    "AsyncClient",
    "BytesContent",
    "Client",
    "ClientError",
    "Config",
    "Error",
    "ErrorKind",
    "FileContent",
    "ForbiddenOperation",
    "HTTPError",
    "Ok",
    "Outcome",
    "PreconditionFailed",
    "ResourceAlreadyExists",
    "ResourceConflict",
    "ResourceNotFound",
    "TransportFailure",
    "__version__",
]
