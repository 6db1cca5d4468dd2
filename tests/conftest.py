"""Test fixtures."""

from typing import Iterator, Tuple

import pytest
from cheroot import wsgi

from davkit.client import Client
from davkit.config import Config
from davkit.urls import URL

from .server import AUTH, get_server_address, run_server
from .utils import TmpDir


@pytest.fixture
def auth() -> Tuple[str, str]:
    """Auth for the server."""
    return AUTH


@pytest.fixture
def storage_dir(tmp_path_factory) -> TmpDir:
    """Storage for webdav server to keep files in."""
    path = tmp_path_factory.mktemp("webdav")
    return TmpDir(path)


@pytest.fixture
def server(
    storage_dir: TmpDir,
    auth: Tuple[str, str],
) -> wsgi.Server:
    """Creates a server fixture for testing purpose."""
    with run_server("localhost", 0, str(storage_dir), auth) as (httpd, _):
        yield httpd


@pytest.fixture
def server_address(server: wsgi.Server) -> URL:
    """Address of the server to contact."""
    return get_server_address(server)


@pytest.fixture
def config(auth: Tuple[str, str], server_address: URL) -> Config:
    """Config pointing to the server."""
    return Config.new(server_address, auth=auth)


@pytest.fixture
def client(config: Config) -> Iterator[Client]:
    """Webdav client to interact with the server."""
    with Client(config) as client:
        yield client
