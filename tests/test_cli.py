"""Testing davkit cli."""
import argparse
from argparse import Namespace
from pathlib import Path

import pytest
from pytest import CaptureFixture, MonkeyPatch

from davkit.cli import (
    BASE_URL_ENVVAR,
    Command,
    CommandCopy,
    CommandGet,
    CommandMkdir,
    CommandMove,
    CommandPut,
    CommandRemove,
    get_parser,
    main,
    parse_header,
    prepare_config,
)
from davkit.client import Client
from davkit.results import (
    PreconditionFailed,
    ResourceConflict,
    ResourceNotFound,
)
from davkit.urls import URL

from .utils import TmpDir


@pytest.fixture(autouse=True)
def unset_envvars(monkeypatch: MonkeyPatch):
    """Unset envvar that might affect the base url."""
    monkeypatch.delenv(BASE_URL_ENVVAR, raising=False)


def make_args(**kwargs) -> Namespace:
    """Namespace with the defaults of the global options."""
    defaults = {
        "base_url": None,
        "headers": [],
        "timeout": None,
        "user": None,
        "password": None,
    }
    return Namespace(**{**defaults, **kwargs})


def test_parse_header():
    """Test parsing headers given as `Name: value`."""
    assert parse_header("X-Foo: bar") == ("X-Foo", "bar")
    assert parse_header("X-Foo:bar: baz") == ("X-Foo", "bar: baz")
    with pytest.raises(argparse.ArgumentTypeError):
        parse_header("X-Foo")
    with pytest.raises(argparse.ArgumentTypeError):
        parse_header(": bar")


def test_prepare_config(monkeypatch: MonkeyPatch):
    """Test config from args and from the envvar."""
    args = make_args(
        base_url="https://example.org/dav",
        headers=[("X-Foo", "bar")],
        timeout=3.0,
        user="user",
        password="pwd",
    )
    config = prepare_config(args)
    assert config.base_url == URL("https://example.org/dav")
    assert ("X-Foo", "bar") in config.headers
    assert config.options()["timeout"] == 3.0
    assert config.options()["auth"] == ("user", "pwd")

    monkeypatch.setenv(BASE_URL_ENVVAR, "https://other.example.org")
    # --base-url should still take precedence
    assert prepare_config(args).base_url == URL("https://example.org/dav")

    config = prepare_config(make_args())
    assert config.base_url == URL("https://other.example.org")
    assert "auth" not in config.options()


def test_prepare_config_without_base_url():
    """Base url is required."""
    with pytest.raises(ValueError) as exc_info:
        prepare_config(make_args())

    assert str(exc_info.value) == (
        "no base url specified, please specify it through --base-url "
        f"or via {BASE_URL_ENVVAR} envvar."
    )


def test_command_builds_client():
    """Command builds a client from args if none was given."""
    cmd = Command(make_args(base_url="https://example.org"))
    assert isinstance(cmd.client, Client)
    assert cmd.client.config.base_url == URL("https://example.org")


def test_parser():
    """Test parsing of the command line."""
    parser = get_parser()
    args = parser.parse_args(
        [
            "--base-url",
            "https://example.org",
            "-H",
            "X-Foo: bar",
            "-H",
            "X-Foo: baz",
            "mv",
            "--no-overwrite",
            "a",
            "b",
        ]
    )
    assert args.headers == [("X-Foo", "bar"), ("X-Foo", "baz")]
    assert args.func is CommandMove
    assert (args.src, args.dest, args.overwrite) == ("a", "b", False)

    args = parser.parse_args(["mkdir", "-p", "a/b"])
    assert args.func is CommandMkdir
    assert args.parents


def test_get_cli(
    tmp_path: Path,
    storage_dir: TmpDir,
    client: Client,
    capsysbinary: CaptureFixture,
):
    """Test get command, to stdout and to a file."""
    storage_dir.gen({"data": {"foo": "foo"}})

    CommandGet(Namespace(path="data/foo", output=None), client).run()
    out, _ = capsysbinary.readouterr()
    assert out == b"foo"

    output = tmp_path / "foo"
    CommandGet(Namespace(path="data/foo", output=str(output)), client).run()
    assert output.read_bytes() == b"foo"

    with pytest.raises(ResourceNotFound):
        CommandGet(Namespace(path="data/bar", output=None), client).run()


def test_put_cli(tmp_path: Path, storage_dir: TmpDir, client: Client):
    """Test put command."""
    file = tmp_path / "foo.txt"
    file.write_text("foo")

    CommandPut(Namespace(file=str(file), path="foo.txt"), client).run()
    assert storage_dir.cat() == {"foo.txt": "foo"}

    with pytest.raises(ResourceConflict):
        CommandPut(Namespace(file=str(file), path="a/foo.txt"), client).run()


def test_mv_and_cp_cli(storage_dir: TmpDir, client: Client):
    """Test mv and cp commands."""
    storage_dir.gen({"data": {"foo": "foo", "bar": "bar"}})

    ns = Namespace(src="data/foo", dest="data/foobar", overwrite=True)
    CommandCopy(ns, client).run()
    assert storage_dir.cat() == {
        "data": {"foo": "foo", "bar": "bar", "foobar": "foo"}
    }

    ns = Namespace(src="data/foobar", dest="data/bar", overwrite=False)
    with pytest.raises(PreconditionFailed):
        CommandMove(ns, client).run()

    ns.overwrite = True
    CommandMove(ns, client).run()
    assert storage_dir.cat() == {"data": {"foo": "foo", "bar": "foo"}}


def test_rm_cli(storage_dir: TmpDir, client: Client):
    """Test rm command."""
    storage_dir.gen({"data": {"foo": "foo"}})

    CommandRemove(Namespace(path="data/foo"), client).run()
    assert storage_dir.cat() == {"data": {}}

    with pytest.raises(ResourceNotFound):
        CommandRemove(Namespace(path="data/foo"), client).run()


def test_mkdir_cli(storage_dir: TmpDir, client: Client):
    """Test mkdir command."""
    CommandMkdir(Namespace(path="data1", parents=False), client).run()
    assert storage_dir.cat() == {"data1": {}}

    with pytest.raises(ResourceConflict):
        cmd = CommandMkdir(Namespace(path="a/b", parents=False), client)
        cmd.run()

    CommandMkdir(Namespace(path="data1/dir1/dir2", parents=True), client).run()
    CommandMkdir(Namespace(path="data1/dir1", parents=True), client).run()
    assert storage_dir.cat() == {"data1": {"dir1": {"dir2": {}}}}


def test_main(storage_dir: TmpDir, client: Client):
    """Test main command line entrypoint."""
    assert main(["mkdir", "-p", "a/b"]) == 1
    assert main(["-v", "mkdir", "-p", "a/b"], client=client) == 0
    assert storage_dir.cat() == {"a": {"b": {}}}
    assert main(["mkdir", "a/b"], client=client) == 1
    assert main(["rm", "a"], client=client) == 0
    assert storage_dir.cat() == {}


def test_main_with_server(
    storage_dir: TmpDir,
    server_address: URL,
    auth,
    monkeypatch: MonkeyPatch,
):
    """Test main building its own client from the args and the envvar."""
    user, password = auth
    storage_dir.gen({"foo": "foo"})
    monkeypatch.setenv(BASE_URL_ENVVAR, str(server_address))

    assert main(["-u", user, "-p", password, "cp", "foo", "bar"]) == 0
    assert storage_dir.cat() == {"foo": "foo", "bar": "foo"}
    assert main(["cp", "foo", "bar"]) == 1
