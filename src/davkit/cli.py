"""CLI for the Webdav."""

import argparse
import logging
import os
import sys
from argparse import Namespace
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .client import Client
from .client import logger as client_logger
from .config import Config
from .request import FileContent
from .results import ClientError

if TYPE_CHECKING:
    from argparse import ArgumentParser

    from ._types import HeaderPair

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)
logger.addHandler(logging.StreamHandler())


BASE_URL_ENVVAR = "DAVKIT_BASE_URL"


def parse_header(value: str) -> "HeaderPair":
    """Parse header given as `Name: value`."""
    name, sep, rest = value.partition(":")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(
            f"invalid header {value!r}, expected 'Name: value'"
        )
    return name.strip(), rest.strip()


def prepare_config(args: Namespace) -> Config:
    """Build config from the given arguments or from the envvar."""
    url = args.base_url or os.getenv(BASE_URL_ENVVAR)
    if not url:
        raise ValueError(
            "no base url specified, "
            "please specify it through --base-url "
            f"or via {BASE_URL_ENVVAR} envvar."
        )

    options: Dict[str, Any] = {}
    if args.timeout is not None:
        options["timeout"] = args.timeout
    if args.user and args.password:
        options["auth"] = args.user, args.password
    return Config.new(url, headers=args.headers, **options)


class Command:
    """Base class for all commands."""

    def __init__(self, args: Namespace, client: Client = None) -> None:
        """Pass the arguments and optionally client."""
        self.args = args
        if client:
            self.client = client
            return

        config = prepare_config(args)
        logger.debug("base url set to %s", config.base_url)
        self.client = Client(config)

    def run(self) -> None:
        """Override this function to do some operations."""
        raise NotImplementedError


class CommandGet(Command):
    """Command for get."""

    def run(self) -> None:
        """Download resource to a file, or print it to stdout."""
        content = self.client.get(self.args.path).unwrap()
        if self.args.output:
            with open(self.args.output, mode="wb") as fobj:
                fobj.write(content)
        else:
            sys.stdout.buffer.write(content)
            sys.stdout.flush()


class CommandPut(Command):
    """Command for put."""

    def run(self) -> None:
        """Upload a local file to the path."""
        content = FileContent(self.args.file)
        outcome = self.client.put(self.args.path, content).unwrap()
        logger.info("%s: %s", self.args.path, outcome.value)


class CommandMove(Command):
    """Command for mv."""

    def run(self) -> None:
        """Move resource to a new destination."""
        args = self.args
        result = self.client.move(args.src, args.dest, args.overwrite)
        logger.debug("%s -> %s: %s", args.src, args.dest, result.unwrap())


class CommandCopy(Command):
    """Command for cp."""

    def run(self) -> None:
        """Copy resource to a new destination."""
        args = self.args
        result = self.client.copy(args.src, args.dest, args.overwrite)
        logger.debug("%s -> %s: %s", args.src, args.dest, result.unwrap())


class CommandRemove(Command):
    """Command for rm."""

    def run(self) -> None:
        """Remove a resource or a collection."""
        self.client.delete(self.args.path).unwrap()


class CommandMkdir(Command):
    """Command for mkdir."""

    def run(self) -> None:
        """Create collection, along with the parents with `-p`."""
        if self.args.parents:
            self.client.mkcol_recursive(self.args.path).unwrap()
        else:
            self.client.mkcol(self.args.path).unwrap()


def add_overwrite_argument(parser: "ArgumentParser") -> None:
    """Add --no-overwrite flag for mv and cp."""
    parser.add_argument(
        "--no-overwrite",
        dest="overwrite",
        action="store_false",
        default=True,
        help="Fail if the destination already exists",
    )


def get_parser() -> "ArgumentParser":
    """Returns the parser for the command line."""
    parser = argparse.ArgumentParser(prog="davkit")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show more information",
        default=False,
    )
    parser.add_argument(
        "--base-url",
        help="Base url of the webdav server, paths are relative to it.\n"
        f"Can also be specified through {BASE_URL_ENVVAR} envvar.",
        metavar="URL",
        default=None,
    )
    parser.add_argument(
        "--header",
        "-H",
        dest="headers",
        type=parse_header,
        action="append",
        default=[],
        metavar="'NAME: VALUE'",
        help="Header to send along with every request, can be repeated",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Timeout of the requests, in seconds",
    )
    parser.add_argument(
        "--user", "-u", help="Account Username", default=None, required=False
    )
    parser.add_argument(
        "--password",
        "-p",
        help="Account Password",
        default=None,
        required=False,
    )

    subparsers = parser.add_subparsers(
        title="actions", help="Available subcommands"
    )
    subparsers.required = True
    subparsers.dest = "command"

    get_parser_ = subparsers.add_parser("get", help="Download a resource")
    get_parser_.add_argument("path", help="Resource to download")
    get_parser_.add_argument(
        "--output",
        "-o",
        default=None,
        help="File to write to, stdout if not specified",
    )
    get_parser_.set_defaults(func=CommandGet)

    put_parser = subparsers.add_parser("put", help="Upload a file")
    put_parser.add_argument("file", help="Local file to upload")
    put_parser.add_argument("path", help="Path to upload to")
    put_parser.set_defaults(func=CommandPut)

    mv_parser = subparsers.add_parser("mv", help="Move a resource")
    mv_parser.add_argument("src", help="Path to move from")
    mv_parser.add_argument("dest", help="Path to move to")
    add_overwrite_argument(mv_parser)
    mv_parser.set_defaults(func=CommandMove)

    cp_parser = subparsers.add_parser("cp", help="Copy a resource")
    cp_parser.add_argument("src", help="Path to copy from")
    cp_parser.add_argument("dest", help="Path to copy to")
    add_overwrite_argument(cp_parser)
    cp_parser.set_defaults(func=CommandCopy)

    rm_parser = subparsers.add_parser("rm", help="Remove a resource")
    rm_parser.add_argument("path", help="Path to remove")
    rm_parser.set_defaults(func=CommandRemove)

    mkdir_parser = subparsers.add_parser("mkdir", help="Create a collection")
    mkdir_parser.add_argument("path", help="Collection to create")
    mkdir_parser.add_argument(
        "--parents",
        "-p",
        action="store_true",
        default=False,
        help="Create missing parent collections too",
    )
    mkdir_parser.set_defaults(func=CommandMkdir)

    return parser


def run_cmd(args: Namespace, client: Client = None) -> Optional[int]:
    """Run cmd from given args."""
    cmd: Command = args.func(args, client=client)
    cmd.run()
    return 0


def main(argv: List[str] = None, client: Client = None) -> Optional[int]:
    """Command line entrypoint."""
    parser = get_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logger.setLevel(logging.DEBUG)
        client_logger.setLevel(logging.DEBUG)
        if not client_logger.handlers:
            client_logger.addHandler(logging.StreamHandler())

    try:
        return run_cmd(args, client)
    except (ClientError, ValueError, OSError) as exc:
        logger.error(
            "%s: %s", type(exc).__name__, exc, exc_info=args.verbose
        )
        return 1
