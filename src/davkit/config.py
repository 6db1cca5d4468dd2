"""Configuration of the webdav client."""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    Mapping,
    Optional,
    Tuple,
    Union,
)

from httpx import URL

from .version import __version__

if TYPE_CHECKING:
    from ._types import HeaderPair, HeaderTypes, URLTypes


DEFAULT_TIMEOUT = 30.0
DEFAULT_HEADERS: Tuple["HeaderPair", ...] = (
    ("User-Agent", f"davkit/{__version__}"),
)
DEFAULT_TRANSPORT_OPTIONS: Mapping[str, Any] = MappingProxyType(
    {"timeout": DEFAULT_TIMEOUT}
)


def to_header_pairs(
    headers: Optional["HeaderTypes"],
) -> Tuple["HeaderPair", ...]:
    """Turn headers from a mapping or a sequence into (name, value) pairs."""
    if not headers:
        return ()
    items = headers.items() if isinstance(headers, Mapping) else headers
    return tuple((str(name), str(value)) for name, value in items)


@dataclass(frozen=True)
class Config:
    """Immutable configuration for the webdav client.

    Headers are kept in order and may contain the same name more than once,
    all of them are sent with every request. Transport options are passed
    to the underlying ``httpx`` client as they are.
    """

    base_url: URL
    headers: Tuple["HeaderPair", ...] = ()
    transport_options: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def new(
        cls,
        base_url: "URLTypes",
        headers: "HeaderTypes" = None,
        **transport_options: Any,
    ) -> "Config":
        """Build config by merging defaults with the given values.

        Examples:
            >>> config = Config.new(
            ...     "https://webdav.example.org/dav",
            ...     headers={"X-Token": "secret"},
            ...     auth=("user", "password"),
            ... )

        Args:
            base_url: base url of the Webdav server
            headers: headers to send along with the default ones,
                either a mapping or a sequence of (name, value) pairs.

        All of the remaining keyword arguments are transport options and
        are passed along to the ``httpx`` client, overriding the defaults.
        """
        return cls(
            base_url=URL(str(base_url)),
            headers=DEFAULT_HEADERS + to_header_pairs(headers),
            transport_options=MappingProxyType(
                {**DEFAULT_TRANSPORT_OPTIONS, **transport_options}
            ),
        )

    def replace(
        self,
        base_url: "URLTypes" = None,
        headers: "HeaderTypes" = None,
        **transport_options: Any,
    ) -> "Config":
        """Returns a new config with the changes merged into this one."""
        return Config(
            base_url=URL(str(base_url)) if base_url else self.base_url,
            headers=self.headers + to_header_pairs(headers),
            transport_options=MappingProxyType(
                {**self.transport_options, **transport_options}
            ),
        )

    def options(self) -> Dict[str, Any]:
        """Returns a copy of transport options."""
        return dict(self.transport_options)


ConfigProvider = Callable[[], Config]
ConfigTypes = Union[Config, ConfigProvider]


def config_provider(config: ConfigTypes) -> ConfigProvider:
    """Turns a config or a callable returning config into a provider."""
    if isinstance(config, Config):
        return lambda: config
    if callable(config):
        return config
    raise TypeError(f"expected Config or a callable, got {type(config)!r}")
