"""Version of the library."""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("davkit")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "UNKNOWN"
