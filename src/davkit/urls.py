"""URLs parsing logics here."""
import re
from re import sub
from typing import List, Optional
from urllib.parse import quote

from httpx import URL

URL_SCHEME_RE = re.compile(r"^[a-z][a-z0-9.+-]*://", re.IGNORECASE)
# characters allowed in a path segment, as is
PCHAR_SAFE = "!$&'()*+,;=:@"


def strip_trailing_slash(path: str) -> str:
    """Strips trailing slash from the path, except when it's a root."""
    return path.rstrip("/") if path and path != "/" else path


def normalize_path(path: str) -> str:
    """Normalizes path, removes repeated and trailing slashes."""
    path = sub("/{2,}", "/", path)
    return strip_trailing_slash(path)


def split_path(path: str) -> List[str]:
    """Splits path into its non-empty segments."""
    return [segment for segment in path.split("/") if segment]


def iter_ancestors(path: str) -> List[str]:
    """Returns every prefix of the path, shortest first.

    >>> iter_ancestors("a/b/c")
    ['a', 'a/b', 'a/b/c']
    """
    segments = split_path(path)
    return [
        "/".join(segments[:index]) for index in range(1, len(segments) + 1)
    ]


def join_url(
    base_url: URL, path: str, add_trailing_slash: bool = False
) -> URL:
    """Joins base url with a path.

    Each segment of the path is percent-encoded. Joining an absolute url
    that lives under the base url gives back the same url. An empty path
    addresses the base url itself, trailing slash included.
    """
    if URL_SCHEME_RE.match(path):
        url = URL(path)
        rel = relative_path_under(base_url, url)
        if rel is None:
            return url
        path = rel

    base_path = base_url.path
    if not split_path(path) and base_path.endswith("/"):
        add_trailing_slash = True
    path = quote_path(join_url_path(base_path, path))
    if add_trailing_slash and not path.endswith("/"):
        path += "/"
    return base_url.copy_with(path=path)


def quote_path(path: str) -> str:
    """Percent-encodes each segment of the path."""
    segments = path.split("/")
    return "/".join(quote(segment, safe=PCHAR_SAFE) for segment in segments)


def join_url_path(base_path: str, path: str) -> str:
    """Returns path absolute, joined under the base path."""
    path = path.strip("/")
    return normalize_path(f"/{base_path}/{path}")


def relative_path_under(base_url: URL, url: URL) -> Optional[str]:
    """Returns path of the url relative to the base url.

    None is returned if the url does not belong to the base url.
    """
    same_origin = (url.scheme, url.host, url.port) == (
        base_url.scheme,
        base_url.host,
        base_url.port,
    )
    if not same_origin:
        return None

    base = split_path(base_url.path)
    segments = split_path(url.path)
    if segments[: len(base)] != base:
        return None
    return "/".join(segments[len(base) :])
