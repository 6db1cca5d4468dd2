"""Types used throughout the library."""

from typing import Mapping, Sequence, Tuple, Union

from httpx import URL

URLTypes = Union[URL, str]
HeaderPair = Tuple[str, str]
HeaderTypes = Union[Mapping[str, str], Sequence[HeaderPair]]
