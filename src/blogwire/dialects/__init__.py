"""XML-RPC wire dialects."""

from blogwire.dialects.base import Credentials, Dialect, Operation, RawRequest
from blogwire.dialects.blogger1 import BLOGGER1
from blogwire.dialects.metaweblog import METAWEBLOG
from blogwire.dialects.movabletype import MOVABLETYPE
from blogwire.dialects.wordpress import WORDPRESS_BUGGY

DIALECTS: dict[str, Dialect] = {
    dialect.name: dialect
    for dialect in (BLOGGER1, METAWEBLOG, MOVABLETYPE, WORDPRESS_BUGGY)
}


def get_dialect(name: str) -> Dialect:
    """Look up a dialect by name (case-insensitive)."""
    try:
        return DIALECTS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown dialect '{name}'. Choose one of: {', '.join(DIALECTS)}"
        ) from None


__all__ = [
    "BLOGGER1",
    "Credentials",
    "DIALECTS",
    "Dialect",
    "METAWEBLOG",
    "MOVABLETYPE",
    "Operation",
    "RawRequest",
    "WORDPRESS_BUGGY",
    "get_dialect",
]
