"""
URL construction: path resolution and query-string encoding.

Query values follow the server's conventions:

- lists and tuples are comma-joined (``ids=a,b``);
- mappings use bracket notation (``filter[kind]=x``), recursively;
- booleans are ``true``/``false``;
- ``None`` values are omitted.
"""

from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import quote, unquote_plus, urlencode, urljoin, urlsplit, urlunsplit


def _scalar(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(values: Optional[Mapping[str, Any]]) -> List[Tuple[str, str]]:
    """Flatten *values* into ordered ``(key, value)`` pairs."""
    pairs: List[Tuple[str, str]] = []
    for key, value in (values or {}).items():
        _encode_into(pairs, key, value)
    return pairs


def _encode_into(pairs: List[Tuple[str, str]], key: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            _encode_into(pairs, f"{key}[{sub_key}]", sub_value)
    elif isinstance(value, (list, tuple)):
        items = [_scalar(item) for item in value if item is not None]
        pairs.append((key, ",".join(items)))
    else:
        pairs.append((key, _scalar(value)))


def merge_query(base_query: str, call_pairs: Iterable[Tuple[str, str]]) -> str:
    """Merge the base URL's raw query with per-call pairs.

    A key supplied by the call replaces every occurrence of that key in the
    base query.  Base parameters that are not overridden are kept exactly as
    written.  Returns an empty string when both are empty.
    """
    call_pairs = list(call_pairs)
    overridden = {key for key, _ in call_pairs}
    segments = [
        segment
        for segment in base_query.split("&")
        if segment and unquote_plus(segment.partition("=")[0]) not in overridden
    ]
    if call_pairs:
        segments.append(urlencode(call_pairs))
    return "&".join(segments)


def build_url(base_url: str, path: str, query: Optional[Mapping[str, Any]] = None) -> str:
    """Resolve *path* against *base_url* and attach the merged query string.

    *base_url* is expected to end in ``/`` (see
    :func:`opencode_client.config.validate_base_url`) so that ``path`` is
    appended below any base path prefix.
    """
    base = urlsplit(base_url)
    base_without_query = urlunsplit((base.scheme, base.netloc, base.path, "", ""))
    resolved = urlsplit(urljoin(base_without_query, path.lstrip("/")))
    raw_query = merge_query(base.query, encode_query(query))
    return urlunsplit((resolved.scheme, resolved.netloc, resolved.path, raw_query, ""))


def path_segment(value: Any) -> str:
    """Percent-encode a path parameter so it stays within one path segment."""
    return quote(_scalar(value), safe="")
