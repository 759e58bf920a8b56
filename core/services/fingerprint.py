"""Entity tags for conditional image requests."""

from __future__ import annotations

import hashlib
from pathlib import Path

from werkzeug.http import parse_etags, quote_etag, unquote_etag


def compute_etag(
    base_dir: str | Path, group_index: int, image_index: int, relative_path: str
) -> str:
    """Return a quoted strong ETag for an address.

    Derived from the address and path only; file contents and mtime are not
    part of the tag.
    """
    sig = f"{base_dir}:{group_index}:{image_index}:{relative_path}".encode("utf-8")
    return quote_etag(hashlib.sha256(sig).hexdigest())


def etag_matches(etag: str, if_none_match: str | None) -> bool:
    """True if the `If-None-Match` header value covers `etag`."""
    if not if_none_match:
        return False
    value, _weak = unquote_etag(etag)
    return parse_etags(if_none_match).contains_weak(value)
