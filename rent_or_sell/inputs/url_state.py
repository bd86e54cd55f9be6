# rent_or_sell/inputs/url_state.py
"""
Share-link state: form values ⇄ URL query string.

Values travel as opaque strings; nothing here parses or validates numbers. The
normalizer repairs whatever comes back. Unknown parameters are ignored, and the
derived monthly payment is never written.
"""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import parse_qsl, urlencode, urlsplit

from rent_or_sell.core.normalize import FORM_KEYS


def to_query_string(form: Mapping[str, object]) -> str:
    """Encode known form keys, in form order, as `key=value&...` (no leading '?')."""
    pairs = [(key, "" if form[key] is None else str(form[key])) for key in FORM_KEYS if key in form]
    return urlencode(pairs)


def _query_part(query: str) -> str:
    q = query.strip()
    if "://" in q or q.startswith("/"):
        return urlsplit(q).query
    return q[1:] if q.startswith("?") else q


def from_query_string(query: str, base: Mapping[str, str] | None = None) -> dict[str, str]:
    """
    Overlay form values from a query string onto `base`.

    Accepts a bare query, a query with a leading '?', or a full URL. A query without
    parameters returns a copy of `base` unchanged. Blank values are kept (the
    normalizer turns them into defaults).
    """
    out = dict(base or {})
    params = parse_qsl(_query_part(query), keep_blank_values=True)
    if not params:
        return out

    known = set(FORM_KEYS)
    for key, value in params:
        if key in known:
            out[key] = value
    return out


def share_url(base_url: str, form: Mapping[str, object]) -> str:
    """Path (or full URL) plus the encoded form, replacing any existing query."""
    path = base_url.split("?", 1)[0]
    return f"{path}?{to_query_string(form)}"
