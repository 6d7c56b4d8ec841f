"""URL helpers for the redirect verb."""

from __future__ import annotations

from urllib.parse import parse_qsl, quote


def encode_query(query: str) -> str:
    """Re-escape each key and value of a query string.

    Bare keys (`a&b`) become blank pairs (`a=&b=`). A single bare token
    (e.g. `?token1234`), or a query yielding no pairs at all, cannot be split
    and is percent-escaped as a whole.
    """
    if not query:
        return query
    if "=" not in query and "&" not in query:
        return quote(query, safe="")

    # Later duplicates overwrite earlier values but keep the first position
    pairs = dict(parse_qsl(query, keep_blank_values=True))
    if not pairs:
        return quote(query, safe="")
    return "&".join(f"{quote(key, safe='')}={quote(value, safe='')}" for key, value in pairs.items())


def encode_redirect_url(url: str) -> str:
    """Return `url` with its query portion re-encoded.

    Works on relative URLs as well: the query starts at the first `?` after
    the last `/` and ends at `#` or the end of the string. Path and fragment
    are left untouched.
    """
    query_start = url.find("?", max(url.rfind("/"), 0))
    if query_start == -1:
        return url

    query_start += 1
    query_end = url.find("#", query_start)
    if query_end == -1:
        query_end = len(url)

    return url[:query_start] + encode_query(url[query_start:query_end]) + url[query_end:]
