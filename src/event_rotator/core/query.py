from __future__ import annotations

from typing import Mapping, Optional


def build_query_url(base_url: str, query: Optional[Mapping[str, str]] = None) -> str:
    """
    Append query parameters to the feed endpoint.
    Values are used as-is (dates and simple tokens need no encoding).
    """
    # chop one trailing slash: "http://x/" -> "http://x"
    if base_url.endswith("/"):
        base_url = base_url[:-1]

    if not query:
        return base_url

    terms = [f"{key}={value}" for key, value in query.items()]
    return f"{base_url}?{'&'.join(terms)}"
