from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

DEFAULT_UA = "event-rotator/0.1 (python-httpx)"

# callback([...]); -> [...]
JSONP_RE = re.compile(r"^\s*[\w$.]+\s*\((?P<body>.*)\)\s*;?\s*$", re.S)


class FeedError(RuntimeError):
    """The feed could not be fetched or did not return an event list."""


@dataclass
class FetchResult:
    url: str
    status_code: int
    text: str


def decode_batch(text: str) -> List[Dict[str, Any]]:
    """
    Decode a JSON (or JSONP-wrapped) feed body into a list of records.
    """
    body = text.strip()
    m = JSONP_RE.match(body)
    if m and not body.startswith(("[", "{")):
        body = m.group("body")

    try:
        payload = json.loads(body)
    except ValueError as e:
        raise FeedError(f"Feed body is not JSON: {e}") from e

    if not isinstance(payload, list):
        raise FeedError(f"Unexpected feed payload (expected a list, got {type(payload).__name__})")
    return payload


class FeedFetcher:
    def __init__(
        self,
        log: Optional[logging.Logger] = None,
        timeout_s: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.log = log or logging.getLogger(__name__)
        self.timeout_s = timeout_s
        self._client = httpx.Client(
            timeout=timeout_s,
            headers={"User-Agent": DEFAULT_UA, "Accept": "application/json, text/javascript, */*"},
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "FeedFetcher":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def get_text(self, url: str) -> FetchResult:
        resp = self._client.get(url)
        return FetchResult(url=url, status_code=resp.status_code, text=resp.text)

    def get_batch(self, url: str) -> List[Dict[str, Any]]:
        self.log.info("Fetching events: %s", url)
        try:
            res = self.get_text(url)
        except httpx.HTTPError as e:
            raise FeedError(f"Feed request failed: {url}: {e!r}") from e

        if res.status_code != 200:
            raise FeedError(f"Feed returned status={res.status_code} URL={url}")

        batch = decode_batch(res.text)
        self.log.info("Feed returned %s records", len(batch))
        return batch
