from __future__ import annotations

import json
from typing import Any, Callable
from urllib.request import Request, urlopen


# Fixed headers sent with every request to TASE and the scraped sites.
DEFAULT_HEADERS: dict[str, str] = {
    "Accept": "text/html,application/json;q=0.9,*/*;q=0.8",
    "Accept-Language": "he-IL,he;q=0.9,en-US;q=0.8,en;q=0.7",
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
}

# (url, headers) -> body
FetchText = Callable[[str, dict[str, str]], str]
FetchJson = Callable[[str, dict[str, str]], Any]


class UrllibTransport:
    """
    Plain GET over urllib. Non-2xx responses raise (urlopen raises HTTPError),
    network failures raise URLError/OSError; callers decide what a failure means.
    """

    def __init__(self, *, timeout_sec: float = 15.0) -> None:
        self._timeout = timeout_sec

    def get_text(self, url: str, headers: dict[str, str]) -> str:
        req = Request(url, headers=headers)
        with urlopen(req, timeout=self._timeout) as resp:
            charset = resp.headers.get_content_charset() or "utf-8"
            return resp.read().decode(charset, errors="replace")

    def get_json(self, url: str, headers: dict[str, str]) -> Any:
        return json.loads(self.get_text(url, headers))
