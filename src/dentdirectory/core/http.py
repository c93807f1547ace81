from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


@dataclass
class HttpClient:
    user_agent: str
    timeout_sec: int = 20
    retries: int = 0

    def __post_init__(self) -> None:
        self.session = requests.Session()
        retry = Retry(
            total=self.retries,
            read=self.retries,
            connect=self.retries,
            backoff_factor=0.8,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=("GET", "HEAD"),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def get(
        self,
        url: str,
        *,
        params: Optional[list[tuple[str, str]]] = None,
        headers: Optional[dict] = None,
    ) -> requests.Response:
        h = {"User-Agent": self.user_agent}
        if headers:
            h.update(headers)
        return self.session.get(url, params=params, headers=h, timeout=self.timeout_sec)

    def close(self) -> None:
        self.session.close()
