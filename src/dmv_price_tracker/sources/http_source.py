import asyncio
from typing import Optional

import requests

from dmv_price_tracker.errors import SourceError


class HttpRecordSource:
    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.session = session
        self.name = f"http:{url}"

    async def open(self) -> None:
        if self.session is None:
            self.session = requests.Session()

    def _get(self) -> str:
        session = self.session
        if session is None:
            raise SourceError(f"source {self.name} is not open")
        try:
            response = session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise SourceError(f"fetching {self.url} failed: {e}") from e
        response.encoding = response.encoding or "utf-8"
        return response.text

    async def fetch_text(self) -> str:
        if self.session is None:
            await self.open()
        return await asyncio.to_thread(self._get)

    async def close(self) -> None:
        # The session is released after every load cycle.
        session, self.session = self.session, None
        if session is not None:
            session.close()
