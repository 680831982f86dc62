import asyncio

from src.scraper.domain.errors import TransportError


class FakeDocumentStore:
    """Deterministic document store keyed by URL."""

    def __init__(self, pages: dict[str, str | Exception], delay: float = 0.0) -> None:
        self.pages = dict(pages)
        self.delay = delay
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if url not in self.pages:
                raise TransportError(url, "HTTP 404", status=404)
            page = self.pages[url]
            if isinstance(page, Exception):
                raise page
            return page
        finally:
            self.in_flight -= 1

    def call_count(self, url: str) -> int:
        return self.calls.count(url)
