class ScraperError(Exception):
    """Base error for the scraper."""


class TransportError(ScraperError):
    """A document could not be fetched (network, HTTP status, timeout)."""

    def __init__(self, url: str, message: str, status: int | None = None) -> None:
        super().__init__(f"{message} on url: {url}")
        self.url = url
        self.status = status


class StructureError(ScraperError):
    """The expected HTML shape is absent (anchor, parent, sibling or attribute)."""


class CrawlError(ScraperError):
    def __init__(self, root: str, errors: list[tuple[str, Exception]]) -> None:
        details = "; ".join(f"{url}: {exc}" for url, exc in errors)
        super().__init__(f"{len(errors)} page(s) failed while crawling {root}: {details}")
        self.root = root
        self.errors = errors
