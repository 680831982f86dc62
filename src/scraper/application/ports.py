from pathlib import Path
from typing import Any, Protocol, Sequence, runtime_checkable


@runtime_checkable
class DocumentStorePort(Protocol):
    async def fetch(self, url: str) -> str: ...
    """Return the raw document text for ``url`` or raise TransportError."""


@runtime_checkable
class HtmlFetcherPort(Protocol):
    async def fetch(self, key: str) -> str: ...
    """Coalesced, cached fetch of a URL key."""

    async def fetch_direct(self, key: str) -> str: ...
    """Uncached fetch of a URL key."""


@runtime_checkable
class UrlCrawlerPort(Protocol):
    async def get_href(self, path: str) -> list[str]: ...

    async def get_nested_href(self, root: str, strict: bool) -> list[str]: ...


@runtime_checkable
class OutputWriterPort(Protocol):
    def write(self, records: Sequence[Any], name: str) -> Path: ...
    """Persist serializable records under a destination name."""
