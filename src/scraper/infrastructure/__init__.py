"""Infrastructure adapters for the scraper."""

from src.scraper.infrastructure.fetcher import HtmlFetcher
from src.scraper.infrastructure.http_store import AiohttpDocumentStore
from src.scraper.infrastructure.json_writer import JsonOutputWriter

__all__ = ["AiohttpDocumentStore", "HtmlFetcher", "JsonOutputWriter"]
