import asyncio
import unittest
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import aiohttp

from src.scraper.application.category_crawler import CategoryCrawler
from src.scraper.domain.errors import TransportError
from src.scraper.infrastructure.fetcher import HtmlFetcher
from src.scraper.infrastructure.http_store import AiohttpDocumentStore
from tests.utils.wiki_pages import category_page


class FakeResponse:
    def __init__(self, status=200, text_data=""):
        self.status = status
        self._text_data = text_data
        self.request_info = SimpleNamespace(real_url="http://test.invalid")
        self.history = ()

    async def text(self):
        if isinstance(self._text_data, Exception):
            raise self._text_data
        return self._text_data

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []

    def get(self, url, **kwargs):
        if not self._responses:
            raise AssertionError("No more fake responses configured")
        self.calls.append((url, kwargs))
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class DocumentStoreTests(unittest.IsolatedAsyncioTestCase):
    async def test_success_returns_body_and_sends_headers(self):
        session = FakeSession([FakeResponse(status=200, text_data="<html>ok</html>")])
        store = AiohttpDocumentStore(session, headers={"User-Agent": "test-agent"})

        result = await store.fetch("https://wiki.test/wiki/Zoan")

        self.assertEqual(result, "<html>ok</html>")
        url, kwargs = session.calls[0]
        self.assertEqual(url, "https://wiki.test/wiki/Zoan")
        self.assertEqual(kwargs["headers"], {"User-Agent": "test-agent"})
        self.assertIsInstance(kwargs["timeout"], aiohttp.ClientTimeout)

    async def test_server_error_is_retried(self):
        session = FakeSession([FakeResponse(status=503), FakeResponse(status=200, text_data="late")])
        store = AiohttpDocumentStore(session, retries=3)

        with patch("src.scraper.infrastructure.http_store.asyncio.sleep", new=AsyncMock()) as sleep_mock:
            result = await store.fetch("https://wiki.test/wiki/Zoan")

        self.assertEqual(result, "late")
        self.assertEqual(len(session.calls), 2)
        sleep_mock.assert_awaited_once_with(2)

    async def test_rate_limit_is_retried(self):
        session = FakeSession([FakeResponse(status=429), FakeResponse(status=200, text_data="ok")])
        store = AiohttpDocumentStore(session, retries=2)

        with patch("src.scraper.infrastructure.http_store.asyncio.sleep", new=AsyncMock()):
            self.assertEqual(await store.fetch("https://wiki.test/x"), "ok")

    async def test_client_error_status_fails_without_retry(self):
        session = FakeSession([FakeResponse(status=404)])
        store = AiohttpDocumentStore(session, retries=3)

        with self.assertRaises(TransportError) as ctx:
            await store.fetch("https://wiki.test/wiki/Missing")

        self.assertEqual(ctx.exception.status, 404)
        self.assertEqual(len(session.calls), 1)

    async def test_exhausted_retries_raise_transport_error(self):
        session = FakeSession([FakeResponse(status=500), FakeResponse(status=500), FakeResponse(status=500)])
        store = AiohttpDocumentStore(session, retries=3)

        with patch("src.scraper.infrastructure.http_store.asyncio.sleep", new=AsyncMock()) as sleep_mock:
            with self.assertRaises(TransportError) as ctx:
                await store.fetch("https://wiki.test/wiki/Down")

        self.assertEqual(ctx.exception.status, 500)
        self.assertEqual(len(session.calls), 3)
        self.assertEqual([c.args[0] for c in sleep_mock.await_args_list], [2, 4])

    async def test_timeout_is_retried(self):
        session = FakeSession([asyncio.TimeoutError(), FakeResponse(status=200, text_data="ok")])
        store = AiohttpDocumentStore(session, retries=2)

        with patch("src.scraper.infrastructure.http_store.asyncio.sleep", new=AsyncMock()):
            self.assertEqual(await store.fetch("https://wiki.test/x"), "ok")

    async def test_undecodable_body_raises_transport_error(self):
        bad_bytes = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        session = FakeSession([FakeResponse(status=200, text_data=bad_bytes)])
        store = AiohttpDocumentStore(session, retries=3)

        with patch("src.scraper.infrastructure.http_store.asyncio.sleep", new=AsyncMock()) as sleep_mock:
            with self.assertRaises(TransportError) as ctx:
                await store.fetch("https://wiki.test/wiki/Category:Garbled")

        self.assertIsInstance(ctx.exception.__cause__, UnicodeDecodeError)
        self.assertEqual(len(session.calls), 1)
        sleep_mock.assert_not_awaited()

    async def test_non_retryable_client_error_raises_transport_error(self):
        session = FakeSession([aiohttp.InvalidURL("x")])
        store = AiohttpDocumentStore(session, retries=3)

        with patch("src.scraper.infrastructure.http_store.asyncio.sleep", new=AsyncMock()) as sleep_mock:
            with self.assertRaises(TransportError):
                await store.fetch("x")

        self.assertEqual(len(session.calls), 1)
        sleep_mock.assert_not_awaited()


class RoutedSession:
    def __init__(self, routes):
        self.routes = routes

    def get(self, url, **kwargs):
        return self.routes[url]


class LenientCrawlOverStoreTests(unittest.IsolatedAsyncioTestCase):
    async def test_undecodable_category_does_not_abort_lenient_crawl(self):
        garbled = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        session = RoutedSession(
            {
                "https://wiki.test/wiki/Category:Root": FakeResponse(
                    text_data=category_page("/wiki/Category:Garbled", "/wiki/Leaf")
                ),
                "https://wiki.test/wiki/Category:Garbled": FakeResponse(text_data=garbled),
            }
        )
        fetcher = HtmlFetcher(AiohttpDocumentStore(session), base_url="https://wiki.test")

        hrefs = await CategoryCrawler(fetcher).get_nested_href("/wiki/Category:Root", strict=False)

        self.assertEqual(hrefs, ["/wiki/Leaf"])


if __name__ == "__main__":
    unittest.main()
